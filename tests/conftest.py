# tests/conftest.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Test configuration and shared fixtures for pytest

"""Test configuration and shared fixtures for VCLog tests.

This module provides pytest configuration and fixtures for testing log
parsing, causality graph construction and motif search. It ensures proper
module path setup and provides common logs and patterns.
"""

import sys
from pathlib import Path

import pytest

# Ensure project modules can be imported
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Verify the project packages are importable before any test runs.

    Raises:
        pytest.skip: If required modules cannot be imported
    """
    try:
        import model
        import logparsing
        import motif
        import utils
    except ImportError as e:
        pytest.skip(f"Cannot import required modules: {e}")

    yield


@pytest.fixture
def event_pattern():
    """Event text on one line, host and clock on the next.

    Returns:
        str: Event pattern with clock/event/host groups
    """
    return r"(?P<event>.*)\n(?P<host>\S*) (?P<clock>\{.*\})"


@pytest.fixture
def request_reply_log():
    """Client/server exchange: client sends, server receives and replies.

    Returns:
        str: Raw log with 4 events on hosts client and server
    """
    return "\n".join(
        [
            "send request",
            'client {"client":1}',
            "receive request",
            'server {"client":1, "server":1}',
            "send reply",
            'server {"client":1, "server":2}',
            "receive reply",
            'client {"client":2, "server":2}',
        ]
    )


@pytest.fixture
def multi_execution_log():
    """Two labeled executions separated by '=== name ===' delimiters.

    Returns:
        str: Raw log containing executions 'first' and 'second'
    """
    return "\n".join(
        [
            "=== first ===",
            "start",
            'A {"A":1}',
            "=== second ===",
            "start",
            'B {"B":1}',
            "stop",
            'B {"B":2}',
        ]
    )
