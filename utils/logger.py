# utils/logger.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Logging utility for log parsing and motif search with configurable levels

import logging
import sys
from enum import Enum
from typing import Optional


class LogLevel(Enum):
    """Log levels for VCLog."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class VCLogLogger:
    """Centralized logger for log parsing and motif search with structured output."""

    def __init__(self, name: str = "vclog", level: LogLevel = LogLevel.WARNING):
        """Initialize the VCLog logger.

        Args:
            name: Logger name
            level: Default logging level
        """
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level.value)

        # Remove existing handlers to avoid duplicates
        self.logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level.value)
        console_handler.setFormatter(VCLogFormatter())

        self.logger.addHandler(console_handler)

        # Prevent propagation to root logger
        self.logger.propagate = False

    def set_level(self, level: LogLevel):
        """Change the logging level."""
        self.logger.setLevel(level.value)
        for handler in self.logger.handlers:
            handler.setLevel(level.value)

    def is_debug(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def debug(self, message: str, **kwargs):
        """Search frames, edges and parser internals."""
        self.logger.debug(message, **kwargs)

    def info(self, message: str, **kwargs):
        """Results and summaries shown by the CLI."""
        self.logger.info(message, **kwargs)

    def warning(self, message: str, **kwargs):
        """Suspicious input that does not stop processing."""
        self.logger.warning(message, **kwargs)

    def error(self, message: str, **kwargs):
        """Failures that end the current command."""
        self.logger.error(message, **kwargs)

    # Pipeline helpers
    def execution_parsed(self, label: str, event_count: int):
        """Log the result of parsing one execution."""
        shown = label if label else "<unlabeled>"
        self.debug(f"Execution {shown}: {event_count} events parsed")

    def graph_built(self, node_count: int, host_count: int, edge_count: int):
        """Log causality graph construction."""
        self.debug(
            f"Causality graph built: {node_count} nodes on {host_count} hosts, "
            f"{edge_count} cross-host edges"
        )

    def search_start(self, pattern_size: int, pattern_hosts: int, graph_size: int):
        """Log motif search start."""
        self.debug(
            f"🔍 Motif search: {pattern_size} pattern nodes on {pattern_hosts} hosts "
            f"against {graph_size} events"
        )

    def frame_debug(self, depth: int, pattern_id: int, node_id: Optional[int]):
        """Log a tentative assignment during search."""
        target = "exhausted" if node_id is None else f"-> {node_id}"
        self.debug(f"    {'  ' * depth}pattern {pattern_id} {target}")

    def match_found(self, node_ids: str, steps: int):
        """Log a successful match."""
        self.debug(f"    🎉 Match found after {steps} steps: {node_ids}")

    def search_exhausted(self, steps: int):
        """Log a search without a match."""
        self.debug(f"    💥 No match after {steps} steps")

    def validation_result(self, success: bool, message: str = ""):
        """Log validation results."""
        if success:
            self.info(f"✅ {message}" if message else "✅ Validation successful")
        else:
            self.error(f"❌ {message}" if message else "❌ Validation failed")


class VCLogFormatter(logging.Formatter):
    """Custom formatter for VCLog logging with clean output."""

    def format(self, record):
        # For INFO level and above, show message only (clean output)
        if record.levelno >= logging.INFO:
            return record.getMessage()

        # For DEBUG level, show with level indicator
        if record.levelno == logging.DEBUG:
            return f"[DEBUG] {record.getMessage()}"

        return f"[{record.levelname}] {record.getMessage()}"


# Global logger instance, created at import so that library calls only read it
_global_logger: VCLogLogger = VCLogLogger()


def get_logger() -> VCLogLogger:
    """Get the global VCLog logger instance.

    Returns:
        VCLogLogger instance
    """
    return _global_logger


def set_log_level(level: LogLevel):
    """Set the global log level.

    Args:
        level: New log level
    """
    get_logger().set_level(level)


def configure_logging(verbose: bool = False, debug: bool = False):
    """Configure logging based on command line flags.

    Args:
        verbose: Enable verbose (INFO) output
        debug: Enable debug output (overrides verbose)
    """
    if debug:
        set_log_level(LogLevel.DEBUG)
    elif verbose:
        set_log_level(LogLevel.INFO)
    else:
        set_log_level(LogLevel.WARNING)
