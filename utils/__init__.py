# utils/__init__.py
# This file is part of VCLog - Vector Clock Log Analysis
#
# Utility module exports

from .logger import (
    LogLevel,
    VCLogLogger,
    get_logger,
    set_log_level,
    configure_logging,
)

__all__ = [
    "LogLevel",
    "VCLogLogger",
    "get_logger",
    "set_log_level",
    "configure_logging",
]
