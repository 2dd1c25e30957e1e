"""Structured logging: JSON-lines file output, optional console, bound context."""
from .config import bootstrap_logging, shutdown_logging
from .context import context, get_context
from .levels import LogLevel, register_levels, to_level
from .logger import StructuredLogger, get_logger

__all__ = [
    "bootstrap_logging",
    "shutdown_logging",
    "context",
    "get_context",
    "LogLevel",
    "register_levels",
    "to_level",
    "StructuredLogger",
    "get_logger",
]
