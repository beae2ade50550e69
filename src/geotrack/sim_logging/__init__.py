"""Logging module with structured formatters and context management."""

from .context import ContextFilter, LogContext, log_context, log_session_context
from .filters import DefaultSessionFilter
from .formatters import DevFormatter, JSONFormatter
from .setup import get_logger, setup_logging

__all__ = [
    "setup_logging",
    "get_logger",
    "log_context",
    "log_session_context",
    "JSONFormatter",
    "DevFormatter",
    "DefaultSessionFilter",
    "LogContext",
    "ContextFilter",
]
