"""Utility modules."""
from .logger import get_logger, configure_logger, set_event_context, get_data_dir
from .exceptions import (
    TicketReportError,
    ConfigError,
    TemplateError,
    NetworkError,
    PayloadError,
    StorageError,
    NotificationError
)

__all__ = [
    "get_logger",
    "configure_logger",
    "set_event_context",
    "get_data_dir",
    "TicketReportError",
    "ConfigError",
    "TemplateError",
    "NetworkError",
    "PayloadError",
    "StorageError",
    "NotificationError"
]
