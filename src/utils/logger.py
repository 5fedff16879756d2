"""Logging infrastructure with event context."""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


def get_data_dir() -> Path:
    """Directory for logs and the default snapshot database."""
    home = os.getenv("TICKET_REPORT_HOME")
    if home:
        return Path(home).expanduser()
    return Path.home() / ".ticket_report"


class EventContextFilter(logging.Filter):
    """Add event context to log records."""

    def __init__(self):
        super().__init__()
        self.event_id: Optional[str] = None

    def filter(self, record):
        """Add event_id to record."""
        record.event_id = self.event_id or "-"
        return True


class TicketReportLogger:
    """Centralized logging manager."""

    def __init__(self, log_level: str = "INFO", max_bytes: int = 10 * 1024 * 1024, backup_count: int = 30):
        self.log_dir = get_data_dir() / "logs"
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / "report.log"
        self.event_filter = EventContextFilter()

        self.logger = logging.getLogger("ticket_report")
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
        self.logger.propagate = False

        # Remove existing handlers
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [event:%(event_id)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        file_handler.addFilter(self.event_filter)
        console_handler.addFilter(self.event_filter)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

    def set_level(self, log_level: str):
        """Change the logger level after startup (config is read after first import)."""
        self.logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    def set_event_context(self, event_id: Optional[str]):
        """Set current event context for logging."""
        self.event_filter.event_id = event_id

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[TicketReportLogger] = None


def get_logger(log_level: Optional[str] = None) -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        level = log_level or os.getenv("TICKET_REPORT_LOG_LEVEL", "INFO")
        _logger_instance = TicketReportLogger(level)
    elif log_level:
        _logger_instance.set_level(log_level)
    return _logger_instance.get_logger()


def set_event_context(event_id: Optional[str]):
    """Set event context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_event_context(event_id)


def configure_logger(log_level: str, max_file_size_mb: int, backup_count: int) -> logging.Logger:
    """Rebuild the global logger with settings from config.yaml."""
    global _logger_instance
    event_id = _logger_instance.event_filter.event_id if _logger_instance else None
    _logger_instance = TicketReportLogger(log_level, max_file_size_mb * 1024 * 1024, backup_count)
    _logger_instance.set_event_context(event_id)
    return _logger_instance.get_logger()
