"""Custom exception classes for the ticket sales report."""


class TicketReportError(Exception):
    """Base exception for the ticket sales report."""
    pass


class ConfigError(TicketReportError):
    """Configuration-related errors."""
    pass


class TemplateError(ConfigError):
    """Report template could not be loaded or is inconsistent."""
    pass


class NetworkError(TicketReportError):
    """Network and API-related errors."""
    pass


class PayloadError(NetworkError):
    """Upstream returned a page that could not be parsed."""
    pass


class StorageError(TicketReportError):
    """Snapshot persistence errors."""
    pass


class NotificationError(TicketReportError):
    """Webhook delivery errors."""
    pass
