"""Configuration manager backed by environment variables and an optional .env file."""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .settings import AppSettings, get_settings
from utils.logger import get_data_dir


@dataclass
class Config:
    """Per-deployment configuration."""
    ticketco_api_key: str
    event_id: str
    slack_webhook_url: str
    database_path: str
    log_level: str = "INFO"
    template_path: Optional[str] = None
    max_pages: int = 500
    recency_hours: float = 24.0


class ConfigManager:
    """Builds the run configuration from the process environment."""

    def __init__(self, settings: Optional[AppSettings] = None, env_file: Optional[Path] = None):
        self.settings = settings or get_settings()
        self.env_file = env_file or self.settings.base_dir / ".env"

    def load_config(self, environ: Optional[Mapping[str, str]] = None) -> Config:
        """Read configuration values; .env entries never override real variables."""
        if environ is None:
            if self.env_file.exists():
                load_dotenv(self.env_file, override=False)
            environ = os.environ

        database_path = environ.get("TICKET_REPORT_DB") or str(get_data_dir() / self.settings.database_file)
        template_path = environ.get("TICKET_REPORT_TEMPLATE") or str(self.settings.resolve_template_path())

        return Config(
            ticketco_api_key=environ.get("TICKETCO_API_KEY", ""),
            event_id=environ.get("TICKETCO_EVENT_ID", ""),
            slack_webhook_url=environ.get("SLACK_WEBHOOK_URL", ""),
            database_path=database_path,
            log_level=environ.get("TICKET_REPORT_LOG_LEVEL", self.settings.log_level),
            template_path=template_path,
            max_pages=self.settings.ticketco_max_pages,
            recency_hours=self.settings.recency_hours
        )

    def validate_config(self, config: Config, require_webhook: bool = True) -> tuple[bool, str]:
        """Validate configuration values."""
        if not config.ticketco_api_key:
            return False, "TicketCo API key is required (TICKETCO_API_KEY)"

        if not config.event_id:
            return False, "TicketCo event ID is required (TICKETCO_EVENT_ID)"

        if require_webhook and not config.slack_webhook_url:
            return False, "Slack webhook URL is required (SLACK_WEBHOOK_URL)"

        if not config.template_path or not Path(config.template_path).exists():
            return False, f"Report template not found: {config.template_path}"

        if config.max_pages < 1:
            return False, "Page ceiling must be at least 1"

        if config.recency_hours <= 0:
            return False, "Recency window must be positive"

        return True, "Configuration is valid"
