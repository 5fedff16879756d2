"""Application settings loader from YAML configuration."""
import os
import yaml
from pathlib import Path
from dataclasses import dataclass, field

PROJECT_ROOT = Path(__file__).parent.parent.parent


def default_config_path() -> Path:
    """TICKET_REPORT_CONFIG if set, else config.yaml in the checkout."""
    override = os.getenv("TICKET_REPORT_CONFIG")
    if override:
        return Path(override)
    return PROJECT_ROOT / "config.yaml"


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_max_file_size_mb: int
    log_backup_count: int

    # TicketCo
    ticketco_endpoint: str
    ticketco_max_pages: int
    ticketco_timeout_seconds: float
    ticketco_include_pii: bool

    # Report
    recency_hours: float
    template_file: str

    # Slack
    slack_timeout_seconds: float

    # Paths
    database_file: str

    # Directory of the loaded config.yaml, relative paths resolve against it
    base_dir: Path = field(default=PROJECT_ROOT)

    @classmethod
    def load(cls, config_path: Path = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            config_path = default_config_path()
        config_path = Path(config_path).expanduser()

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)

        return cls(
            app_name=config["app"]["name"],
            app_version=config["app"]["version"],
            log_level=config["logging"]["level"],
            log_max_file_size_mb=config["logging"]["max_file_size_mb"],
            log_backup_count=config["logging"]["backup_count"],
            ticketco_endpoint=config["ticketco"]["endpoint"],
            ticketco_max_pages=int(config["ticketco"]["max_pages"]),
            ticketco_timeout_seconds=float(config["ticketco"]["request_timeout_seconds"]),
            ticketco_include_pii=bool(config["ticketco"].get("include_pii", False)),
            recency_hours=float(config["report"]["recency_hours"]),
            template_file=config["report"]["template_file"],
            slack_timeout_seconds=float(config["slack"]["request_timeout_seconds"]),
            database_file=config["paths"]["database_file"],
            base_dir=config_path.resolve().parent
        )

    def resolve_template_path(self) -> Path:
        """Template path, relative entries resolved against the config file directory."""
        path = Path(self.template_file).expanduser()
        if not path.is_absolute():
            path = self.base_dir / path
        return path


# Global settings instance
_settings: AppSettings = None


def get_settings() -> AppSettings:
    """Get or create global settings instance."""
    global _settings
    if _settings is None:
        _settings = AppSettings.load()
    return _settings
