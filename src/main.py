"""Report entry point."""
import sys
import json
import argparse
import sqlite3
from typing import Optional

from config.manager import Config, ConfigManager
from config.settings import get_settings
from notify.slack import SlackNotifier
from orchestrator.processor import ReportOrchestrator, RunResult
from report.template import load_template
from storage.snapshot_store import SnapshotStore
from ticketco.client import TicketCoClient
from utils.logger import configure_logger, get_logger, set_event_context
from utils.exceptions import StorageError

logger = get_logger()


def list_snapshots_command(config: Config, limit: Optional[int]) -> None:
    """Print stored snapshots for the configured event, newest first."""
    store = SnapshotStore(config.database_path)
    snapshots = store.list_snapshots(config.event_id or None, limit=limit)

    if not snapshots:
        print("No snapshots found.")
        return

    print(f"\nTotal: {len(snapshots)} snapshots")
    for snapshot in snapshots:
        print(f"\n{snapshot.created_at.strftime('%Y-%m-%d %H:%M:%S')}  event {snapshot.event_id}")
        print("-" * 60)
        for name, total in snapshot.totals.items():
            print(f"  {name:<48} {total:>6}")


def clear_snapshots_command(config: Config) -> None:
    """Delete stored snapshots for the configured event (all events if unset)."""
    store = SnapshotStore(config.database_path)
    deleted = store.clear(config.event_id or None)

    if config.event_id:
        print(f"✓ Deleted {deleted} snapshots for event: {config.event_id}")
    else:
        print(f"✓ Deleted {deleted} snapshots (all events)")


def _load_and_validate_config(require_webhook: bool) -> Config:
    """Load configuration, exit if it is unusable."""
    config_manager = ConfigManager()
    config = config_manager.load_config()
    settings = config_manager.settings
    configure_logger(config.log_level, settings.log_max_file_size_mb, settings.log_backup_count)

    is_valid, message = config_manager.validate_config(config, require_webhook=require_webhook)
    if not is_valid:
        logger.critical(f"Invalid configuration: {message}")
        sys.exit(1)

    logger.info("Configuration loaded successfully")
    return config


def _open_store(config: Config) -> Optional[SnapshotStore]:
    """Snapshot store, or None when the database cannot be opened."""
    try:
        return SnapshotStore(config.database_path)
    except (StorageError, sqlite3.Error, OSError) as e:
        logger.error(f"Snapshot store unavailable ({config.database_path}): {e}")
        return None


def run_command(config: Config, dry_run: bool = False) -> RunResult:
    """Build the collaborators and run one report."""
    settings = get_settings()
    template = load_template(config.template_path)

    client = TicketCoClient(
        api_key=config.ticketco_api_key,
        event_id=config.event_id,
        endpoint=settings.ticketco_endpoint,
        timeout=settings.ticketco_timeout_seconds,
        include_pii=settings.ticketco_include_pii
    )
    store = None if dry_run else _open_store(config)
    notifier = None
    if not dry_run and config.slack_webhook_url:
        notifier = SlackNotifier(config.slack_webhook_url, timeout=settings.slack_timeout_seconds)

    orchestrator = ReportOrchestrator(config, template, client, store, notifier)
    try:
        result = orchestrator.run(dry_run=dry_run)
    finally:
        client.close()
        if notifier:
            notifier.close()

    if dry_run:
        print(result.report.to_text())
        print()
        print(json.dumps(result.report.to_slack_payload(), indent=2, ensure_ascii=False))

    logger.info(
        f"Run complete: {result.pages_fetched} pages, "
        f"{result.records_fetched} records, "
        f"snapshot saved: {result.snapshot_saved}, "
        f"published: {result.published}"
    )
    return result


def main(argv=None):
    """Main entry point for the ticket sales report."""
    parser = argparse.ArgumentParser(description="TicketCo sales report for Slack")
    parser.add_argument(
        "command",
        nargs="?",
        choices=["run", "list-snapshots", "clear-snapshots"],
        default="run",
        help="Command to execute (default: run)"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the report instead of saving and sending it"
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=10,
        help="Number of snapshots to show (list-snapshots)"
    )

    args = parser.parse_args(argv)

    try:
        if args.command in ("list-snapshots", "clear-snapshots"):
            config = ConfigManager().load_config()
            if args.command == "list-snapshots":
                list_snapshots_command(config, args.limit)
            else:
                clear_snapshots_command(config)
            return

        logger.info("Ticket sales report starting...")
        config = _load_and_validate_config(require_webhook=not args.dry_run)
        set_event_context(config.event_id)
        run_command(config, dry_run=args.dry_run)
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt")
    except Exception as e:
        logger.critical(f"Fatal error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
