"""Report run: fetch -> aggregate -> persist -> publish.

Each step runs once and in order. A failed fetch aborts the run before
anything is stored or sent, since a report built from part of the feed
would misstate what is sold out. Storage and Slack failures are logged
and do not stop the run.
"""
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from config.manager import Config
from notify.slack import SlackNotifier
from report.aggregator import Aggregator
from report.formatter import FormattedReport, ReportFormatter
from report.models import BucketCounts, ReportSnapshot, ReportTemplate
from storage.snapshot_store import SnapshotStore
from ticketco.paginator import PageSource, collect_records
from utils.logger import get_logger
from utils.exceptions import NotificationError, StorageError

logger = get_logger()


@dataclass
class RunResult:
    event_id: str
    pages_fetched: int = 0
    records_fetched: int = 0
    snapshot_saved: bool = False
    published: bool = False
    buckets: Optional[Dict[str, BucketCounts]] = None
    report: Optional[FormattedReport] = None


class ReportOrchestrator:
    """Runs one report for one event."""

    def __init__(
        self,
        config: Config,
        template: ReportTemplate,
        source: PageSource,
        store: Optional[SnapshotStore],
        notifier: Optional[SlackNotifier],
        aggregator: Optional[Aggregator] = None,
        formatter: Optional[ReportFormatter] = None
    ):
        self.config = config
        self.template = template
        self.source = source
        self.store = store
        self.notifier = notifier
        self.aggregator = aggregator or Aggregator()
        self.formatter = formatter or ReportFormatter(
            title=template.title,
            recency_hours=config.recency_hours
        )

    def run(self, now: Optional[datetime] = None, dry_run: bool = False) -> RunResult:
        """
        Run the report once.

        Args:
            now: Run start time, defaults to the current UTC time
            dry_run: Build the report but neither store nor publish it

        Returns:
            RunResult describing what happened
        """
        # Recency is measured from run start, not from when paging ends
        now = now or datetime.now(timezone.utc)
        result = RunResult(event_id=self.config.event_id)

        logger.info(f"Fetching sales for event {self.config.event_id}")
        records, result.pages_fetched = collect_records(self.source, self.config.max_pages)
        result.records_fetched = len(records)

        result.buckets = self.aggregator.aggregate(
            records,
            self.template.rules,
            now=now,
            recency_window=timedelta(hours=self.config.recency_hours),
            bucket_names=self.template.bucket_names
        )
        result.report = self.formatter.format(result.buckets, self.template.capacities)

        if dry_run:
            logger.info("Dry run: skipping snapshot and Slack")
            return result

        snapshot = ReportSnapshot(
            event_id=self.config.event_id,
            created_at=now,
            totals={name: counts.total for name, counts in result.buckets.items()}
        )
        result.snapshot_saved = self._save_snapshot(snapshot)
        result.published = self._publish(result.report)

        return result

    def _save_snapshot(self, snapshot: ReportSnapshot) -> bool:
        if self.store is None:
            logger.warning("No snapshot store available, totals not saved")
            return False
        try:
            self.store.save_snapshot(snapshot)
            return True
        except (StorageError, sqlite3.Error, OSError) as e:
            logger.error(f"Failed to save snapshot: {e}")
            return False

    def _publish(self, report: FormattedReport) -> bool:
        if self.notifier is None:
            logger.warning("No Slack webhook configured, report not sent")
            return False
        try:
            self.notifier.publish(report.to_slack_payload())
            return True
        except NotificationError as e:
            logger.error(f"Error sending report to Slack: {e}")
            return False
