"""Transaction aggregation module."""
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence

from ticketco.models import TransactionRecord
from .classifier import classify
from .models import BucketCounts, ClassificationRule
from utils.logger import get_logger

logger = get_logger()

DEFAULT_RECENCY_WINDOW = timedelta(hours=24)


class Aggregator:
    """Counts sold items per bucket, all-time and inside a trailing window."""

    def aggregate(
        self,
        records: Iterable[TransactionRecord],
        rules: Sequence[ClassificationRule],
        now: datetime,
        recency_window: timedelta = DEFAULT_RECENCY_WINDOW,
        bucket_names: Optional[Sequence[str]] = None
    ) -> Dict[str, BucketCounts]:
        """
        Aggregate records into bucket counts.

        Args:
            records: All-time records of the event
            rules: Ordered classification rules
            now: Run start time; naive values are taken as UTC
            recency_window: Trailing window for the recent counts
            bucket_names: Declared buckets in report order; defaults to rule order

        Returns:
            Ordered mapping bucket name -> BucketCounts, every declared bucket present
        """
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        cutoff = now - recency_window

        names = list(bucket_names) if bucket_names is not None else self._names_from_rules(rules)
        counts: Dict[str, BucketCounts] = {name: BucketCounts() for name in names}

        processed = 0
        skipped = 0
        for record in records:
            processed += 1
            bucket = classify(record, rules)
            if bucket is None:
                skipped += 1
                continue

            # Rules may name a bucket the caller did not declare
            entry = counts.setdefault(bucket, BucketCounts())
            entry.total += 1
            timestamp = record.timestamp
            if timestamp.tzinfo is None:
                timestamp = timestamp.replace(tzinfo=timezone.utc)
            if timestamp >= cutoff:
                entry.recent += 1

        logger.info(
            f"Aggregated {processed} records into {len(counts)} buckets "
            f"({skipped} unclassified)"
        )
        return counts

    @staticmethod
    def _names_from_rules(rules: Sequence[ClassificationRule]) -> List[str]:
        """Bucket names in first-appearance order."""
        return list(dict.fromkeys(rule.bucket for rule in rules))
