"""Tests for transaction aggregator."""
import random
import unittest
from datetime import datetime, timedelta, timezone

from ticketco.models import TransactionRecord
from report.aggregator import Aggregator
from report.models import CapacityRule, ItemTypeIdsRule

NOW = datetime(2025, 6, 10, 12, 0, tzinfo=timezone.utc)


def make_record(capacity_name, timestamp, item_type_id=None):
    return TransactionRecord(
        capacity_name=capacity_name,
        item_type_title="",
        item_type_id=item_type_id,
        timestamp=timestamp
    )


class TestAggregator(unittest.TestCase):
    """Test Aggregator functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.aggregator = Aggregator()
        self.rules = [
            CapacityRule(bucket="Parking", capacity_name="Parking"),
            CapacityRule(bucket="Sauna", capacity_name="Sauna"),
            ItemTypeIdsRule(bucket="Thursday", capacity_name="Festival Tickets", item_type_ids=frozenset({7})),
        ]

    def test_parking_scenario(self):
        """Recent and old parking plus one unmatched record."""
        records = [
            make_record("Parking", NOW),
            make_record("Parking", NOW - timedelta(days=2)),
            make_record("Unknown", NOW),
        ]

        result = self.aggregator.aggregate(records, self.rules, NOW)

        self.assertEqual(result["Parking"].total, 2)
        self.assertEqual(result["Parking"].recent, 1)
        self.assertEqual(result["Sauna"].total, 0)
        self.assertEqual(result["Thursday"].total, 0)
        self.assertNotIn("Unknown", result)

    def test_empty_records_declares_every_bucket(self):
        result = self.aggregator.aggregate([], self.rules, NOW)

        self.assertEqual(list(result), ["Parking", "Sauna", "Thursday"])
        for counts in result.values():
            self.assertEqual((counts.total, counts.recent), (0, 0))

    def test_bucket_names_set_order(self):
        result = self.aggregator.aggregate([], self.rules, NOW, bucket_names=["Thursday", "Parking", "Sauna"])
        self.assertEqual(list(result), ["Thursday", "Parking", "Sauna"])

    def test_window_boundary_is_inclusive(self):
        window = timedelta(hours=24)
        records = [
            make_record("Sauna", NOW - window),
            make_record("Sauna", NOW - window - timedelta(seconds=1)),
        ]

        result = self.aggregator.aggregate(records, self.rules, NOW, window)
        self.assertEqual(result["Sauna"].total, 2)
        self.assertEqual(result["Sauna"].recent, 1)

    def test_custom_window(self):
        records = [make_record("Sauna", NOW - timedelta(hours=3))]

        result = self.aggregator.aggregate(records, self.rules, NOW, timedelta(hours=2))
        self.assertEqual(result["Sauna"].recent, 0)

        result = self.aggregator.aggregate(records, self.rules, NOW, timedelta(hours=4))
        self.assertEqual(result["Sauna"].recent, 1)

    def test_naive_timestamps_are_utc(self):
        records = [make_record("Sauna", datetime(2025, 6, 10, 11, 0))]
        result = self.aggregator.aggregate(records, self.rules, NOW.replace(tzinfo=None))
        self.assertEqual(result["Sauna"].recent, 1)

    def test_recent_never_exceeds_total_and_order_independent(self):
        rng = random.Random(42)
        names = ["Parking", "Sauna", "Festival Tickets", "Other"]
        records = [
            make_record(
                rng.choice(names),
                NOW - timedelta(hours=rng.randint(0, 96)),
                item_type_id=rng.choice([7, 8])
            )
            for _ in range(200)
        ]

        first = self.aggregator.aggregate(records, self.rules, NOW)
        shuffled = list(records)
        rng.shuffle(shuffled)
        second = self.aggregator.aggregate(shuffled, self.rules, NOW)

        self.assertEqual(first, second)
        for counts in first.values():
            self.assertLessEqual(counts.recent, counts.total)
            self.assertGreaterEqual(counts.recent, 0)

    def test_idempotent(self):
        records = [make_record("Parking", NOW), make_record("Sauna", NOW - timedelta(days=3))]

        first = self.aggregator.aggregate(records, self.rules, NOW)
        second = self.aggregator.aggregate(records, self.rules, NOW)
        self.assertEqual(first, second)

    def test_accepts_generator(self):
        records = (make_record("Parking", NOW) for _ in range(3))
        result = self.aggregator.aggregate(records, self.rules, NOW)
        self.assertEqual(result["Parking"].total, 3)


if __name__ == "__main__":
    unittest.main()
