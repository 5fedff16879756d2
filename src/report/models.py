"""Data models for bucket classification and reporting."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, FrozenSet, List, Optional, Union

from ticketco.models import TransactionRecord


@dataclass(frozen=True)
class CapacityRule:
    """Match on the capacity (category) label alone."""
    bucket: str
    capacity_name: str

    def matches(self, record: TransactionRecord) -> bool:
        return record.capacity_name == self.capacity_name


@dataclass(frozen=True)
class ItemTitleRule:
    """Match on the exact product label, whatever the capacity."""
    bucket: str
    item_type_title: str

    def matches(self, record: TransactionRecord) -> bool:
        return record.item_type_title == self.item_type_title


@dataclass(frozen=True)
class ItemTypeIdsRule:
    """Match on capacity label plus a product type id allow-list."""
    bucket: str
    capacity_name: str
    item_type_ids: FrozenSet[int]

    def matches(self, record: TransactionRecord) -> bool:
        return (
            record.capacity_name == self.capacity_name
            and record.item_type_id in self.item_type_ids
        )


@dataclass(frozen=True)
class TitleContainsRule:
    """Match on capacity label plus a substring of the product label."""
    bucket: str
    capacity_name: str
    substring: str

    def matches(self, record: TransactionRecord) -> bool:
        return (
            record.capacity_name == self.capacity_name
            and self.substring in record.item_type_title
        )


ClassificationRule = Union[CapacityRule, ItemTitleRule, ItemTypeIdsRule, TitleContainsRule]


@dataclass
class BucketCounts:
    """Per-bucket counters for one run."""
    total: int = 0
    recent: int = 0


@dataclass(frozen=True)
class BucketSpec:
    """A declared report line: name and optional capacity floor."""
    name: str
    capacity: Optional[int] = None


@dataclass
class ReportTemplate:
    """Declared buckets and the ordered rules that fill them."""
    title: str
    buckets: List[BucketSpec]
    rules: List[ClassificationRule]

    @property
    def bucket_names(self) -> List[str]:
        return [bucket.name for bucket in self.buckets]

    @property
    def capacities(self) -> Dict[str, Optional[int]]:
        return {bucket.name: bucket.capacity for bucket in self.buckets}


@dataclass
class ReportSnapshot:
    """All-time totals at the end of one run."""
    event_id: str
    created_at: datetime
    totals: Dict[str, int] = field(default_factory=dict)
