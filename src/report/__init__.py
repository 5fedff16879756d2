"""Classification, aggregation and formatting of ticket sales."""
from .models import (
    BucketCounts,
    BucketSpec,
    CapacityRule,
    ItemTitleRule,
    ItemTypeIdsRule,
    TitleContainsRule,
    ReportSnapshot,
    ReportTemplate,
)
from .classifier import classify
from .aggregator import Aggregator
from .formatter import ReportFormatter, FormattedReport
from .template import load_template

__all__ = [
    "BucketCounts",
    "BucketSpec",
    "CapacityRule",
    "ItemTitleRule",
    "ItemTypeIdsRule",
    "TitleContainsRule",
    "ReportSnapshot",
    "ReportTemplate",
    "classify",
    "Aggregator",
    "ReportFormatter",
    "FormattedReport",
    "load_template",
]
