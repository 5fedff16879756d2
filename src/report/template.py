"""Report template loading from YAML."""
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .models import (
    BucketSpec,
    CapacityRule,
    ClassificationRule,
    ItemTitleRule,
    ItemTypeIdsRule,
    ReportTemplate,
    TitleContainsRule,
)
from utils.logger import get_logger
from utils.exceptions import TemplateError

logger = get_logger()


def load_template(template_path: Path) -> ReportTemplate:
    """Load a report template file."""
    template_path = Path(template_path)
    if not template_path.exists():
        raise TemplateError(f"Report template not found: {template_path}")

    try:
        with open(template_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise TemplateError(f"Invalid YAML in {template_path}: {e}") from e

    template = parse_template(data or {})
    logger.debug(
        f"Loaded template '{template.title}' with {len(template.buckets)} buckets "
        f"and {len(template.rules)} rules"
    )
    return template


def parse_template(data: Dict[str, Any]) -> ReportTemplate:
    """Build a ReportTemplate from its mapping form."""
    title = data.get("title") or "Ticket Summary"

    buckets = [_parse_bucket(entry) for entry in data.get("buckets") or []]
    names = [bucket.name for bucket in buckets]
    if len(set(names)) != len(names):
        raise TemplateError("Bucket names must be unique")

    rules = [_parse_rule(entry) for entry in data.get("rules") or []]
    undeclared = sorted({rule.bucket for rule in rules} - set(names))
    if undeclared:
        raise TemplateError(f"Rules reference undeclared buckets: {', '.join(undeclared)}")

    return ReportTemplate(title=title, buckets=buckets, rules=rules)


def _parse_bucket(entry: Dict[str, Any]) -> BucketSpec:
    if not isinstance(entry, dict) or not entry.get("name"):
        raise TemplateError(f"Bucket entry needs a name: {entry!r}")

    capacity = entry.get("capacity")
    if capacity is not None:
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity < 0:
            raise TemplateError(f"Capacity of '{entry['name']}' must be a non-negative integer")
    return BucketSpec(name=str(entry["name"]), capacity=capacity)


def _parse_rule(entry: Dict[str, Any]) -> ClassificationRule:
    """Rules are tagged by their 'match' key."""
    if not isinstance(entry, dict):
        raise TemplateError(f"Rule entry must be a mapping: {entry!r}")

    kind = entry.get("match")
    bucket = entry.get("bucket")
    if not bucket:
        raise TemplateError(f"Rule needs a bucket: {entry!r}")

    try:
        if kind == "capacity":
            return CapacityRule(bucket=bucket, capacity_name=entry["capacity_name"])
        if kind == "item_title":
            return ItemTitleRule(bucket=bucket, item_type_title=entry["item_type_title"])
        if kind == "item_type_ids":
            ids: List[int] = [int(i) for i in entry["item_type_ids"]]
            return ItemTypeIdsRule(
                bucket=bucket,
                capacity_name=entry["capacity_name"],
                item_type_ids=frozenset(ids)
            )
        if kind == "title_contains":
            return TitleContainsRule(
                bucket=bucket,
                capacity_name=entry["capacity_name"],
                substring=entry["substring"]
            )
    except KeyError as e:
        raise TemplateError(f"Rule of kind '{kind}' is missing {e}") from e
    except (TypeError, ValueError) as e:
        raise TemplateError(f"Rule of kind '{kind}' has invalid item type ids: {e}") from e

    raise TemplateError(f"Unknown rule kind: {kind!r}")
