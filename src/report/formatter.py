"""Slack summary formatting for bucket counts."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .models import BucketCounts
from utils.logger import get_logger

logger = get_logger()

EMPTY_SECTION_TEXT = "_None_"


@dataclass
class ReportLine:
    """One bucket as it appears in the report."""
    name: str
    total: int
    recent: int
    capacity: Optional[int] = None  # effective capacity, never below total

    @property
    def sold_out(self) -> bool:
        return self.capacity is not None and self.total >= self.capacity

    def render_total(self) -> str:
        if self.capacity is None:
            return f"• *{self.name}:*  {self.total}"
        return f"• *{self.name}:*  {self.total} / {self.capacity}"

    def render_recent(self) -> str:
        return f"• *{self.name}:* {self.recent}"


@dataclass
class FormattedReport:
    """Partitioned, sorted report ready to be rendered."""
    title: str
    recency_label: str
    recent: List[ReportLine] = field(default_factory=list)
    available: List[ReportLine] = field(default_factory=list)
    sold_out: List[ReportLine] = field(default_factory=list)

    def recent_text(self) -> str:
        return _join([line.render_recent() for line in self.recent])

    def available_text(self) -> str:
        return _join([line.render_total() for line in self.available])

    def sold_out_text(self) -> str:
        return _join([line.render_total() for line in self.sold_out])

    def to_slack_payload(self) -> Dict[str, Any]:
        """Slack Block Kit message."""
        return {
            "text": self.title,
            "blocks": [
                {
                    "type": "header",
                    "text": {"type": "plain_text", "text": self.title, "emoji": True},
                },
                {
                    "type": "section",
                    "text": {"type": "mrkdwn", "text": f"*{self.recency_label}*\n{self.recent_text()}"},
                },
                {
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": f"*All-Time Totals (Still Available)*\n{self.available_text()}",
                    },
                },
                {"type": "divider"},
                {
                    "type": "section",
                    "text": {
                        "type": "mrkdwn",
                        "text": f"*All-Time Totals (Sold Out)* :white_check_mark: \n{self.sold_out_text()}",
                    },
                },
            ],
        }

    def to_text(self) -> str:
        """Plain rendering for logs and --dry-run."""
        return (
            f"{self.title}\n\n"
            f"{self.recency_label}\n{self.recent_text()}\n\n"
            f"All-Time Totals (Still Available)\n{self.available_text()}\n\n"
            f"All-Time Totals (Sold Out)\n{self.sold_out_text()}"
        )


def _join(lines: List[str]) -> str:
    return "\n".join(lines) if lines else EMPTY_SECTION_TEXT


def effective_capacity(capacity: Optional[int], total: int) -> Optional[int]:
    """Raise the capacity floor to the total so nothing shows as oversold."""
    if capacity is None:
        return None
    return max(capacity, total)


def recency_label(recency_hours: float) -> str:
    hours = int(recency_hours) if float(recency_hours).is_integer() else recency_hours
    if hours == 1:
        return "Last Hour"
    return f"Last {hours} Hours"


class ReportFormatter:
    """Builds the summary from aggregated bucket counts."""

    def __init__(self, title: str = "Ticket Summary", recency_hours: float = 24):
        self.title = title
        self.recency_hours = recency_hours

    def format(
        self,
        buckets: Mapping[str, BucketCounts],
        capacities: Optional[Mapping[str, Optional[int]]] = None
    ) -> FormattedReport:
        """
        Partition buckets into available and sold out.

        Args:
            buckets: Ordered bucket name -> counts; order breaks ties
            capacities: Optional capacity floor per bucket name

        Returns:
            FormattedReport with every bucket in either available or sold_out
        """
        capacities = capacities or {}

        lines = [
            ReportLine(
                name=name,
                total=counts.total,
                recent=counts.recent,
                capacity=effective_capacity(capacities.get(name), counts.total)
            )
            for name, counts in buckets.items()
        ]
        # sorted() is stable, ties keep declaration order
        lines = sorted(lines, key=lambda line: line.total)

        for line in lines:
            if not line.total:
                logger.debug(f"No sales yet for {line.name}")

        return FormattedReport(
            title=self.title,
            recency_label=recency_label(self.recency_hours),
            recent=[line for line in lines if line.recent > 0],
            available=[line for line in lines if not line.sold_out],
            sold_out=[line for line in lines if line.sold_out]
        )
