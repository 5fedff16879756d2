"""Rule-based bucket classification of sold items."""
from typing import Optional, Sequence

from ticketco.models import TransactionRecord
from .models import ClassificationRule


def classify(record: TransactionRecord, rules: Sequence[ClassificationRule]) -> Optional[str]:
    """
    Return the bucket of the first rule matching the record.

    Rules are tried in order, so a record lands in at most one bucket.
    Records no rule matches return None and are simply not reported.
    """
    for rule in rules:
        if rule.matches(record):
            return rule.bucket
    return None
