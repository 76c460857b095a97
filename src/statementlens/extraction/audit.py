"""Sanity checks over model output.

The checks only report. The result shown to the user is always the model's
output as returned.
"""
from dataclasses import dataclass
from typing import List

from statementlens.models import ExtractionResult

BALANCE_TOLERANCE = 0.01


@dataclass(frozen=True)
class RowIssue:
    """A suspicious transaction row."""
    index: int
    message: str


def audit_transactions(result: ExtractionResult) -> List[RowIssue]:
    """Flag rows that break the usual shape of a statement line."""
    issues: List[RowIssue] = []
    previous_balance = None

    for index, txn in enumerate(result.transactions):
        if txn.outflow < 0 or txn.inflow < 0:
            issues.append(RowIssue(index, f"negative amount on {txn.date}"))
        if txn.outflow and txn.inflow:
            issues.append(RowIssue(index, f"both outflow and inflow set on {txn.date}"))

        if previous_balance is not None:
            expected = previous_balance - txn.outflow + txn.inflow
            if abs(expected - txn.balance) > BALANCE_TOLERANCE:
                issues.append(RowIssue(
                    index,
                    f"balance {txn.balance} on {txn.date} does not follow from {previous_balance}"
                ))
        previous_balance = txn.balance

    return issues
