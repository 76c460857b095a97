"""Plain-text rendering of a result: summary cards and ledger table."""
from decimal import Decimal, ROUND_HALF_UP
from typing import List

from statementlens.models import ExtractionResult, Summary

RUPEE = "₹"


def _group_indian(digits: str) -> str:
    """Group an integer string the Indian way: last three, then pairs."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: float) -> str:
    """Format rupees with lakh/crore grouping, e.g. ``₹1,23,456.70``."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    rupees, paise = f"{abs(value):.2f}".split(".")
    return f"{sign}{RUPEE}{_group_indian(rupees)}.{paise}"


def render_summary(summary: Summary) -> str:
    return "\n".join([
        f"Total Spent:    {format_inr(summary.total_spend)}",
        f"Total Received: {format_inr(summary.total_received)}",
    ])


def render_ledger(result: ExtractionResult) -> str:
    """
    Render the transaction history as a fixed-width table.

    Each row shows a single signed amount: outflows as ``-``, inflows as ``+``.
    """
    if not result.transactions:
        return "No transactions found."

    desc_width = min(max(len(t.description) for t in result.transactions), 48)
    desc_width = max(desc_width, len("Payment Information"))

    lines: List[str] = [
        f"{'Date':<10}  {'Payment Information':<{desc_width}}  {'Transaction':>16}  {'Balance':>16}",
        "-" * (10 + desc_width + 16 + 16 + 6),
    ]
    for txn in result.transactions:
        description = txn.description
        if len(description) > desc_width:
            description = description[:desc_width - 3] + "..."
        if txn.outflow:
            amount = "-" + format_inr(txn.outflow)
        else:
            amount = "+" + format_inr(txn.inflow)
        lines.append(
            f"{txn.date:<10}  {description:<{desc_width}}  {amount:>16}  {format_inr(txn.balance):>16}"
        )
    return "\n".join(lines)
