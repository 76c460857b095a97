"""CSV export of the extracted ledger."""
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Union

from statementlens.models import Transaction
from statementlens.utils.logger import get_logger

logger = get_logger()

CSV_HEADERS = ("Date", "Payment Information", "Outflow", "Inflow", "Balance")


def format_amount(value: float) -> str:
    """Plain number, no trailing ``.0`` on whole amounts."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def quote_field(text: str) -> str:
    return '"' + text.replace('"', '""') + '"'


def to_csv(transactions: Iterable[Transaction]) -> str:
    """
    Serialize transactions as CSV text.

    The description is always quoted; every other column is written bare.
    Rows are joined with ``\\n`` and there is no trailing newline.
    """
    lines = [",".join(CSV_HEADERS)]
    for txn in transactions:
        lines.append(",".join([
            txn.date,
            quote_field(txn.description),
            format_amount(txn.outflow),
            format_amount(txn.inflow),
            format_amount(txn.balance),
        ]))
    return "\n".join(lines)


def default_export_name(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"Statement_Export_{today.isoformat()}.csv"


def write_csv(transactions: Iterable[Transaction], path: Union[str, Path]) -> Path:
    """Write the CSV export to ``path`` (a directory gets the default name)."""
    path = Path(path)
    if path.is_dir():
        path = path / default_export_name()

    transactions = list(transactions)
    path.write_text(to_csv(transactions), encoding="utf-8")
    logger.info(f"Exported {len(transactions)} transactions to {path}")
    return path
