"""CSV export for tabular ledger data."""

import csv
import io
from typing import Any, Mapping, Sequence

from .money import from_cents
from .projector import Statement


def to_csv(rows: Sequence[Mapping[str, Any]]) -> str:
    """
    Render rows as CSV text.

    The header is the keys of the first row. Every field is double-quoted
    with embedded quotes doubled, lines end with a bare newline and None
    becomes an empty quoted field. No rows give an empty string.
    """
    if not rows:
        return ""

    header = list(rows[0].keys())
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(header)
    for row in rows:
        writer.writerow(["" if row.get(key) is None else row.get(key) for key in header])
    return buffer.getvalue()


def statement_rows(statement: Statement) -> list:
    """Flatten statement rows, most recent first, for export."""
    return [
        {
            "date": row.effective_date.isoformat(),
            "description": row.entry.description,
            "kind": row.entry.kind.value,
            "status": row.display_status.value,
            "value": str(from_cents(row.value_cents)),
            "running_balance": str(from_cents(row.running_balance_cents)),
        }
        for row in statement.rows_latest_first
    ]
