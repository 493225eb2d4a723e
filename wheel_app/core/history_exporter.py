"""Export of the donation history as CSV."""

from __future__ import annotations

import csv
from datetime import date, datetime
import io
from pathlib import Path

from wheel_app.core.models import HistoryRow

HEADER = ("Date", "Challenge", "Amount", "Session")
_DATE_FORMAT = "%d.%m.%Y"


def export_history_csv(file_path: Path, rows: list[HistoryRow]) -> None:
    """Write the donation history to ``file_path``."""
    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(render_history_csv(rows), encoding="utf-8", newline="")


def render_history_csv(rows: list[HistoryRow]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(HEADER)
    for row in rows:
        writer.writerow(
            (
                _format_date(row.donation.date),
                row.donation.challenge_title,
                f"{row.donation.amount:.2f}",
                _format_date(row.session_date),
            )
        )
    return buffer.getvalue()


def default_export_filename(today: date | None = None) -> str:
    today = today or date.today()
    return f"challenge-wheel-history-{today.isoformat()}.csv"


def _format_date(value: datetime) -> str:
    return value.strftime(_DATE_FORMAT)
