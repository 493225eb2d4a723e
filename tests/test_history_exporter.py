from __future__ import annotations

import csv
from datetime import date, datetime
import io

from wheel_app.core.history_exporter import (
    HEADER,
    default_export_filename,
    export_history_csv,
    render_history_csv,
)
from wheel_app.core.models import Donation, HistoryRow


def _row(title: str, amount: float, when: datetime) -> HistoryRow:
    donation = Donation(id=title, challenge_title=title, amount=amount, date=when)
    return HistoryRow(donation=donation, session_date=when.replace(hour=0, minute=0))


def test_header_plus_one_line_per_donation():
    rows = [
        _row("Collect 10 coins", 5.0, datetime(2026, 3, 14, 20, 15)),
        _row("Survive 5 minutes", 10.0, datetime(2026, 3, 13, 19, 0)),
    ]

    text = render_history_csv(rows)

    lines = text.splitlines()
    assert len(lines) == len(rows) + 1
    assert lines[0] == ",".join(HEADER)
    assert lines[1] == "14.03.2026,Collect 10 coins,5.00,14.03.2026"
    assert lines[2] == "13.03.2026,Survive 5 minutes,10.00,13.03.2026"


def test_titles_with_commas_and_quotes_are_escaped():
    title = 'Say "hi", then jump'
    text = render_history_csv([_row(title, 2.5, datetime(2026, 1, 2, 3, 4))])

    parsed = list(csv.reader(io.StringIO(text)))
    assert parsed[1][1] == title
    assert '"Say ""hi"", then jump"' in text


def test_empty_history_is_header_only():
    assert render_history_csv([]) == ",".join(HEADER) + "\n"


def test_export_writes_utf8_file(tmp_path):
    target = tmp_path / "exports" / "history.csv"

    export_history_csv(target, [_row("Kill the 🐉", 5, datetime(2026, 3, 14, 20, 0))])

    content = target.read_text(encoding="utf-8")
    assert "Kill the 🐉" in content
    assert "\r" not in content


def test_default_filename_uses_iso_date():
    assert default_export_filename(date(2026, 3, 14)) == "challenge-wheel-history-2026-03-14.csv"
