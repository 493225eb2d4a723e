"""Component for donation totals, history and CSV export."""

from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QAbstractItemView,
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from wheel_app.constants.ui_constants import (
    DONATION_DELETE_BUTTON,
    EXPORT_BUTTON,
    EXPORT_DIALOG_TITLE,
    EXPORT_FILE_FILTER,
    SESSION_RESET_BUTTON,
)
from wheel_app.core.history_exporter import HEADER, default_export_filename, export_history_csv
from wheel_app.core.models import DonationStats
from wheel_app.core.wheel_manager import WheelManager
from wheel_app.styling.styles import Styles
from wheel_app.ui.dialog_helpers import (
    confirm_delete_donation,
    confirm_reset_session,
    show_error,
    show_info,
)


class DonationsPanel(QWidget):
    """UI component listing every donation with session and lifetime totals."""

    def __init__(self, wheel_manager: WheelManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.wheel_manager = wheel_manager
        self._last_export_dir: Path | None = None

        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        stats_row = QHBoxLayout()
        session_group = QGroupBox("This session", self)
        session_layout = QVBoxLayout()
        session_group.setLayout(session_layout)
        self.session_label = QLabel(self)
        self.session_label.setStyleSheet(Styles.get_large_label_style())
        session_layout.addWidget(self.session_label)
        stats_row.addWidget(session_group)

        total_group = QGroupBox("All time", self)
        total_layout = QVBoxLayout()
        total_group.setLayout(total_layout)
        self.total_label = QLabel(self)
        self.total_label.setStyleSheet(Styles.get_large_label_style())
        total_layout.addWidget(self.total_label)
        stats_row.addWidget(total_group)
        layout.addLayout(stats_row)

        self.history_table = QTableWidget(0, len(HEADER), self)
        self.history_table.setHorizontalHeaderLabels(list(HEADER))
        self.history_table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.history_table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.history_table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.history_table.verticalHeader().setVisible(False)
        self.history_table.horizontalHeader().setSectionResizeMode(1, QHeaderView.Stretch)
        layout.addWidget(self.history_table, stretch=1)

        button_row = QHBoxLayout()
        self.delete_button = QPushButton(DONATION_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete_donation)
        button_row.addWidget(self.delete_button)

        self.reset_button = QPushButton(SESSION_RESET_BUTTON, self)
        self.reset_button.clicked.connect(self._handle_reset_session)
        button_row.addWidget(self.reset_button)

        button_row.addStretch()

        self.export_button = QPushButton(EXPORT_BUTTON, self)
        self.export_button.clicked.connect(self._handle_export)
        button_row.addWidget(self.export_button)
        layout.addLayout(button_row)

    def refresh(self) -> None:
        self.session_label.setText(_format_stats(self.wheel_manager.get_session_stats()))
        self.total_label.setText(_format_stats(self.wheel_manager.get_total_stats()))

        rows = self.wheel_manager.get_history()
        self.history_table.setRowCount(len(rows))
        for row_index, row in enumerate(rows):
            date_item = QTableWidgetItem(row.donation.date.strftime("%d.%m.%Y %H:%M"))
            date_item.setData(Qt.UserRole, row.donation.id)
            amount_item = QTableWidgetItem(f"{row.donation.amount:.2f}")
            amount_item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
            self.history_table.setItem(row_index, 0, date_item)
            self.history_table.setItem(row_index, 1, QTableWidgetItem(row.donation.challenge_title))
            self.history_table.setItem(row_index, 2, amount_item)
            self.history_table.setItem(row_index, 3, QTableWidgetItem(row.session_date.strftime("%d.%m.%Y")))
        self.export_button.setEnabled(bool(rows))

    def _handle_delete_donation(self) -> None:
        row = self.history_table.currentRow()
        if row < 0:
            return
        donation_id = self.history_table.item(row, 0).data(Qt.UserRole)
        title = self.history_table.item(row, 1).text()
        amount = float(self.history_table.item(row, 2).text())
        if confirm_delete_donation(self, title, amount):
            self.wheel_manager.delete_donation(donation_id)
            self.refresh()

    def _handle_reset_session(self) -> None:
        if confirm_reset_session(self):
            self.wheel_manager.reset_session()
            self.refresh()

    def _handle_export(self) -> None:
        rows = self.wheel_manager.get_history()
        default_dir = self._last_export_dir or Path.home()
        file_path, _ = QFileDialog.getSaveFileName(
            self,
            EXPORT_DIALOG_TITLE,
            str(default_dir / default_export_filename()),
            EXPORT_FILE_FILTER,
        )
        if not file_path:
            return

        try:
            export_history_csv(Path(file_path), rows)
        except OSError as exc:
            show_error(self, "Export failed", str(exc))
            return

        self._last_export_dir = Path(file_path).parent
        show_info(self, "History exported", f"{len(rows)} donations exported to {file_path}.")


def _format_stats(stats: DonationStats) -> str:
    return f"{stats.amount:.2f}  ·  {stats.challenges} failed"
