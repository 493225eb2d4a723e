"""Dialog for creating or editing a challenge template."""

from __future__ import annotations

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from wheel_app.constants.challenge_constants import DEFAULT_TIME_LIMIT_SECONDS, MIN_TIME_LIMIT_SECONDS
from wheel_app.constants.ui_constants import EMOJI_PRESETS
from wheel_app.core.models import Challenge, ChallengeDraft, ChallengeType


class ChallengeDialog(QDialog):
    """Collects the fields of a ``ChallengeDraft``; validation happens in the registry."""

    def __init__(self, challenge: Challenge | None = None, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Edit Challenge" if challenge else "New Challenge")
        self.setModal(True)
        self.setMinimumWidth(380)

        self._challenge = challenge
        self._build_ui()
        if challenge is not None:
            self._populate(challenge)
        self._update_target_enabled()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        form = QFormLayout()
        self.title_edit = QLineEdit()
        self.title_edit.setPlaceholderText("e.g. Collect 10 coins")
        form.addRow("Title:", self.title_edit)

        self.image_combo = QComboBox()
        self.image_combo.setEditable(True)
        self.image_combo.addItems(list(EMOJI_PRESETS))
        form.addRow("Icon:", self.image_combo)

        self.type_combo = QComboBox()
        for challenge_type in ChallengeType:
            self.type_combo.addItem(challenge_type.label, challenge_type)
        self.type_combo.currentIndexChanged.connect(self._update_target_enabled)
        form.addRow("Type:", self.type_combo)

        self.target_spinbox = QSpinBox()
        self.target_spinbox.setRange(0, 100000)
        self.target_spinbox.setValue(10)
        form.addRow("Target:", self.target_spinbox)

        self.time_spinbox = QSpinBox()
        self.time_spinbox.setRange(MIN_TIME_LIMIT_SECONDS, 24 * 60 * 60)
        self.time_spinbox.setSingleStep(30)
        self.time_spinbox.setSuffix(" s")
        self.time_spinbox.setValue(DEFAULT_TIME_LIMIT_SECONDS)
        form.addRow("Time limit:", self.time_spinbox)

        layout.addLayout(form)

        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.save_button = QPushButton("Save")
        self.save_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.save_button.setDefault(True)
        button_row.addWidget(self.save_button)

        layout.addLayout(button_row)

    def _populate(self, challenge: Challenge) -> None:
        self.title_edit.setText(challenge.title)
        self.image_combo.setCurrentText(challenge.image)
        self.type_combo.setCurrentIndex(self.type_combo.findData(challenge.type))
        self.target_spinbox.setValue(challenge.target)
        self.time_spinbox.setValue(challenge.time_limit)

    def _update_target_enabled(self) -> None:
        # Survive challenges have no progress counter.
        self.target_spinbox.setEnabled(self.type_combo.currentData() is not ChallengeType.SURVIVE)

    def get_draft(self) -> ChallengeDraft:
        return ChallengeDraft(
            title=self.title_edit.text().strip(),
            image=self.image_combo.currentText().strip(),
            type=self.type_combo.currentData(),
            target=self.target_spinbox.value(),
            time_limit=self.time_spinbox.value(),
        )
