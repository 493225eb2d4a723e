"""Settings dialog for configuring donation, spin, hotkey and sound preferences."""

from __future__ import annotations

from dataclasses import replace

from PySide6.QtWidgets import (
    QComboBox,
    QDialog,
    QDoubleSpinBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
)

from wheel_app.constants.challenge_constants import SOUND_TYPES
from wheel_app.core.hotkeys import HOTKEY_ACTIONS, HOTKEY_LABELS
from wheel_app.core.models import Settings, SoundSettings


class SettingsDialog(QDialog):
    """Dialog for editing the persisted settings blob."""

    def __init__(self, settings: Settings, parent=None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Settings")
        self.setModal(True)
        self.setMinimumWidth(420)

        self._settings = settings
        self._hotkey_edits: dict[str, QLineEdit] = {}

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        # Donation & spin group
        challenge_group = QGroupBox("Challenges")
        challenge_form = QFormLayout()
        challenge_group.setLayout(challenge_form)

        self.donation_spinbox = QDoubleSpinBox()
        self.donation_spinbox.setRange(0.0, 10000.0)
        self.donation_spinbox.setDecimals(2)
        self.donation_spinbox.setSingleStep(0.5)
        self.donation_spinbox.setValue(self._settings.donation_amount)
        self.donation_spinbox.setToolTip("Amount donated when a challenge fails. Super challenges double it.")
        challenge_form.addRow("Donation amount:", self.donation_spinbox)

        self.super_chance_spinbox = QSpinBox()
        self.super_chance_spinbox.setRange(0, 100)
        self.super_chance_spinbox.setSuffix(" %")
        self.super_chance_spinbox.setValue(self._settings.super_chance)
        challenge_form.addRow("Super challenge chance:", self.super_chance_spinbox)

        self.animation_spinbox = QDoubleSpinBox()
        self.animation_spinbox.setRange(0.5, 30.0)
        self.animation_spinbox.setDecimals(1)
        self.animation_spinbox.setSuffix(" s")
        self.animation_spinbox.setValue(self._settings.animation_duration)
        self.animation_spinbox.setToolTip("How long the wheel spins before revealing the challenge.")
        challenge_form.addRow("Spin animation:", self.animation_spinbox)

        layout.addWidget(challenge_group)

        # Hotkeys group
        hotkey_group = QGroupBox("Hotkeys")
        hotkey_form = QFormLayout()
        hotkey_group.setLayout(hotkey_form)
        for action in HOTKEY_ACTIONS:
            edit = QLineEdit(self._settings.hotkeys.get(action, ""))
            edit.setPlaceholderText("e.g. F1 or Ctrl+Shift+S")
            self._hotkey_edits[action] = edit
            hotkey_form.addRow(f"{HOTKEY_LABELS[action]}:", edit)
        layout.addWidget(hotkey_group)

        # Sounds group
        sound_group = QGroupBox("Sounds")
        sound_form = QFormLayout()
        sound_group.setLayout(sound_form)
        self.spin_sound_combo = self._make_sound_combo(self._settings.sounds.spin_sound_type)
        self.progress_sound_combo = self._make_sound_combo(self._settings.sounds.progress_sound_type)
        self.warning_sound_combo = self._make_sound_combo(self._settings.sounds.warning_sound_type)
        sound_form.addRow("Spin:", self.spin_sound_combo)
        sound_form.addRow("Progress:", self.progress_sound_combo)
        sound_form.addRow("Time warning:", self.warning_sound_combo)
        layout.addWidget(sound_group)

        # Buttons
        button_row = QHBoxLayout()
        button_row.addStretch()

        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)  # type: ignore[arg-type]
        button_row.addWidget(self.cancel_button)

        self.apply_button = QPushButton("Apply")
        self.apply_button.clicked.connect(self.accept)  # type: ignore[arg-type]
        self.apply_button.setDefault(True)
        button_row.addWidget(self.apply_button)

        layout.addLayout(button_row)

    def _make_sound_combo(self, current: str) -> QComboBox:
        combo = QComboBox()
        for sound_type in SOUND_TYPES:
            combo.addItem(sound_type.capitalize(), sound_type)
        index = combo.findData(current)
        combo.setCurrentIndex(max(0, index))
        return combo

    def get_settings(self) -> Settings:
        """Return a new Settings built from the dialog fields."""
        return replace(
            self._settings,
            donation_amount=round(self.donation_spinbox.value(), 2),
            super_chance=self.super_chance_spinbox.value(),
            animation_duration=self.animation_spinbox.value(),
            hotkeys=self.get_hotkeys(),
            sounds=SoundSettings(
                spin_sound_type=self.spin_sound_combo.currentData(),
                progress_sound_type=self.progress_sound_combo.currentData(),
                warning_sound_type=self.warning_sound_combo.currentData(),
            ),
        )

    def get_hotkeys(self) -> dict[str, str]:
        return {action: edit.text().strip() for action, edit in self._hotkey_edits.items()}
