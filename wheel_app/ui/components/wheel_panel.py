"""Component for managing wheels and their challenge lists."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QInputDialog,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from wheel_app.constants.ui_constants import (
    CHALLENGE_ADD_BUTTON,
    CHALLENGE_DELETE_BUTTON,
    CHALLENGE_EDIT_BUTTON,
    NO_WHEEL_SELECTED_MESSAGE,
    SPIN_BUTTON,
    WHEEL_ACTIVATE_BUTTON,
    WHEEL_DELETE_BUTTON,
    WHEEL_NEW_BUTTON,
    WHEEL_RENAME_BUTTON,
)
from wheel_app.core.models import Challenge, ChallengeType
from wheel_app.core.wheel_manager import WheelManager
from wheel_app.ui.challenge_dialog import ChallengeDialog
from wheel_app.ui.dialog_helpers import (
    confirm_delete_challenge,
    confirm_delete_wheel,
    show_warning,
)


class WheelPanel(QWidget):
    """UI component listing wheels on the left and the selected wheel's challenges on the right."""

    def __init__(
        self,
        wheel_manager: WheelManager,
        on_spin: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.wheel_manager = wheel_manager
        self.on_spin = on_spin

        self._build_ui()
        self.refresh()

    def _build_ui(self) -> None:
        layout = QHBoxLayout()
        self.setLayout(layout)

        # Wheels column
        wheel_group = QGroupBox("Wheels", self)
        wheel_layout = QVBoxLayout()
        wheel_group.setLayout(wheel_layout)

        self.wheel_list = QListWidget(self)
        self.wheel_list.currentItemChanged.connect(self._handle_wheel_selected)
        wheel_layout.addWidget(self.wheel_list)

        wheel_buttons = QHBoxLayout()
        self.new_wheel_button = QPushButton(WHEEL_NEW_BUTTON, self)
        self.new_wheel_button.clicked.connect(self._handle_new_wheel)
        wheel_buttons.addWidget(self.new_wheel_button)

        self.rename_wheel_button = QPushButton(WHEEL_RENAME_BUTTON, self)
        self.rename_wheel_button.clicked.connect(self._handle_rename_wheel)
        wheel_buttons.addWidget(self.rename_wheel_button)

        self.delete_wheel_button = QPushButton(WHEEL_DELETE_BUTTON, self)
        self.delete_wheel_button.clicked.connect(self._handle_delete_wheel)
        wheel_buttons.addWidget(self.delete_wheel_button)
        wheel_layout.addLayout(wheel_buttons)

        self.activate_wheel_button = QPushButton(WHEEL_ACTIVATE_BUTTON, self)
        self.activate_wheel_button.clicked.connect(self._handle_activate_wheel)
        wheel_layout.addWidget(self.activate_wheel_button)

        layout.addWidget(wheel_group, stretch=1)

        # Challenges column
        challenge_group = QGroupBox("Challenges", self)
        challenge_layout = QVBoxLayout()
        challenge_group.setLayout(challenge_layout)

        self.challenge_list = QListWidget(self)
        self.challenge_list.itemDoubleClicked.connect(lambda _item: self._handle_edit_challenge())
        challenge_layout.addWidget(self.challenge_list)

        challenge_buttons = QHBoxLayout()
        self.add_challenge_button = QPushButton(CHALLENGE_ADD_BUTTON, self)
        self.add_challenge_button.clicked.connect(self._handle_add_challenge)
        challenge_buttons.addWidget(self.add_challenge_button)

        self.edit_challenge_button = QPushButton(CHALLENGE_EDIT_BUTTON, self)
        self.edit_challenge_button.clicked.connect(self._handle_edit_challenge)
        challenge_buttons.addWidget(self.edit_challenge_button)

        self.delete_challenge_button = QPushButton(CHALLENGE_DELETE_BUTTON, self)
        self.delete_challenge_button.clicked.connect(self._handle_delete_challenge)
        challenge_buttons.addWidget(self.delete_challenge_button)
        challenge_layout.addLayout(challenge_buttons)

        self.spin_button = QPushButton(SPIN_BUTTON, self)
        self.spin_button.setObjectName("primaryButton")
        self.spin_button.clicked.connect(self._handle_spin)
        challenge_layout.addWidget(self.spin_button)

        layout.addWidget(challenge_group, stretch=2)

    # --- Refresh ---

    def refresh(self, select_wheel_id: str | None = None) -> None:
        """Rebuild both lists from the manager, keeping the selection where possible."""
        selected_id = select_wheel_id or self.selected_wheel_id() or self.wheel_manager.get_active_wheel_id()
        active_id = self.wheel_manager.get_active_wheel_id()

        self.wheel_list.blockSignals(True)
        self.wheel_list.clear()
        row_to_select = 0
        for row, wheel in enumerate(self.wheel_manager.get_wheels()):
            marker = "★ " if wheel.id == active_id else ""
            item = QListWidgetItem(f"{marker}{wheel.name} ({len(wheel.challenges)})")
            item.setData(Qt.UserRole, wheel.id)
            self.wheel_list.addItem(item)
            if wheel.id == selected_id:
                row_to_select = row
        if self.wheel_list.count():
            self.wheel_list.setCurrentRow(row_to_select)
        self.wheel_list.blockSignals(False)

        self._refresh_challenges()

    def _refresh_challenges(self) -> None:
        self.challenge_list.clear()
        wheel = self.wheel_manager.get_wheel(self.selected_wheel_id())
        has_wheel = wheel is not None
        for button in (
            self.rename_wheel_button,
            self.delete_wheel_button,
            self.activate_wheel_button,
            self.add_challenge_button,
            self.edit_challenge_button,
            self.delete_challenge_button,
            self.spin_button,
        ):
            button.setEnabled(has_wheel)
        if wheel is None:
            return
        for challenge in wheel.challenges:
            item = QListWidgetItem(_describe_challenge(challenge))
            item.setData(Qt.UserRole, challenge.id)
            self.challenge_list.addItem(item)

    def selected_wheel_id(self) -> str | None:
        item = self.wheel_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else None

    def selected_challenge_id(self) -> str | None:
        item = self.challenge_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else None

    def set_spin_enabled(self, enabled: bool) -> None:
        self.spin_button.setEnabled(enabled and self.selected_wheel_id() is not None)

    # --- Wheel handlers ---

    def _handle_wheel_selected(self, *_args) -> None:
        self._refresh_challenges()

    def _handle_new_wheel(self) -> None:
        name, ok = QInputDialog.getText(self, WHEEL_NEW_BUTTON, "Wheel name:")
        if not ok:
            return
        try:
            wheel = self.wheel_manager.create_wheel(name)
        except ValueError as exc:
            show_warning(self, "Invalid wheel", str(exc))
            return
        self.refresh(select_wheel_id=wheel.id)

    def _handle_rename_wheel(self) -> None:
        wheel = self.wheel_manager.get_wheel(self.selected_wheel_id())
        if wheel is None:
            show_warning(self, "No wheel", NO_WHEEL_SELECTED_MESSAGE)
            return
        name, ok = QInputDialog.getText(self, WHEEL_RENAME_BUTTON, "Wheel name:", text=wheel.name)
        if not ok:
            return
        try:
            self.wheel_manager.rename_wheel(wheel.id, name)
        except ValueError as exc:
            show_warning(self, "Invalid wheel", str(exc))
            return
        self.refresh(select_wheel_id=wheel.id)

    def _handle_delete_wheel(self) -> None:
        wheel = self.wheel_manager.get_wheel(self.selected_wheel_id())
        if wheel is None:
            return
        if confirm_delete_wheel(self, wheel.name):
            self.wheel_manager.delete_wheel(wheel.id)
            self.refresh(select_wheel_id=self.wheel_manager.get_active_wheel_id())

    def _handle_activate_wheel(self) -> None:
        wheel_id = self.selected_wheel_id()
        if wheel_id is None:
            return
        self.wheel_manager.set_active_wheel(wheel_id)
        self.refresh(select_wheel_id=wheel_id)

    # --- Challenge handlers ---

    def _handle_add_challenge(self) -> None:
        wheel_id = self.selected_wheel_id()
        if wheel_id is None:
            show_warning(self, "No wheel", NO_WHEEL_SELECTED_MESSAGE)
            return
        dialog = ChallengeDialog(parent=self)
        while dialog.exec():
            try:
                self.wheel_manager.add_challenge(wheel_id, dialog.get_draft())
            except ValueError as exc:
                show_warning(self, "Invalid challenge", str(exc))
                continue
            break
        self.refresh(select_wheel_id=wheel_id)

    def _handle_edit_challenge(self) -> None:
        wheel_id = self.selected_wheel_id()
        challenge_id = self.selected_challenge_id()
        if wheel_id is None or challenge_id is None:
            return
        challenge = self.wheel_manager.get_challenge(wheel_id, challenge_id)
        if challenge is None:
            return
        dialog = ChallengeDialog(challenge, parent=self)
        while dialog.exec():
            try:
                self.wheel_manager.update_challenge(wheel_id, challenge_id, dialog.get_draft())
            except ValueError as exc:
                show_warning(self, "Invalid challenge", str(exc))
                continue
            break
        self.refresh(select_wheel_id=wheel_id)

    def _handle_delete_challenge(self) -> None:
        wheel_id = self.selected_wheel_id()
        challenge_id = self.selected_challenge_id()
        if wheel_id is None or challenge_id is None:
            return
        challenge = self.wheel_manager.get_challenge(wheel_id, challenge_id)
        if challenge is None:
            return
        if confirm_delete_challenge(self, challenge.title):
            self.wheel_manager.delete_challenge(wheel_id, challenge_id)
            self.refresh(select_wheel_id=wheel_id)

    def _handle_spin(self) -> None:
        wheel_id = self.selected_wheel_id()
        if wheel_id is None:
            show_warning(self, "No wheel", NO_WHEEL_SELECTED_MESSAGE)
            return
        self.on_spin(wheel_id)


def _describe_challenge(challenge: Challenge) -> str:
    minutes, seconds = divmod(challenge.time_limit, 60)
    if challenge.type is ChallengeType.SURVIVE:
        goal = challenge.type.label
    else:
        goal = f"{challenge.type.label} {challenge.target}"
    return f"{challenge.image} {challenge.title}  ·  {goal}  ·  {minutes}:{seconds:02d}"
