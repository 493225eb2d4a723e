"""Helper functions for common dialog patterns in the control UI."""

from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget


def _confirm(parent: QWidget, title: str, message: str) -> bool:
    reply = QMessageBox.question(
        parent,
        title,
        message,
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_delete_wheel(parent: QWidget, wheel_name: str) -> bool:
    """Show confirmation dialog for deleting a wheel and its challenges.

    Args:
        parent: Parent widget for the dialog
        wheel_name: Name of the wheel to display

    Returns:
        True if user confirmed, False otherwise
    """
    return _confirm(
        parent,
        "Confirm Delete",
        f"Delete wheel \"{wheel_name}\" and all of its challenges?",
    )


def confirm_delete_challenge(parent: QWidget, challenge_title: str) -> bool:
    """Show confirmation dialog for deleting a challenge."""
    return _confirm(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete the challenge \"{challenge_title}\"?",
    )


def confirm_delete_donation(parent: QWidget, challenge_title: str, amount: float) -> bool:
    """Show confirmation dialog for deleting a donation entry."""
    return _confirm(
        parent,
        "Confirm Delete",
        f"Delete the donation of {amount:.2f} for \"{challenge_title}\"?",
    )


def confirm_reset_session(parent: QWidget) -> bool:
    """Show confirmation dialog for starting a fresh session.

    Returns:
        True if user confirmed, False otherwise
    """
    return _confirm(
        parent,
        "Reset Session",
        "Remove every donation booked today? This cannot be undone.",
    )


def show_error(parent: QWidget, title: str, message: str) -> None:
    """Show error dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Error message
    """
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    """Show information dialog."""
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    """Show warning dialog.

    Args:
        parent: Parent widget for the dialog
        title: Dialog title
        message: Warning message
    """
    QMessageBox.warning(parent, title, message)
