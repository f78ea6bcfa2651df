"""
Warning manager for handling one-time confirmations per session.
"""
from enum import Enum
from typing import Dict, Optional, Set

from PyQt5.QtWidgets import QCheckBox, QMessageBox, QWidget


class WarningType(Enum):
    """Types of warnings that can be suppressed."""
    DISCARD_UNSAVED = "discard_unsaved"
    SAVE_FAILED = "save_failed"


class WarningManager:
    """
    Manages warning dialogs so the user can silence them for a session.
    Singleton pattern to maintain state across the application.
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._initialized = True
        self._suppressed_warnings: Set[WarningType] = set()
        self._last_choices: Dict[WarningType, int] = {}

    def should_show_warning(self, warning_type: WarningType) -> bool:
        """Check if a warning should be shown."""
        return warning_type not in self._suppressed_warnings

    def suppress_warning(self, warning_type: WarningType) -> None:
        """Suppress a warning for the rest of the session."""
        self._suppressed_warnings.add(warning_type)

    def get_last_choice(self, warning_type: WarningType) -> Optional[int]:
        """Get the last QMessageBox result recorded for a warning type."""
        return self._last_choices.get(warning_type)

    def show_warning(self, parent: QWidget, warning_type: WarningType,
                     title: str, message: str,
                     buttons: int = QMessageBox.Yes | QMessageBox.No,
                     default_button: int = QMessageBox.No,
                     show_dont_ask: bool = True,
                     icon: int = QMessageBox.Question) -> int:
        """
        Show a warning dialog with optional "don't ask again" checkbox.

        Args:
            parent: Parent widget
            warning_type: Type of warning
            title: Dialog title
            message: Warning message
            buttons: QMessageBox button flags
            default_button: Default button
            show_dont_ask: Whether to show "don't ask again" checkbox
            icon: QMessageBox icon

        Returns:
            QMessageBox result
        """
        if not self.should_show_warning(warning_type):
            last_choice = self.get_last_choice(warning_type)
            if last_choice is not None:
                return last_choice
            return QMessageBox.Yes

        msg_box = QMessageBox(parent)
        msg_box.setIcon(icon)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)
        msg_box.setStandardButtons(buttons)
        msg_box.setDefaultButton(default_button)

        dont_ask_checkbox = None
        if show_dont_ask:
            dont_ask_checkbox = QCheckBox("Don't ask again this session")
            msg_box.setCheckBox(dont_ask_checkbox)

        result = msg_box.exec_()
        self._last_choices[warning_type] = result

        if dont_ask_checkbox and dont_ask_checkbox.isChecked():
            self.suppress_warning(warning_type)

        return result

    def confirm_discard(self, parent: QWidget) -> bool:
        """
        Ask before closing the editor with unsaved annotations.

        Returns:
            True if the user agreed to discard them
        """
        result = self.show_warning(
            parent, WarningType.DISCARD_UNSAVED,
            "Unsaved Annotations",
            "Closing the editor discards annotations that have not been saved. Close anyway?"
        )
        return result == QMessageBox.Yes

    def ask_retry_save(self, parent: QWidget, message: str) -> bool:
        """
        Report a failed save and offer to retry.

        Returns:
            True if the user chose Retry
        """
        result = self.show_warning(
            parent, WarningType.SAVE_FAILED,
            "Save Failed",
            f"Failed to save annotations: {message}\n\nYour annotations are still open.",
            QMessageBox.Retry | QMessageBox.Close,
            QMessageBox.Retry,
            show_dont_ask=False,
            icon=QMessageBox.Critical
        )
        return result == QMessageBox.Retry


# Global instance for easy access
warning_manager = WarningManager()
