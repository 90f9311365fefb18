"""Demo panel for the toast scheduler.

Holds a credentials form whose validation decides which toasts to raise, a row
of preset buttons and a custom toast form. The form logic lives in
:class:`ToastFormController` so it can be exercised without widgets.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

from PySide6.QtWidgets import (
    QComboBox,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from notifications.models.notification import KNOWN_CATEGORIES
from notifications.services.scheduler import NotificationScheduler

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
PASSWORD_MIN_LENGTH = 6

SUCCESS_LIFETIME_MS = 3000
ERROR_LIFETIME_MS = 5000
SUBMIT_INVALID_LIFETIME_MS = 3000
CUSTOM_FALLBACK_LIFETIME_MS = 3000

SUBMIT_INVALID_MESSAGE = "Please fill in the required details"
SUBMIT_OK_MESSAGE = "Form submitted successfully"
SAVE_OK_MESSAGE = "Changes saved successfully"
CUSTOM_FALLBACK_MESSAGE = "Custom toast"


@dataclass(frozen=True)
class ToastPreset:
    label: str
    category: str
    lifetime_ms: int
    message: str


PRESETS: Tuple[ToastPreset, ...] = (
    ToastPreset("Success (2s)", "success", 2000, "Operation succeeded"),
    ToastPreset("Info (3s)", "info", 3000, "Heads up, this is some information"),
    ToastPreset("Error (5s)", "error", 5000, "Something went wrong"),
)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: Tuple[str, ...] = ()


def compute_validation(username: str, password: str) -> ValidationResult:
    errors: List[str] = []
    user = (username or "").strip()
    secret = (password or "").strip()

    if not user:
        errors.append("Username is required")
    elif len(user) < USERNAME_MIN_LENGTH:
        errors.append(f"Username must be at least {USERNAME_MIN_LENGTH} characters")

    if not secret:
        errors.append("Password is required")
    elif len(secret) < PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

    return ValidationResult(valid=not errors, errors=tuple(errors))


def field_hint(value: str, min_length: int) -> str:
    """Inline hint under a form field; empty once the value is acceptable."""
    text = (value or "").strip()
    if not text:
        return "Required"
    if len(text) < min_length:
        return f"Must be at least {min_length} characters"
    return ""


def _custom_lifetime(duration: Any) -> int:
    # Zero, negative and unparseable durations all use the fallback.
    try:
        value = int(duration)
    except (TypeError, ValueError):
        return CUSTOM_FALLBACK_LIFETIME_MS
    return value if value > 0 else CUSTOM_FALLBACK_LIFETIME_MS


class ToastFormController:
    """Turns form actions into scheduler calls."""

    def __init__(self, scheduler: NotificationScheduler) -> None:
        self.scheduler = scheduler

    def push_preset(self, preset: ToastPreset) -> str:
        return self.scheduler.show(preset.message, preset.category, preset.lifetime_ms)

    def push_custom(self, message: str, category: str = "info", duration: Any = None) -> str:
        text = (message or "").strip() or CUSTOM_FALLBACK_MESSAGE
        return self.scheduler.show(text, category, _custom_lifetime(duration))

    def submit(self, username: str, password: str) -> List[str]:
        result = compute_validation(username, password)
        if not result.valid:
            logger.debug("[showcase] submit rejected: %s", ", ".join(result.errors))
            return [self.scheduler.show(SUBMIT_INVALID_MESSAGE, "error", SUBMIT_INVALID_LIFETIME_MS)]
        return [self.scheduler.show(SUBMIT_OK_MESSAGE, "success", SUCCESS_LIFETIME_MS)]

    def save_changes(self, username: str, password: str) -> List[str]:
        result = compute_validation(username, password)
        if not result.valid:
            return [self.scheduler.show(msg, "error", ERROR_LIFETIME_MS) for msg in result.errors]
        return [self.scheduler.show(SAVE_OK_MESSAGE, "success", SUCCESS_LIFETIME_MS)]


class ToastShowcasePanel(QWidget):
    """Credentials form, preset buttons and custom toast form."""

    def __init__(self, scheduler: NotificationScheduler, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.controller = ToastFormController(scheduler)

        layout = QVBoxLayout(self)
        try:
            layout.setContentsMargins(24, 24, 24, 24)
            layout.setSpacing(16)
        except Exception:
            pass

        layout.addWidget(self._build_form_group())
        layout.addWidget(self._build_presets_group())
        layout.addWidget(self._build_custom_group())
        layout.addStretch(1)
        self._refresh_hints()

    # ---- Credentials form --------------------------------------------------
    def _build_form_group(self) -> QGroupBox:
        box = QGroupBox("Toast Demo", self)
        form = QFormLayout(box)

        self.username_edit = QLineEdit(box)
        self.username_edit.setPlaceholderText("Enter your username")
        self.username_hint = QLabel(box)
        self.password_edit = QLineEdit(box)
        self.password_edit.setPlaceholderText("Enter your password")
        self.password_edit.setEchoMode(QLineEdit.EchoMode.Password)
        self.password_hint = QLabel(box)
        self.show_password = QPushButton("Show", box)
        self.show_password.setCheckable(True)
        self.show_password.toggled.connect(self._toggle_password)

        password_row = QHBoxLayout()
        password_row.addWidget(self.password_edit, 1)
        password_row.addWidget(self.show_password)

        form.addRow("Username *", self.username_edit)
        form.addRow("", self.username_hint)
        form.addRow("Password *", password_row)
        form.addRow("", self.password_hint)

        buttons = QHBoxLayout()
        self.save_button = QPushButton("Save changes", box)
        self.submit_button = QPushButton("Submit", box)
        self.submit_button.setDefault(True)
        buttons.addWidget(self.save_button)
        buttons.addWidget(self.submit_button)
        form.addRow(buttons)

        self.username_edit.textChanged.connect(lambda *_: self._refresh_hints())
        self.password_edit.textChanged.connect(lambda *_: self._refresh_hints())
        self.password_edit.returnPressed.connect(self.submit)
        self.save_button.clicked.connect(self.save_changes)
        self.submit_button.clicked.connect(self.submit)
        return box

    def _refresh_hints(self) -> None:
        self.username_hint.setText(field_hint(self.username_edit.text(), USERNAME_MIN_LENGTH))
        self.password_hint.setText(field_hint(self.password_edit.text(), PASSWORD_MIN_LENGTH))

    def _toggle_password(self, visible: bool) -> None:
        mode = QLineEdit.EchoMode.Normal if visible else QLineEdit.EchoMode.Password
        self.password_edit.setEchoMode(mode)
        self.show_password.setText("Hide" if visible else "Show")

    def submit(self) -> List[str]:
        return self.controller.submit(self.username_edit.text(), self.password_edit.text())

    def save_changes(self) -> List[str]:
        return self.controller.save_changes(self.username_edit.text(), self.password_edit.text())

    # ---- Showcase ----------------------------------------------------------
    def _build_presets_group(self) -> QGroupBox:
        box = QGroupBox("Toast Showcase", self)
        row = QHBoxLayout(box)
        self.preset_buttons: List[QPushButton] = []
        for preset in PRESETS:
            button = QPushButton(preset.label, box)
            button.clicked.connect(lambda _=False, p=preset: self.controller.push_preset(p))
            row.addWidget(button)
            self.preset_buttons.append(button)
        return box

    def _build_custom_group(self) -> QGroupBox:
        box = QGroupBox("Custom toast", self)
        form = QFormLayout(box)
        self.custom_message = QLineEdit("Custom toast message", box)
        self.custom_category = QComboBox(box)
        self.custom_category.addItems(list(KNOWN_CATEGORIES))
        self.custom_duration = QSpinBox(box)
        self.custom_duration.setRange(500, 60000)
        self.custom_duration.setSingleStep(500)
        self.custom_duration.setValue(3000)
        self.custom_duration.setSuffix(" ms")
        self.custom_button = QPushButton("Show custom toast", box)
        self.custom_button.clicked.connect(self.push_custom)

        form.addRow("Message", self.custom_message)
        form.addRow("Type", self.custom_category)
        form.addRow("Duration", self.custom_duration)
        form.addRow(self.custom_button)
        return box

    def push_custom(self) -> str:
        return self.controller.push_custom(
            self.custom_message.text(),
            self.custom_category.currentText(),
            self.custom_duration.value(),
        )


def get_toast_showcase_panel(scheduler: NotificationScheduler, parent: Optional[QWidget] = None) -> ToastShowcasePanel:
    return ToastShowcasePanel(scheduler, parent)
