"""Category to look-and-feel mapping for toast cards.

This is the only place that knows the closed set of categories; anything else
is drawn with the ``info`` look while keeping its own token.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ToastPresentation:
    category: str
    accent: str
    icon: str
    role: str  # "alert" interrupts assistive tech, "status" does not
    label: str


_STYLES: Dict[str, tuple[str, str, str, str]] = {
    "info": ("#2563EB", "ℹ", "status", "Information"),
    "success": ("#F59E0B", "✓", "status", "Success"),
    "error": ("#EF4444", "!", "alert", "Error"),
    "warning": ("#D97706", "!", "alert", "Warning"),
    "neutral": ("#6B7280", "•", "status", "Notice"),
}


def toast_presentation(category: str) -> ToastPresentation:
    key = (category or "").strip().lower()
    accent, icon, role, label = _STYLES.get(key, _STYLES["info"])
    return ToastPresentation(
        category=category,
        accent=accent,
        icon=icon,
        role=role,
        label=label,
    )


def card_stylesheet(presentation: ToastPresentation) -> str:
    """Qt stylesheet for a card drawn with ``presentation``."""
    return (
        "QFrame#toastCard {"
        " background: #ffffff;"
        " border: 1px solid rgba(37, 99, 235, 38);"
        f" border-left: 4px solid {presentation.accent};"
        " border-radius: 8px;"
        "}"
        "QLabel#toastIcon {"
        f" background: {presentation.accent};"
        " color: #ffffff;"
        " border-radius: 12px;"
        " min-width: 24px; max-width: 24px;"
        " min-height: 24px; max-height: 24px;"
        "}"
        "QLabel#toastMessage { color: #111827; font-size: 13px; }"
        "QToolButton#toastClose { border: none; background: transparent; color: #374151; }"
    )
