from __future__ import annotations

import logging
from typing import Dict, List, Optional

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QToolButton, QVBoxLayout, QWidget

from notifications.models.notification import NotificationItem
from notifications.models.presentation import card_stylesheet, toast_presentation
from notifications.services.scheduler import NotificationScheduler, Snapshot
from notifications.settings import ToastSettings

logger = logging.getLogger(__name__)


class ToastCard(QFrame):
    """Visual card for a single toast.

    The card never removes itself; it only reports a user close request once
    through ``closed`` and leaves removal to the scheduler.
    """

    closed = Signal(str)

    def __init__(self, item: NotificationItem, parent: QWidget | None = None, *, max_width: int = 384) -> None:
        super().__init__(parent)
        self.item = item
        self.presentation = toast_presentation(item.category)
        self._close_requested = False

        self.setObjectName("toastCard")
        self.setStyleSheet(card_stylesheet(self.presentation))
        self.setProperty("category", item.category)
        self.setProperty("role", self.presentation.role)
        self.setAccessibleName(self.presentation.label)
        self.setAccessibleDescription(item.message)
        self.setMinimumWidth(min(260, max_width))
        self.setMaximumWidth(max_width)

        layout = QHBoxLayout(self)
        try:
            layout.setContentsMargins(16, 12, 8, 12)
            layout.setSpacing(12)
        except Exception:
            pass

        self.icon_label = QLabel(self.presentation.icon, self)
        self.icon_label.setObjectName("toastIcon")
        self.icon_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.icon_label, 0, Qt.AlignmentFlag.AlignTop)

        self.message_label = QLabel(item.message, self)
        self.message_label.setObjectName("toastMessage")
        self.message_label.setWordWrap(True)
        layout.addWidget(self.message_label, 1)

        self.close_button = QToolButton(self)
        self.close_button.setObjectName("toastClose")
        self.close_button.setText("✕")
        self.close_button.setAccessibleName("Close notification")
        self.close_button.setCursor(Qt.CursorShape.PointingHandCursor)
        self.close_button.clicked.connect(self.request_close)
        layout.addWidget(self.close_button, 0, Qt.AlignmentFlag.AlignTop)

    @property
    def toast_id(self) -> str:
        return self.item.id

    def request_close(self) -> None:
        if self._close_requested:
            return
        self._close_requested = True
        self.close_button.setEnabled(False)
        self.closed.emit(self.item.id)


class ToastStack(QWidget):
    """Top-right overlay that mirrors a scheduler's live stack.

    Oldest toast sits nearest the corner; new toasts are appended below it.
    """

    def __init__(
        self,
        scheduler: NotificationScheduler,
        parent: QWidget | None = None,
        settings: Optional[ToastSettings] = None,
    ) -> None:
        super().__init__(parent)
        self.scheduler = scheduler
        self.settings = settings or scheduler.settings
        self._cards: Dict[str, ToastCard] = {}

        self.setObjectName("toastStack")
        self.setAccessibleName("Notifications")
        layout = QVBoxLayout(self)
        try:
            layout.setContentsMargins(0, 0, 0, 0)
            layout.setSpacing(self.settings.spacing_px)
        except Exception:
            pass
        self._layout = layout

        if parent is not None:
            parent.installEventFilter(self)
        self._unsubscribe = scheduler.on_change(self.sync)
        self.sync(scheduler.snapshot())

    # ---- Rendering ---------------------------------------------------------
    def sync(self, snapshot: Snapshot) -> None:
        live_ids = {item.id for item in snapshot}
        for toast_id in [tid for tid in self._cards if tid not in live_ids]:
            card = self._cards.pop(toast_id)
            self._layout.removeWidget(card)
            card.hide()
            card.deleteLater()

        # Live order only ever loses items or grows at the tail, so appending
        # unseen ids keeps the layout in snapshot order.
        for item in snapshot:
            if item.id in self._cards:
                continue
            card = ToastCard(item, self, max_width=self.settings.max_width_px)
            card.closed.connect(self._on_card_closed)
            self._layout.addWidget(card)
            self._cards[item.id] = card

        self.setVisible(bool(self._cards))
        self.reposition()

    def card_ids(self) -> List[str]:
        ids: List[str] = []
        for index in range(self._layout.count()):
            widget = self._layout.itemAt(index).widget()
            if isinstance(widget, ToastCard):
                ids.append(widget.toast_id)
        return ids

    def card(self, toast_id: str) -> Optional[ToastCard]:
        return self._cards.get(toast_id)

    def reposition(self) -> None:
        parent = self.parentWidget()
        if parent is None:
            return
        self.adjustSize()
        margin = self.settings.margin_px
        width = min(self.sizeHint().width(), max(0, parent.width() - 2 * margin))
        x = max(0, parent.width() - width - margin)
        self.setGeometry(x, margin, width, self.sizeHint().height())
        self.raise_()

    def detach(self) -> None:
        """Stop following the scheduler (used at shutdown)."""
        self._unsubscribe()

    # ---- Qt hooks ----------------------------------------------------------
    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self.reposition()
        return super().eventFilter(watched, event)

    def _on_card_closed(self, toast_id: str) -> None:
        if not self.scheduler.dismiss(toast_id):
            logger.debug("[toasts] close for %s arrived after removal", toast_id)


def get_toast_stack(scheduler: NotificationScheduler, parent: QWidget | None = None) -> ToastStack:
    return ToastStack(scheduler, parent)
