# ===== Part 1: Imports & Logging ============================================
import logging
import sys

from PySide6.QtWidgets import QApplication, QMainWindow

from notifications.panels import get_toast_showcase_panel, get_toast_stack
from notifications.services import NotificationScheduler
from notifications.settings import load_toast_settings

logger = logging.getLogger(__name__)


# ===== Part 2: Main Window ==================================================
class MainWindow(QMainWindow):
    """Showcase window with the toast stack anchored to its top-right corner."""

    def __init__(self, scheduler: NotificationScheduler):
        super().__init__()
        self.setWindowTitle("Toast Showcase")
        self.resize(900, 640)
        self.scheduler = scheduler
        self.panel = get_toast_showcase_panel(scheduler, self)
        self.setCentralWidget(self.panel)
        # Child of the window, not the central widget, so it floats above it.
        self.toast_stack = get_toast_stack(scheduler, self)


# ===== Part 3: Entry Point ==================================================
def main(argv=None) -> int:
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
    )
    app = QApplication.instance() or QApplication(list(argv if argv is not None else sys.argv))

    settings = load_toast_settings()
    logger.info(
        "Starting toast showcase (default category=%s, lifetime=%sms)",
        settings.default_category,
        settings.default_lifetime_ms,
    )
    scheduler = NotificationScheduler(settings)
    window = MainWindow(scheduler)

    def _shutdown() -> None:
        window.toast_stack.detach()
        scheduler.dispose()

    app.aboutToQuit.connect(_shutdown)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
