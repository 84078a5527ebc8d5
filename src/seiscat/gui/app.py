from __future__ import annotations

import logging
import sys

from PySide6.QtCore import QCoreApplication, Qt
from PySide6.QtWidgets import QApplication, QMessageBox

from seiscat.catalog.io import load_catalog
from seiscat.catalog.store import CatalogStore
from seiscat.geo.icons import initialize_default_icon
from seiscat.gui.main_window import MainWindow
from seiscat.logging_config import setup_logging
from seiscat.session import CatalogSession

logger = logging.getLogger(__name__)


def main() -> None:
    setup_logging()

    # Qt WebEngine (map view) needs shared GL contexts before the app exists
    QCoreApplication.setAttribute(Qt.AA_ShareOpenGLContexts)
    app = QApplication(sys.argv)

    # --------------------------------------------------
    # Pre-GUI initialization
    # --------------------------------------------------
    try:
        report = load_catalog()
    except (OSError, ValueError) as exc:
        logger.exception("Catalog load failed")
        QMessageBox.critical(
            None,
            "Initialization Failed",
            f"Could not load the survey catalog:\n\n{exc}",
        )
        sys.exit(1)

    if report.rejected:
        QMessageBox.warning(
            None,
            "Invalid Records",
            f"{len(report.rejected)} survey record(s) failed validation "
            "and were skipped.",
        )

    initialize_default_icon()
    session = CatalogSession(CatalogStore(report.accepted))

    # --------------------------------------------------
    # Launch GUI
    # --------------------------------------------------
    window = MainWindow(session)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
