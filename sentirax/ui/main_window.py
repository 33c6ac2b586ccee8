"""
Main application window: home and results views in one stack.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import QLabel, QMainWindow, QStackedWidget

from sentirax import __version__
from sentirax.core.context import CoreContext
from sentirax.core.dto.submission import SubmissionResultDTO
from sentirax.ui.common.theme import Colors, Fonts, Styles
from sentirax.ui.views import HomeView, ResultsView

logger = logging.getLogger(__name__)


def open_in_browser(url: str) -> bool:
    """Hand a URL to the system browser; it saves proxy downloads itself."""
    opened = QDesktopServices.openUrl(QUrl(url))
    if not opened:
        logger.warning(f"System browser refused URL: {url}")
    return opened


class MainWindow(QMainWindow):
    def __init__(self, core: CoreContext, *, web_url: Optional[str] = None):
        super().__init__()
        self.core = core
        self.core.downloads.set_opener(open_in_browser)

        self.setWindowTitle("Sentirax Downloader")
        self.resize(1100, 720)
        self.setMinimumSize(820, 560)
        self.setStyleSheet(f"QMainWindow {{ background-color: {Colors.BG_PRIMARY}; }}")

        self.stack = QStackedWidget()
        self.home_view = HomeView(core.submission_flow)
        self.results_view = ResultsView(core.results_flow, core.downloads)
        self.stack.addWidget(self.home_view)
        self.stack.addWidget(self.results_view)
        self.setCentralWidget(self.stack)

        self.home_view.submitted.connect(self._on_submitted)
        self.results_view.home_requested.connect(self.show_home)

        self.status_label = QLabel()
        self.status_label.setStyleSheet(Styles.label(Colors.TEXT_MUTED, Fonts.SIZE_SM))
        self.statusBar().addWidget(self.status_label)
        version_label = QLabel(f"v{__version__}")
        version_label.setStyleSheet(Styles.label(Colors.TEXT_MUTED, Fonts.SIZE_SM))
        self.statusBar().addPermanentWidget(version_label)
        self.set_web_url(web_url)

        self.show_home()

    def set_web_url(self, url: Optional[str]) -> None:
        if url:
            self.status_label.setText(f"Web version at {url}")
        else:
            self.status_label.setText("Web version not running")

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def show_home(self) -> None:
        self.results_view.clear()
        self.stack.setCurrentWidget(self.home_view)
        self.home_view.reset()

    def show_results(self) -> None:
        if self.results_view.load():
            self.stack.setCurrentWidget(self.results_view)

    def _on_submitted(self, submission: SubmissionResultDTO) -> None:
        logger.info(f"Showing result for {submission.source_url}")
        self.show_results()

    def closeEvent(self, event):
        """Stop in-flight work and release core resources."""
        self.results_view.clear()
        self.home_view.shutdown()
        self.core.close()
        super().closeEvent(event)
