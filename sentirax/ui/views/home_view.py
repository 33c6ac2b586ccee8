"""
Home view: URL input and submit control.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
import qtawesome as qta

from sentirax.core.dto.submission import SubmissionResultDTO
from sentirax.core.errors import InvalidUrl
from sentirax.core.flows import SubmissionFlow
from sentirax.ui.common.theme import Colors, Fonts, Spacing, Styles
from sentirax.ui.workers import SubmissionWorker, start_detached

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Please enter a valid URL."
UNEXPECTED_ERROR_MESSAGE = "Something went wrong."
SUBMIT_LABEL = "Download"
BUSY_LABEL = "Working..."


class HomeView(QWidget):
    """
    Signals:
        submitted(submission): Emitted after the info response was stored
    """

    submitted = pyqtSignal(object)

    def __init__(self, flow: SubmissionFlow, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._flow = flow
        self._busy = False
        self._token = 0
        self._worker: Optional[SubmissionWorker] = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(Spacing.XXL, Spacing.XXL, Spacing.XXL, Spacing.XXL)
        layout.setSpacing(Spacing.LG)
        layout.addStretch(1)

        title = QLabel("Sentirax Downloader")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet(Styles.label(Colors.TEXT_PRIMARY, Fonts.SIZE_TITLE, Fonts.WEIGHT_BOLD))
        layout.addWidget(title)

        subtitle = QLabel("Paste a link to a video, audio track or image.")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle.setStyleSheet(Styles.label(Colors.TEXT_SECONDARY, Fonts.SIZE_LG))
        layout.addWidget(subtitle)

        row = QHBoxLayout()
        row.setSpacing(Spacing.SM)

        self.url_input = QLineEdit()
        self.url_input.setObjectName("urlInput")
        self.url_input.setPlaceholderText("https://...")
        self.url_input.setFixedHeight(Spacing.CONTROL_HEIGHT)
        self.url_input.setClearButtonEnabled(True)
        self.url_input.setStyleSheet(Styles.input_field())
        self.url_input.returnPressed.connect(self.handle_submit)
        row.addWidget(self.url_input, 1)

        self.submit_button = QPushButton(SUBMIT_LABEL)
        self.submit_button.setObjectName("submitButton")
        self._idle_icon = qta.icon("fa5s.download", color=Colors.TEXT_WHITE)
        self._spin = qta.Spin(self.submit_button, autostart=False)
        self._busy_icon = qta.icon("fa5s.circle-notch", color=Colors.TEXT_DISABLED, animation=self._spin)
        self.submit_button.setIcon(self._idle_icon)
        self.submit_button.setFixedHeight(Spacing.CONTROL_HEIGHT)
        self.submit_button.setStyleSheet(Styles.button_primary())
        self.submit_button.clicked.connect(self.handle_submit)
        row.addWidget(self.submit_button)

        layout.addLayout(row)
        layout.addStretch(2)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    @property
    def is_busy(self) -> bool:
        return self._busy

    def handle_submit(self) -> None:
        if self._busy:
            return
        try:
            url = self._flow.validate(self.url_input.text())
        except InvalidUrl:
            self._show_warning(INVALID_URL_MESSAGE)
            return

        self._set_loading(True)
        self._token += 1
        worker = SubmissionWorker(token=self._token, flow=self._flow, url=url)
        worker.succeeded.connect(self._on_succeeded)
        worker.failed.connect(self._on_failed)
        self._worker = worker
        logger.info(f"Submitting {url}")
        start_detached(worker)

    def _on_succeeded(self, token: int, submission: SubmissionResultDTO) -> None:
        if token != self._token:
            return
        self._finish()
        self.submitted.emit(submission)

    def _on_failed(self, token: int, message: str, is_request_error: bool) -> None:
        if token != self._token:
            return
        self._finish()
        if is_request_error:
            logger.warning(f"Info request failed: {message}")
            self._show_warning(message)
        else:
            self._show_warning(UNEXPECTED_ERROR_MESSAGE)

    def _finish(self) -> None:
        self._worker = None
        self._set_loading(False)

    def _set_loading(self, busy: bool) -> None:
        self._busy = busy
        self.submit_button.setEnabled(not busy)
        self.submit_button.setText(BUSY_LABEL if busy else SUBMIT_LABEL)
        if busy:
            self.submit_button.setIcon(self._busy_icon)
            self._spin.start()
        else:
            self._spin.stop()
            self.submit_button.setIcon(self._idle_icon)

    def _show_warning(self, message: str) -> None:
        QMessageBox.warning(self, "Sentirax", message)

    def shutdown(self, timeout_ms: int = 2000) -> bool:
        """
        Drop any in-flight request; its result is ignored.

        Returns:
            False when the request was still running after timeout_ms. The
            worker stays referenced until its thread finishes.
        """
        finished = True
        if self._worker is not None:
            self._worker.cancel()
            self._token += 1
            finished = self._worker.wait(timeout_ms)
            if not finished:
                logger.warning(f"Info request still running after {timeout_ms} ms; abandoning it")
            self._worker = None
        self._set_loading(False)
        return finished

    def reset(self) -> None:
        self.url_input.setFocus()
        self.url_input.selectAll()
