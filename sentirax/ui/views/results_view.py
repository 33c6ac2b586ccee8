"""
Results view: shows one derived result and offers preview and downloads.

Everything displayed comes from a ResultViewDTO built by ResultsFlow; this
module only lays it out and forwards clicks.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import (
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
import qtawesome as qta

from sentirax.core.downloads import DownloadTrigger
from sentirax.core.dto.preview import PreviewDTO
from sentirax.core.dto.result import ResultViewDTO
from sentirax.core.errors import StorageMissingOrCorrupt
from sentirax.core.flows import ResultsFlow
from sentirax.core.preview import build_preview
from sentirax.ui.common.theme import Colors, Fonts, Spacing, Styles
from sentirax.ui.preview import PreviewOverlay, open_preview
from sentirax.ui.workers import ImageFetchWorker, start_detached

logger = logging.getLogger(__name__)


class _ActionButton(QPushButton):
    """Two-line download button: title plus a muted subtitle."""

    def __init__(self, icon_name: str, title: str, subtitle: str, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setMinimumHeight(Spacing.CONTROL_HEIGHT + Spacing.LG)
        self.setIcon(qta.icon(icon_name, color=Colors.TEXT_PRIMARY, color_disabled=Colors.TEXT_DISABLED))
        self.setStyleSheet(Styles.button_secondary())
        self.set_labels(title, subtitle)

    def set_labels(self, title: str, subtitle: str) -> None:
        self.title = title
        self.subtitle = subtitle
        self.setText(f"  {title}\n  {subtitle}")


class ResultsView(QWidget):
    """
    Signals:
        home_requested(): Nothing to show, or the user asked for another download
    """

    home_requested = pyqtSignal()

    def __init__(
        self,
        flow: ResultsFlow,
        downloads: DownloadTrigger,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self._flow = flow
        self._downloads = downloads
        self._result: Optional[ResultViewDTO] = None
        self._preview: Optional[PreviewDTO] = None
        self._overlay: Optional[PreviewOverlay] = None
        self._thumb_worker: Optional[ImageFetchWorker] = None
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(Spacing.XXL, Spacing.XL, Spacing.XXL, Spacing.XL)
        layout.setSpacing(Spacing.LG)

        top = QHBoxLayout()
        self.back_button = QPushButton("Download another")
        self.back_button.setIcon(qta.icon("fa5s.arrow-left", color=Colors.TEXT_SECONDARY))
        self.back_button.setStyleSheet(Styles.button_flat())
        self.back_button.clicked.connect(self._on_back)
        top.addWidget(self.back_button)
        top.addStretch(1)
        layout.addLayout(top)

        card = QFrame()
        card.setObjectName("resultCard")
        card.setStyleSheet(Styles.card())
        card_layout = QHBoxLayout(card)
        card_layout.setContentsMargins(Spacing.XL, Spacing.XL, Spacing.XL, Spacing.XL)
        card_layout.setSpacing(Spacing.XL)

        # Left: thumbnail and preview
        left = QVBoxLayout()
        left.setSpacing(Spacing.SM)
        self.thumbnail_label = QLabel()
        self.thumbnail_label.setFixedSize(Spacing.THUMBNAIL_WIDTH, Spacing.THUMBNAIL_HEIGHT)
        self.thumbnail_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.thumbnail_label.setStyleSheet(
            Styles.label(Colors.TEXT_MUTED, Fonts.SIZE_SM, bg=Colors.BG_TERTIARY)
        )
        left.addWidget(self.thumbnail_label)

        self.preview_button = QPushButton("Preview")
        self.preview_button.setObjectName("previewButton")
        self.preview_button.setIcon(qta.icon("fa5s.play", color=Colors.TEXT_WHITE, color_disabled=Colors.TEXT_DISABLED))
        self.preview_button.setFixedHeight(Spacing.CONTROL_HEIGHT)
        self.preview_button.setStyleSheet(Styles.button_primary())
        self.preview_button.clicked.connect(self.open_preview)
        left.addWidget(self.preview_button)
        left.addStretch(1)
        card_layout.addLayout(left)

        # Right: details and downloads
        right = QVBoxLayout()
        right.setSpacing(Spacing.SM)

        self.title_label = QLabel()
        self.title_label.setWordWrap(True)
        self.title_label.setStyleSheet(Styles.label(Colors.TEXT_PRIMARY, Fonts.SIZE_XL, Fonts.WEIGHT_SEMIBOLD))
        right.addWidget(self.title_label)

        self.meta_label = QLabel()
        self.meta_label.setStyleSheet(Styles.label(Colors.TEXT_SECONDARY, Fonts.SIZE_MD))
        right.addWidget(self.meta_label)

        self.duration_label = QLabel()
        self.duration_label.setStyleSheet(Styles.label(Colors.TEXT_SECONDARY, Fonts.SIZE_MD))
        right.addWidget(self.duration_label)

        status_row = QHBoxLayout()
        status_row.setSpacing(Spacing.SM)
        self.status_dot = QFrame()
        self.status_dot.setFixedSize(8, 8)
        status_row.addWidget(self.status_dot)
        self.status_label = QLabel()
        self.status_label.setStyleSheet(Styles.label(Colors.TEXT_SECONDARY, Fonts.SIZE_SM, Fonts.WEIGHT_MEDIUM))
        status_row.addWidget(self.status_label)
        status_row.addStretch(1)
        right.addLayout(status_row)

        right.addSpacing(Spacing.MD)

        buttons = QGridLayout()
        buttons.setSpacing(Spacing.SM)
        self.primary_button = _ActionButton("fa5s.film", "Video", "Highest Quality")
        self.primary_button.setObjectName("primaryDownloadButton")
        self.primary_button.clicked.connect(self._download_primary)
        buttons.addWidget(self.primary_button, 0, 0)

        self.audio_button = _ActionButton("fa5s.music", "Audio", "Not available")
        self.audio_button.setObjectName("audioDownloadButton")
        self.audio_button.setEnabled(False)
        self.audio_button.setToolTip("Audio-only downloads are not available")
        buttons.addWidget(self.audio_button, 0, 1)

        self.thumbnail_button = _ActionButton("fa5s.image", "Thumbnail", "Image")
        self.thumbnail_button.setObjectName("thumbnailDownloadButton")
        self.thumbnail_button.clicked.connect(self._download_thumbnail)
        buttons.addWidget(self.thumbnail_button, 1, 0)
        right.addLayout(buttons)

        right.addStretch(1)
        card_layout.addLayout(right, 1)

        layout.addWidget(card)
        layout.addStretch(1)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @property
    def result(self) -> Optional[ResultViewDTO]:
        return self._result

    def load(self) -> bool:
        """
        Consume the stored submission and show it.

        Returns:
            False when nothing usable was stored; home_requested is emitted
        """
        try:
            result = self._flow.load()
        except StorageMissingOrCorrupt as e:
            logger.info(f"No result to show, returning home: {e}")
            self._result = None
            self.home_requested.emit()
            return False
        self.show_result(result)
        return True

    def show_result(self, result: ResultViewDTO) -> None:
        self._result = result
        self._preview = build_preview(result)

        self.title_label.setText(result.title)
        self.meta_label.setText(result.meta_text)
        self.duration_label.setText(result.duration_text)
        self.duration_label.setVisible(bool(result.duration_text))

        ready = result.status == "ready"
        self.status_label.setText(result.status_text)
        self.status_dot.setStyleSheet(
            Styles.status_dot(Colors.ACCENT_SUCCESS if ready else Colors.ACCENT_ERROR)
        )

        self.primary_button.set_labels(result.primary_title, result.primary_subtitle)
        self.primary_button.setIcon(
            qta.icon(
                "fa5s.image" if result.media_type == "image" else "fa5s.film",
                color=Colors.TEXT_PRIMARY,
                color_disabled=Colors.TEXT_DISABLED,
            )
        )
        self.primary_button.setEnabled(result.can_download)
        self.audio_button.setEnabled(False)
        self.thumbnail_button.setEnabled(bool(result.thumbnail_url))
        self.preview_button.setEnabled(self._preview is not None)

        self._load_thumbnail(result.display_image_url)

    def _load_thumbnail(self, url: Optional[str]) -> None:
        self._cancel_thumbnail()
        self.thumbnail_label.clear()
        if not url:
            self.thumbnail_label.setText("No preview image")
            return
        self.thumbnail_label.setText("Loading…")
        worker = ImageFetchWorker(url)
        worker.loaded.connect(self._on_thumbnail_loaded)
        worker.failed.connect(self._on_thumbnail_failed)
        self._thumb_worker = worker
        start_detached(worker)

    def _cancel_thumbnail(self) -> None:
        if self._thumb_worker is not None:
            self._thumb_worker.cancel()
            self._thumb_worker = None

    def _on_thumbnail_loaded(self, url: str, data: bytes) -> None:
        if self._thumb_worker is None or self._thumb_worker.url != url:
            return
        self._thumb_worker = None
        pix = QPixmap()
        if not pix.loadFromData(data):
            self.thumbnail_label.setText("No preview image")
            return
        self.thumbnail_label.setPixmap(
            pix.scaled(
                self.thumbnail_label.size(),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )

    def _on_thumbnail_failed(self, url: str, error: str) -> None:
        if self._thumb_worker is None or self._thumb_worker.url != url:
            return
        self._thumb_worker = None
        self.thumbnail_label.setText("No preview image")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def open_preview(self) -> Optional[PreviewOverlay]:
        if self._preview is None:
            return None
        self.close_preview()
        host = self.window() or self
        overlay = open_preview(host, self._preview)
        overlay.dismissed.connect(self._on_preview_dismissed)
        self._overlay = overlay
        return overlay

    def close_preview(self) -> None:
        if self._overlay is not None:
            overlay = self._overlay
            self._overlay = None
            overlay.dismiss()

    def _on_preview_dismissed(self, reason: str) -> None:
        if self.sender() is self._overlay:
            self._overlay = None

    def _download_primary(self) -> None:
        if self._result is None or not self._result.can_download:
            return
        self._downloads.trigger(self._result.download_url, self._result.filename)

    def _download_thumbnail(self) -> None:
        if self._result is None or not self._result.thumbnail_url:
            return
        self._downloads.trigger(self._result.thumbnail_url, self._result.thumbnail_filename)

    def _on_back(self) -> None:
        self.clear()
        self.home_requested.emit()

    def clear(self) -> None:
        self.close_preview()
        self._cancel_thumbnail()
        self._result = None
        self._preview = None
