"""
Dismissible preview overlay.

The overlay covers its host widget with a scrim and shows one media widget
in a centered frame. It is a single open/close resource: open() installs an
application-wide event filter (Escape key, host resizes), and every way of
closing it (close button, click on the scrim, Escape, host teardown) goes
through dismiss(), which removes the filter, releases the media widget,
restores focus to the page and deletes the overlay.
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PyQt6.QtCore import QEvent, QObject, Qt, pyqtSignal
from PyQt6.QtGui import QMouseEvent
from PyQt6.QtWidgets import (
    QApplication,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)
import qtawesome as qta

from sentirax.core.dto.preview import PreviewDTO
from sentirax.ui.common.theme import Colors, Fonts, Spacing, Styles
from sentirax.ui.preview.media_widgets import MediaPreviewWidget, create_media_widget

logger = logging.getLogger(__name__)

ContentFactory = Callable[[PreviewDTO, QWidget], MediaPreviewWidget]


class DismissReason:
    CLOSE_BUTTON = "close_button"
    OUTSIDE_CLICK = "outside_click"
    ESCAPE = "escape"
    PROGRAMMATIC = "programmatic"


class PreviewOverlay(QWidget):
    """
    Signals:
        dismissed(reason): Emitted once, after teardown finished
    """

    dismissed = pyqtSignal(str)

    def __init__(
        self,
        host: QWidget,
        preview: PreviewDTO,
        *,
        content_factory: ContentFactory = create_media_widget,
    ):
        super().__init__(host)
        self._host = host
        self.preview = preview
        self._filter_installed = False
        self._is_open = False
        self._closing = False
        self._previous_focus: Optional[QWidget] = None

        self.setObjectName("previewOverlay")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet(f"QWidget#previewOverlay {{ background-color: {Colors.SCRIM}; }}")
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.hide()

        outer = QVBoxLayout(self)
        outer.setContentsMargins(Spacing.XXL, Spacing.XXL, Spacing.XXL, Spacing.XXL)
        outer.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self.content_frame = QFrame(self)
        self.content_frame.setObjectName("previewContent")
        self.content_frame.setMaximumSize(Spacing.PREVIEW_MAX_WIDTH, Spacing.PREVIEW_MAX_HEIGHT)
        self.content_frame.setStyleSheet(
            f"""
            QFrame#previewContent {{
                background-color: {Colors.BG_SECONDARY};
                border: 1px solid {Colors.BORDER_DEFAULT};
                border-radius: {Spacing.RADIUS_XL}px;
            }}
            """
        )
        frame_layout = QVBoxLayout(self.content_frame)
        frame_layout.setContentsMargins(Spacing.MD, Spacing.SM, Spacing.MD, Spacing.MD)
        frame_layout.setSpacing(Spacing.SM)

        header = QHBoxLayout()
        title = QLabel(self._title_for(preview), self.content_frame)
        title.setStyleSheet(Styles.label(Colors.TEXT_SECONDARY, Fonts.SIZE_SM, Fonts.WEIGHT_MEDIUM))
        header.addWidget(title, 1)

        self.close_button = QPushButton(self.content_frame)
        self.close_button.setObjectName("previewCloseButton")
        self.close_button.setIcon(qta.icon("fa5s.times", color=Colors.TEXT_SECONDARY))
        self.close_button.setFixedSize(Spacing.ICON_LG + Spacing.SM, Spacing.ICON_LG + Spacing.SM)
        self.close_button.setToolTip("Close preview")
        self.close_button.setStyleSheet(Styles.button_flat())
        self.close_button.clicked.connect(lambda: self.dismiss(DismissReason.CLOSE_BUTTON))
        header.addWidget(self.close_button)
        frame_layout.addLayout(header)

        self.media_widget = content_factory(preview, self.content_frame)
        frame_layout.addWidget(self.media_widget, 1)

        outer.addWidget(self.content_frame)

    @staticmethod
    def _title_for(preview: PreviewDTO) -> str:
        return {
            "embed": "YouTube preview",
            "audio": "Audio preview",
            "image": "Image preview",
        }.get(preview.kind, "Video preview")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def has_event_filter(self) -> bool:
        return self._filter_installed

    def open(self) -> None:
        if self._is_open or self._closing:
            return
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self)
            self._filter_installed = True
        self._previous_focus = QApplication.focusWidget()
        self.setGeometry(self._host.rect())
        self.show()
        self.raise_()
        self.setFocus(Qt.FocusReason.OtherFocusReason)
        self._is_open = True
        logger.info(f"Preview opened: {self.preview.kind}")

    def dismiss(self, reason: str = DismissReason.PROGRAMMATIC) -> None:
        """Single teardown path for every way of closing the overlay. Idempotent."""
        if self._closing:
            return
        self._closing = True

        if self._filter_installed:
            app = QApplication.instance()
            if app is not None:
                app.removeEventFilter(self)
            self._filter_installed = False

        try:
            self.media_widget.release()
        except RuntimeError as e:
            # Underlying C++ object already gone with the host.
            logger.debug(f"Media widget release skipped: {e}")

        self.hide()
        self._is_open = False
        previous = self._previous_focus
        self._previous_focus = None
        if previous is not None:
            try:
                previous.setFocus(Qt.FocusReason.OtherFocusReason)
            except RuntimeError as e:
                logger.debug(f"Focus restore skipped: {e}")

        logger.info(f"Preview closed ({reason})")
        self.dismissed.emit(reason)
        self.deleteLater()

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:
        etype = event.type()
        if etype == QEvent.Type.KeyPress and event.key() == Qt.Key.Key_Escape:
            self.dismiss(DismissReason.ESCAPE)
            return True
        if obj is self._host and etype == QEvent.Type.Resize:
            self.setGeometry(self._host.rect())
        return False

    def mousePressEvent(self, event: QMouseEvent) -> None:
        # Only presses that land on the scrim reach here; the content frame
        # and its children consume their own clicks.
        if not self.content_frame.geometry().contains(event.position().toPoint()):
            self.dismiss(DismissReason.OUTSIDE_CLICK)
            event.accept()
            return
        super().mousePressEvent(event)


def open_preview(
    host: QWidget,
    preview: PreviewDTO,
    *,
    content_factory: ContentFactory = create_media_widget,
) -> PreviewOverlay:
    overlay = PreviewOverlay(host, preview, content_factory=content_factory)
    overlay.open()
    return overlay
