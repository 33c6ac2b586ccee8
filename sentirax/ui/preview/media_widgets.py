"""
Content widgets for the preview overlay.

One widget per preview kind. Each owns whatever it plays or loads and
frees it in release(), which the overlay calls on every close path.
"""
from __future__ import annotations

import logging
from typing import Optional

from PyQt6.QtCore import QObject, Qt, pyqtSignal
from PyQt6.QtGui import QPixmap
from PyQt6.QtWidgets import QLabel, QStackedLayout, QVBoxLayout, QWidget
import qtawesome as qta

from sentirax.core.dto.preview import PreviewDTO
from sentirax.core.preview import WATCH_URL_TEMPLATE
from sentirax.ui.common.theme import Colors, Fonts, Spacing, Styles
from sentirax.ui.workers import ImageFetchWorker, start_detached

logger = logging.getLogger(__name__)

PLAYBACK_UNAVAILABLE = "Playback unavailable"


class MediaPreviewWidget(QWidget):
    """Base class: a preview content widget with explicit resource release."""

    def __init__(self, preview: PreviewDTO, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.preview = preview
        self._released = False
        self.setMinimumSize(480, 270)
        self.setStyleSheet(f"background-color: {Colors.BG_PRIMARY};")

    @property
    def released(self) -> bool:
        return self._released

    def release(self) -> None:
        """Stop playback / loading. Idempotent."""
        if self._released:
            return
        self._released = True
        self._release_resources()

    def _release_resources(self) -> None:
        pass


class _RemotePixmapLabel(QLabel):
    """QLabel that fills itself from a URL via ImageFetchWorker."""

    def __init__(self, placeholder: str = "", parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._worker: Optional[ImageFetchWorker] = None
        self._pixmap: Optional[QPixmap] = None
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setText(placeholder)
        self.setStyleSheet(Styles.label(Colors.TEXT_MUTED, Fonts.SIZE_MD))

    def load(self, url: Optional[str]) -> None:
        if not url:
            return
        self.cancel()
        worker = ImageFetchWorker(url)
        worker.loaded.connect(self._on_loaded)
        worker.failed.connect(self._on_failed)
        self._worker = worker
        start_detached(worker)

    def cancel(self) -> None:
        if self._worker is not None:
            self._worker.cancel()
            try:
                self._worker.loaded.disconnect(self._on_loaded)
                self._worker.failed.disconnect(self._on_failed)
            except (TypeError, RuntimeError):
                pass
            self._worker = None

    def _on_loaded(self, url: str, data: bytes) -> None:
        pix = QPixmap()
        if not pix.loadFromData(data):
            self._on_failed(url, "unsupported image data")
            return
        self._pixmap = pix
        self._rescale()

    def _on_failed(self, url: str, error: str) -> None:
        self.setText("Preview unavailable")

    def _rescale(self) -> None:
        if self._pixmap is None:
            return
        self.setPixmap(
            self._pixmap.scaled(
                self.size(),
                Qt.AspectRatioMode.KeepAspectRatio,
                Qt.TransformationMode.SmoothTransformation,
            )
        )

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._rescale()


class ImagePreviewWidget(MediaPreviewWidget):
    def __init__(self, preview: PreviewDTO, parent: Optional[QWidget] = None):
        super().__init__(preview, parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self.image_label = _RemotePixmapLabel("Loading…", self)
        layout.addWidget(self.image_label)
        self.image_label.load(preview.url)

    def _release_resources(self) -> None:
        self.image_label.cancel()


class _MpvSignals(QObject):
    """mpv calls observers on its own thread; these hop back to the GUI thread."""
    started = pyqtSignal()


class _PlayerPreviewWidget(MediaPreviewWidget):
    """Shared mpv plumbing for audio and video previews."""

    def __init__(self, preview: PreviewDTO, parent: Optional[QWidget] = None):
        super().__init__(preview, parent)
        self.player = None
        self.signals = _MpvSignals(self)
        self._started = False

    def _player_options(self) -> dict:
        return {}

    def start(self) -> bool:
        """Start playback. False when libmpv is not available."""
        try:
            # libmpv is loaded on import; the rest of the UI works without it.
            import mpv
        except (ImportError, OSError) as e:
            logger.warning(f"Preview playback unavailable, mpv failed to load: {e}")
            return False

        logger.info(f"Preview playback: {self.preview.kind} {self._play_url()}")
        self.player = mpv.MPV(
            osc="no",
            input_default_bindings="no",
            keep_open="yes",
            msg_level="all=no",
            **self._player_options(),
        )
        self.player.observe_property("time-pos", self._mpv_time)
        self.player.play(self._play_url())
        return True

    def _play_url(self) -> str:
        return self.preview.url

    # mpv callbacks (mpv event thread)

    def _mpv_time(self, _, value) -> None:
        if value is not None and not self._started:
            self._started = True
            self.signals.started.emit()

    def _release_resources(self) -> None:
        player, self.player = self.player, None
        if player is not None:
            player.terminate()


class AudioPreviewWidget(_PlayerPreviewWidget):
    def __init__(self, preview: PreviewDTO, parent: Optional[QWidget] = None):
        super().__init__(preview, parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(Spacing.XL, Spacing.XL, Spacing.XL, Spacing.XL)
        layout.setSpacing(Spacing.MD)

        self.poster = _RemotePixmapLabel("", self)
        layout.addWidget(self.poster, 1)

        icon = QLabel(self)
        icon.setAlignment(Qt.AlignmentFlag.AlignCenter)
        icon.setPixmap(qta.icon("fa5s.music", color=Colors.TEXT_SECONDARY).pixmap(Spacing.ICON_LG, Spacing.ICON_LG))
        layout.addWidget(icon)

        self.poster.load(preview.poster_url)
        if not self.start() and not preview.poster_url:
            self.poster.setText(PLAYBACK_UNAVAILABLE)

    def _player_options(self) -> dict:
        return {"video": "no"}

    def _release_resources(self) -> None:
        self.poster.cancel()
        super()._release_resources()


class VideoPreviewWidget(_PlayerPreviewWidget):
    """Video player; the thumbnail stays up as a poster until playback starts."""

    def __init__(self, preview: PreviewDTO, parent: Optional[QWidget] = None):
        super().__init__(preview, parent)
        self._stack = QStackedLayout(self)

        self.video_container = QWidget(self)
        self.video_container.setAttribute(Qt.WidgetAttribute.WA_NativeWindow)
        self.video_container.setAttribute(Qt.WidgetAttribute.WA_DontCreateNativeAncestors)
        self.video_container.setStyleSheet("background-color: black;")
        self.poster = _RemotePixmapLabel("", self)
        self._stack.addWidget(self.video_container)
        self._stack.addWidget(self.poster)

        if preview.poster_url:
            self._stack.setCurrentWidget(self.poster)
            self.poster.load(preview.poster_url)
        else:
            self._stack.setCurrentWidget(self.video_container)
        self.signals.started.connect(self._on_started)
        if not self.start():
            self._stack.setCurrentWidget(self.poster)
            if not preview.poster_url:
                self.poster.setText(PLAYBACK_UNAVAILABLE)

    def _player_options(self) -> dict:
        return {"wid": int(self.video_container.winId())}

    def _on_started(self) -> None:
        if not self.released:
            self._stack.setCurrentWidget(self.video_container)

    def _release_resources(self) -> None:
        self.poster.cancel()
        super()._release_resources()


class EmbedPreviewWidget(VideoPreviewWidget):
    """YouTube player; mpv resolves the stream through its yt-dlp hook."""

    def _player_options(self) -> dict:
        options = super()._player_options()
        options.update(ytdl="yes", ytdl_format="bestvideo[height<=?1080]+bestaudio/best")
        return options

    def _play_url(self) -> str:
        if self.preview.video_id:
            return WATCH_URL_TEMPLATE.format(video_id=self.preview.video_id)
        return self.preview.url


_WIDGETS = {
    "embed": EmbedPreviewWidget,
    "audio": AudioPreviewWidget,
    "image": ImagePreviewWidget,
    "video": VideoPreviewWidget,
}


def create_media_widget(preview: PreviewDTO, parent: Optional[QWidget] = None) -> MediaPreviewWidget:
    widget_cls = _WIDGETS.get(preview.kind, VideoPreviewWidget)
    return widget_cls(preview, parent)
