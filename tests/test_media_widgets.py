import sys

import pytest

from sentirax.core.dto import PreviewDTO
from sentirax.ui.preview import create_media_widget
from sentirax.ui.preview.media_widgets import (
    PLAYBACK_UNAVAILABLE,
    AudioPreviewWidget,
    EmbedPreviewWidget,
    VideoPreviewWidget,
)


@pytest.fixture
def no_mpv(monkeypatch):
    # A None entry makes `import mpv` raise ImportError.
    monkeypatch.setitem(sys.modules, "mpv", None)


def test_audio_without_libmpv_shows_unavailable(qtbot, no_mpv):
    widget = AudioPreviewWidget(PreviewDTO(kind="audio", url="https://cdn.x/a.mp3"))
    qtbot.addWidget(widget)

    assert widget.player is None
    assert widget.poster.text() == PLAYBACK_UNAVAILABLE
    widget.release()
    widget.release()
    assert widget.released


def test_video_without_libmpv_falls_back_to_poster(qtbot, no_mpv):
    widget = VideoPreviewWidget(PreviewDTO(kind="video", url="https://cdn.x/v.mp4"))
    qtbot.addWidget(widget)

    assert widget.player is None
    assert widget._stack.currentWidget() is widget.poster
    assert widget.poster.text() == PLAYBACK_UNAVAILABLE
    widget.release()


def test_factory_picks_widget_by_kind(qtbot, no_mpv):
    embed = create_media_widget(
        PreviewDTO(kind="embed", url="https://youtu.be/dQw4w9WgXcQ", video_id="dQw4w9WgXcQ")
    )
    qtbot.addWidget(embed)

    assert isinstance(embed, EmbedPreviewWidget)
    assert embed._play_url() == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    embed.release()
