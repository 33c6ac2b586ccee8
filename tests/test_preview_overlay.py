import pytest
from PyQt6.QtCore import QPoint, Qt
from PyQt6.QtWidgets import QLineEdit, QVBoxLayout, QWidget

from sentirax.core.dto import PreviewDTO
from sentirax.ui.preview import DismissReason, MediaPreviewWidget, PreviewOverlay, open_preview


class StubMedia(MediaPreviewWidget):
    """Media widget that only counts releases."""

    instances = []

    def __init__(self, preview, parent=None):
        super().__init__(preview, parent)
        self.release_count = 0
        StubMedia.instances.append(self)

    def _release_resources(self):
        self.release_count += 1


@pytest.fixture
def host(qtbot):
    widget = QWidget()
    layout = QVBoxLayout(widget)
    widget.field = QLineEdit()
    layout.addWidget(widget.field)
    qtbot.addWidget(widget)
    widget.resize(900, 700)
    widget.show()
    return widget


@pytest.fixture
def preview():
    return PreviewDTO(kind="video", url="https://cdn.x/v.mp4", poster_url="https://cdn.x/t.jpg")


def _open(host, preview):
    overlay = open_preview(host, preview, content_factory=StubMedia)
    overlay.layout().activate()
    return overlay


def _assert_torn_down(overlay):
    assert not overlay.has_event_filter
    assert not overlay.is_open
    assert overlay.media_widget.released
    assert overlay.media_widget.release_count == 1


def test_open_installs_filter_and_covers_host(host, preview):
    overlay = _open(host, preview)

    assert overlay.is_open
    assert overlay.has_event_filter
    assert overlay.geometry() == host.rect()
    assert overlay.isVisible()
    overlay.dismiss()


def test_close_button(qtbot, host, preview):
    overlay = _open(host, preview)

    with qtbot.waitSignal(overlay.dismissed) as blocker:
        qtbot.mouseClick(overlay.close_button, Qt.MouseButton.LeftButton)

    assert blocker.args == [DismissReason.CLOSE_BUTTON]
    _assert_torn_down(overlay)


def test_escape_key(qtbot, host, preview):
    overlay = _open(host, preview)

    with qtbot.waitSignal(overlay.dismissed) as blocker:
        qtbot.keyClick(overlay, Qt.Key.Key_Escape)

    assert blocker.args == [DismissReason.ESCAPE]
    _assert_torn_down(overlay)


def test_click_outside_content(qtbot, host, preview):
    overlay = _open(host, preview)
    assert not overlay.content_frame.geometry().contains(QPoint(2, 2))

    with qtbot.waitSignal(overlay.dismissed) as blocker:
        qtbot.mouseClick(overlay, Qt.MouseButton.LeftButton, pos=QPoint(2, 2))

    assert blocker.args == [DismissReason.OUTSIDE_CLICK]
    _assert_torn_down(overlay)


def test_click_inside_content_keeps_overlay_open(qtbot, host, preview):
    overlay = _open(host, preview)
    inside = overlay.content_frame.geometry().center()

    qtbot.mouseClick(overlay, Qt.MouseButton.LeftButton, pos=inside)

    assert overlay.is_open
    assert overlay.has_event_filter
    overlay.dismiss()


def test_dismiss_is_idempotent_and_deletes_overlay(qtbot, host, preview):
    overlay = _open(host, preview)
    emitted = []
    overlay.dismissed.connect(emitted.append)

    with qtbot.waitSignal(overlay.destroyed):
        overlay.dismiss()
        overlay.dismiss(DismissReason.ESCAPE)

    assert emitted == [DismissReason.PROGRAMMATIC]


def test_escape_after_close_reaches_page(qtbot, host, preview):
    overlay = _open(host, preview)
    overlay.dismiss()

    # Filter is gone: Escape is delivered normally and nothing is dismissed twice.
    host.field.setFocus()
    qtbot.keyClick(host.field, Qt.Key.Key_Escape)
    assert overlay.media_widget.release_count == 1


def test_follows_host_resize(qtbot, host, preview):
    overlay = _open(host, preview)

    host.resize(1000, 760)
    qtbot.waitUntil(lambda: overlay.geometry() == host.rect())
    overlay.dismiss()


def test_overlay_class_can_be_built_without_opening(host, preview):
    overlay = PreviewOverlay(host, preview, content_factory=StubMedia)

    assert not overlay.is_open
    assert not overlay.has_event_filter
    overlay.dismiss()
    assert overlay.media_widget.released
