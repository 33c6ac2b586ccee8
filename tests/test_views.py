import json
import logging
import threading

import pytest

from sentirax.core.downloads import DownloadTrigger
from sentirax.core.errors import RequestFailed
from sentirax.core.flows import ResultsFlow, SubmissionFlow
from sentirax.core.session_store import RESULT_STORAGE_KEY, SessionStore
from sentirax.ui.views import HomeView, ResultsView
from sentirax.ui.views import results_view as results_view_module
from sentirax.ui.views.home_view import BUSY_LABEL, INVALID_URL_MESSAGE, SUBMIT_LABEL
from sentirax.ui.preview import open_preview
from tests.fakes import FakeResponse
from tests.test_preview_overlay import StubMedia


@pytest.fixture
def store():
    return SessionStore()


@pytest.fixture
def home(qtbot, api_client, store, monkeypatch):
    view = HomeView(SubmissionFlow(api_client, store))
    qtbot.addWidget(view)
    view.warnings = []
    monkeypatch.setattr(view, "_show_warning", view.warnings.append)
    return view


def test_invalid_url_warns_without_request(home, fake_session):
    home.url_input.setText("not a url")
    home.handle_submit()

    assert home.warnings == [INVALID_URL_MESSAGE]
    assert fake_session.calls == []
    assert home.submit_button.isEnabled()
    assert home.url_input.text() == "not a url"


def test_successful_submit_stores_and_signals(qtbot, home, fake_session, store, cat_video_info):
    fake_session.queue(FakeResponse(200, cat_video_info))
    home.url_input.setText(" https://www.tiktok.com/@cat/video/1 ")

    with qtbot.waitSignal(home.submitted, timeout=5000) as blocker:
        home.handle_submit()
        assert home.is_busy
        assert not home.submit_button.isEnabled()
        assert home.submit_button.text() == BUSY_LABEL

    assert blocker.args[0].source_url == "https://www.tiktok.com/@cat/video/1"
    assert json.loads(store.get(RESULT_STORAGE_KEY))["data"] == cat_video_info
    assert not home.is_busy
    assert home.submit_button.isEnabled()
    assert home.submit_button.text() == SUBMIT_LABEL
    assert home.warnings == []


def test_failed_request_shows_backend_message(qtbot, home, fake_session, store):
    fake_session.queue(FakeResponse(500, {"detail": "rate limited"}))
    home.url_input.setText("https://example.com/x")

    home.handle_submit()
    qtbot.waitUntil(lambda: home.warnings == ["rate limited"], timeout=5000)

    assert not home.is_busy
    assert home.submit_button.isEnabled()
    assert RESULT_STORAGE_KEY not in store
    assert home.url_input.text() == "https://example.com/x"


def test_submit_ignored_while_busy(qtbot, home, fake_session, cat_video_info):
    fake_session.queue(FakeResponse(200, cat_video_info))
    home.url_input.setText("https://example.com/x")

    with qtbot.waitSignal(home.submitted, timeout=5000):
        home.handle_submit()
        home.handle_submit()

    assert len(fake_session.calls) == 1


class _BlockingFlow:
    """Submission flow whose request hangs until released."""

    def __init__(self):
        self.release = threading.Event()

    def validate(self, raw_url):
        return raw_url.strip()

    def fetch(self, url):
        self.release.wait(5)
        raise RequestFailed("connection closed")


def test_shutdown_abandons_request_that_outlives_timeout(qtbot, caplog):
    flow = _BlockingFlow()
    view = HomeView(flow)
    qtbot.addWidget(view)
    assert view.shutdown()

    view.url_input.setText("https://example.com/slow")
    view.handle_submit()
    worker = view._worker

    with caplog.at_level(logging.WARNING, logger="sentirax.ui.views.home_view"):
        assert not view.shutdown(timeout_ms=50)

    assert "abandoning" in caplog.text
    assert not view.is_busy
    assert view.submit_button.isEnabled()

    flow.release.set()
    assert worker.wait(5000)


# ----------------------------------------------------------------------
# Results view
# ----------------------------------------------------------------------


@pytest.fixture
def opened():
    return []


@pytest.fixture
def results(qtbot, api_client, store, opened, monkeypatch):
    monkeypatch.setattr(ResultsView, "_load_thumbnail", lambda self, url: None)
    monkeypatch.setattr(
        results_view_module,
        "open_preview",
        lambda host, preview: open_preview(host, preview, content_factory=StubMedia),
    )
    view = ResultsView(ResultsFlow(store), DownloadTrigger(api_client, opened.append))
    qtbot.addWidget(view)
    view.resize(1000, 700)
    view.show()
    return view


def _store(store, data, source_url="https://www.tiktok.com/@cat/video/1"):
    store.set(RESULT_STORAGE_KEY, json.dumps({"sourceUrl": source_url, "data": data, "fetchedAt": 1}))


def test_results_view_shows_derived_result(results, store, opened, cat_video_info):
    _store(store, cat_video_info)

    assert results.load()

    assert results.title_label.text() == "Cat Video!"
    assert results.meta_label.text() == "Source: tiktok • VIDEO"
    assert results.duration_label.text() == "01:15"
    assert results.status_label.text() == "Ready to download"
    assert results.primary_button.title == "Video"
    assert results.primary_button.subtitle == "Highest Quality"
    assert results.primary_button.isEnabled()
    assert results.thumbnail_button.isEnabled()
    assert not results.audio_button.isEnabled()
    assert results.preview_button.isEnabled()

    results.primary_button.click()
    results.thumbnail_button.click()

    assert len(opened) == 2
    assert opened[0].endswith("filename=cat-video.mp4")
    assert opened[1].endswith("filename=cat-video-thumb.jpg")


def test_results_view_without_download_url(results, store, opened):
    _store(store, {"caption": "Nothing here"}, source_url="")

    assert results.load()

    assert results.status_label.text() == "Download unavailable"
    assert not results.primary_button.isEnabled()
    assert not results.thumbnail_button.isEnabled()
    assert not results.preview_button.isEnabled()
    results.primary_button.click()
    assert opened == []


def test_results_view_without_storage_goes_home(qtbot, results):
    with qtbot.waitSignal(results.home_requested):
        assert not results.load()


def test_opening_preview_twice_closes_the_first(qtbot, results, store, cat_video_info):
    _store(store, cat_video_info)
    results.load()

    first = results.open_preview()
    second = results.open_preview()

    assert first is not second
    assert not first.is_open
    assert first.media_widget.released
    assert second.is_open

    results.clear()
    assert not second.is_open
    assert second.media_widget.released


def test_download_another_clears_and_goes_home(qtbot, results, store, cat_video_info):
    _store(store, cat_video_info)
    results.load()
    overlay = results.open_preview()

    with qtbot.waitSignal(results.home_requested):
        results.back_button.click()

    assert not overlay.has_event_filter
    assert results.result is None
