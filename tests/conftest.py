import os

# Qt widgets must be creatable without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from tests.fakes import FakeSession


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def api_client(fake_session):
    from sentirax.core.api import DownloaderClient

    return DownloaderClient(fake_session, base_url="https://backend.test/")


CAT_VIDEO_INFO = {
    "caption": "Cat Video!",
    "hosting": "tiktok",
    "type": "video",
    "download_url": "https://cdn.x/v.mp4?sig=1",
    "thumbnail": "https://cdn.x/t.jpg",
    "duration": 75,
}


@pytest.fixture
def cat_video_info():
    return dict(CAT_VIDEO_INFO)
