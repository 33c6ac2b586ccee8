import pytest
import requests

from sentirax.core.api import extract_error_message
from sentirax.core.errors import RequestFailed
from tests.fakes import FakeResponse


def test_fetch_info_posts_url_without_cache(api_client, fake_session, cat_video_info):
    fake_session.queue(FakeResponse(200, cat_video_info))

    data = api_client.fetch_info("https://www.tiktok.com/@cat/video/1")

    assert data == cat_video_info
    call = fake_session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "https://backend.test/api/info"
    assert call["json"] == {"url": "https://www.tiktok.com/@cat/video/1", "db_cache": False}
    assert call["headers"]["Content-Type"] == "application/json"
    assert fake_session.headers["Accept"] == "application/json"


def test_error_detail_is_surfaced(api_client, fake_session):
    fake_session.queue(FakeResponse(500, {"detail": "rate limited"}, reason="Internal Server Error"))

    with pytest.raises(RequestFailed) as excinfo:
        api_client.fetch_info("https://example.com/x")

    assert excinfo.value.message == "rate limited"
    assert excinfo.value.status == 500


def test_non_json_error_body_is_used_as_message(api_client, fake_session):
    fake_session.queue(FakeResponse(502, text="Bad gateway from upstream", reason="Bad Gateway"))

    with pytest.raises(RequestFailed) as excinfo:
        api_client.fetch_info("https://example.com/x")

    assert excinfo.value.message == "Bad gateway from upstream"


def test_empty_error_body_falls_back_to_reason(api_client, fake_session):
    fake_session.queue(FakeResponse(404, {}, reason="Not Found"))

    with pytest.raises(RequestFailed) as excinfo:
        api_client.fetch_info("https://example.com/x")

    assert excinfo.value.message == "Not Found"


def test_transport_error_is_wrapped(api_client, fake_session):
    fake_session.queue(requests.ConnectionError("connection refused"))

    with pytest.raises(RequestFailed) as excinfo:
        api_client.fetch_info("https://example.com/x")

    assert "connection refused" in excinfo.value.message
    assert isinstance(excinfo.value.__cause__, requests.ConnectionError)
    assert excinfo.value.status is None


@pytest.mark.parametrize("response", [FakeResponse(200, text="<html>sleeping</html>"), FakeResponse(200, ["a", "b"])])
def test_malformed_success_body_fails(api_client, fake_session, response):
    fake_session.queue(response)

    with pytest.raises(RequestFailed):
        api_client.fetch_info("https://example.com/x")


def test_no_retry_after_failure(api_client, fake_session):
    fake_session.queue(FakeResponse(503, {"error": "asleep"}))
    fake_session.queue(FakeResponse(200, {"title": "never fetched"}))

    with pytest.raises(RequestFailed):
        api_client.fetch_info("https://example.com/x")

    assert len(fake_session.calls) == 1


@pytest.mark.parametrize(
    "body, reason, expected",
    [
        ({"detail": "d", "message": "m", "error": "e"}, "R", "d"),
        ({"message": "m", "error": "e"}, "R", "m"),
        ({"error": "e"}, "R", "e"),
        ({"detail": ""}, "R", "R"),
        ({}, "", "Request failed"),
        ({"detail": {"code": 1}}, None, '{"code": 1}'),
        ("plain", None, "Request failed"),
    ],
)
def test_extract_error_message(body, reason, expected):
    assert extract_error_message(body, reason) == expected


def test_build_download_url_encodes_query(api_client):
    url = api_client.build_download_url("https://cdn.x/v.mp4?sig=1&a=b", "cat video.mp4")

    assert url == (
        "https://backend.test/api/download?url=https%3A%2F%2Fcdn.x%2Fv.mp4%3Fsig%3D1%26a%3Db"
        "&filename=cat+video.mp4"
    )
