import pytest

from sentirax.core.errors import InvalidUrl
from sentirax.core.validators import is_valid_url, require_valid_url


@pytest.mark.parametrize(
    "value",
    [
        "https://www.instagram.com/p/abc/",
        "http://example.com",
        "HTTPS://Example.com/path?q=1#frag",
        "https://youtu.be/dQw4w9WgXcQ",
        "http://localhost:8080/x",
        "https://example.com/a b",
        "https://example.com/search?q=cat video",
    ],
)
def test_accepts_absolute_http_urls(value):
    assert is_valid_url(value)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not a url",
        "/relative/path",
        "example.com/video",
        "ftp://example.com/file.mp4",
        "javascript:alert(1)",
        "mailto:someone@example.com",
        "https://",
        "http:///path-only",
        "https://example.com:99999/",
        "https://exa mple.com/video",
        None,
    ],
)
def test_rejects_everything_else(value):
    assert not is_valid_url(value)


def test_require_valid_url_trims_whitespace():
    assert require_valid_url("  https://example.com/a  \n") == "https://example.com/a"


def test_require_valid_url_raises_invalid_url():
    with pytest.raises(InvalidUrl) as excinfo:
        require_valid_url("not a url")
    assert excinfo.value.value == "not a url"
    # also usable as a plain ValueError
    assert isinstance(excinfo.value, ValueError)
