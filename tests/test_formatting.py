import math

import pytest

from sentirax.core.formatting import (
    build_filename,
    format_duration,
    guess_extension,
    sanitize_filename,
    to_seconds,
)


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (0, "00:00"),
        (65, "01:05"),
        (75, "01:15"),
        (59.9, "00:59"),
        (3599, "59:59"),
        (3600, "1:00:00"),
        (3661, "1:01:01"),
        (3725, "1:02:05"),
        (-5, "00:00"),
    ],
)
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_format_duration_non_finite_is_empty(value):
    assert format_duration(value) == ""


def test_to_seconds():
    assert to_seconds(12) == 12.0
    assert to_seconds("42.5") == 42.5
    assert math.isnan(to_seconds(None))
    assert math.isnan(to_seconds(True))
    assert math.isnan(to_seconds("abc"))
    assert math.isnan(to_seconds(""))
    assert math.isnan(to_seconds({"s": 1}))


def test_to_seconds_past_float_range_is_infinite():
    assert to_seconds(int("9" * 400)) == math.inf
    assert to_seconds(-int("9" * 400)) == -math.inf
    assert format_duration(to_seconds(int("9" * 400))) == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("Cat Video!", "cat-video"),
        ("My Cool Video!! 2024", "my-cool-video-2024"),
        ("  --Hello   World..  ", "hello-world"),
        ("a__b.c-d", "a__b.c-d"),
        ("Ünïcödé ✓ title", "n-c-d-title"),
        ("!!!", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_sanitize_filename(value, expected):
    assert sanitize_filename(value) == expected


@pytest.mark.parametrize(
    "link, media_type, expected",
    [
        ("https://cdn.x/v.mp4?sig=1", "video", ".mp4"),
        ("https://cdn.x/clip.WEBM", "video", ".webm"),
        ("https://cdn.x/song.m4a#t=3", "audio", ".m4a"),
        ("https://cdn.x/photo.jpeg", "image", ".jpeg"),
        ("https://cdn.x/file.mp4.tmp", "audio", ".mp3"),
        ("https://cdn.x/stream", "audio", ".mp3"),
        ("https://cdn.x/stream", "image", ".jpg"),
        ("https://cdn.x/stream", "document", ".bin"),
        ("", "video", ".mp4"),
        (None, "video", ".mp4"),
    ],
)
def test_guess_extension(link, media_type, expected):
    assert guess_extension(link, media_type) == expected


def test_extension_must_end_the_path():
    # ".mp4" in the middle of a path segment is not an extension
    assert guess_extension("https://cdn.x/a.mp4x/file", "audio") == ".mp3"


def test_build_filename_falls_back_when_title_sanitizes_to_nothing():
    assert build_filename("!!!", "https://cdn.x/v.mov", "video") == "instagram-media.mov"
    assert build_filename("Cat Video!", "https://cdn.x/v.mp4?sig=1", "video") == "cat-video.mp4"


def test_build_filename_suffix_sits_before_extension():
    assert build_filename("Cat Video!", "https://cdn.x/t.png", "image", suffix="-thumb") == "cat-video-thumb.png"
    assert build_filename("???", None, "image", fallback="thumbnail", suffix="-thumb") == "thumbnail-thumb.jpg"
