import math

import pytest

from recipechef.web import (
    BadRequestPath,
    check_path,
    clean_path,
    is_served_file,
    select_value,
    static_asset_path,
    unicode_fraction,
    youtube_video_id,
    zeroless_float,
)


def test_unicode_fraction_known():
    assert unicode_fraction("1/2") == "½"
    assert unicode_fraction("7/8") == "⅞"


def test_unicode_fraction_passthrough():
    assert unicode_fraction("7/3") == "7/3"


def test_zeroless_float():
    whole = zeroless_float(2.0)
    assert whole == 2 and isinstance(whole, int)
    assert zeroless_float(2.5) == 2.5
    assert math.isinf(zeroless_float(float("inf")))


def test_youtube_video_id():
    assert youtube_video_id("https://www.youtube.com/watch?v=abc123") == "abc123"
    assert youtube_video_id("youtube.com/watch?v=xyz") == "xyz"


def test_youtube_video_id_rejects():
    assert youtube_video_id("https://youtube.com/watch?v=x&t=1") is None
    assert youtube_video_id("https://example.com/watch?v=x") is None


def test_select_value():
    assert select_value({"a": 1, "b": 0, "c": "", "d": "x"}) == {"a": 1, "d": "x"}


def test_select_value_requires_mapping():
    with pytest.raises(TypeError):
        select_value([1, 2])


def test_check_path_valid():
    assert check_path("a/b.cook") == ("a", "b.cook")
    assert check_path("a//b/") == ("a", "b")
    assert check_path("a/./b") == ("a", "b")
    assert check_path("") == ()


@pytest.mark.parametrize("path", ["../x", "a/../b", "/etc/passwd", "./a"])
def test_check_path_invalid(path):
    with pytest.raises(BadRequestPath):
        check_path(path)


def test_clean_path(tmp_path):
    assert clean_path(tmp_path / "d" / "r.cook", tmp_path) == "d/r.cook"


def test_clean_path_outside(tmp_path):
    with pytest.raises(ValueError):
        clean_path(tmp_path.parent / "other.cook", tmp_path)


def test_is_served_file():
    assert is_served_file("/a/b.cook")
    assert is_served_file("/img.jpg")
    assert not is_served_file("/x.txt")
    assert not is_served_file("/noext")


def test_static_asset_path():
    assert static_asset_path("/") is None
    assert static_asset_path("/index.html") is None
    assert static_asset_path("") is None
    assert static_asset_path("/css/style.css") == "css/style.css"
    assert static_asset_path("//x") == "x"