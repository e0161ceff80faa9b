"""Helpers of the recipe web server: template filters, path checks and static files."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from pathlib import Path, PureWindowsPath
from typing import Any

IMAGE_EXTENSIONS = ("jpeg", "jpg", "png", "webp")
COOK_CONTENT_TYPE = "text/plain; charset=utf-8"
INDEX_HTML = "index.html"

_YOUTUBE_RE = re.compile(
    r"^(https?://)?(www\.)?youtube\.\w+/watch\?v=(?P<videoid>[^&]*)\Z"
)

_FRACTIONS = {
    "1/2": "½",
    "1/3": "⅓",
    "2/3": "⅔",
    "1/4": "¼",
    "3/4": "¾",
    "1/5": "⅕",
    "2/5": "⅖",
    "3/5": "⅗",
    "4/5": "⅘",
    "1/6": "⅙",
    "5/6": "⅚",
    "1/7": "⅐",
    "1/8": "⅛",
    "3/8": "⅜",
    "5/8": "⅝",
    "7/8": "⅞",
    "1/9": "⅑",
    "1/10": "⅒",
}


class BadRequestPath(ValueError):
    """A requested path that must not be served."""

    status = 400


def unicode_fraction(value: str) -> str:
    """The single character form of a common fraction, or *value* unchanged."""
    return _FRACTIONS.get(value, value)


def zeroless_float(value: float) -> int | float:
    """An integer when *value* has no fractional part, else *value*."""
    value = float(value)
    return int(value) if value.is_integer() else value


def youtube_video_id(url: str) -> str | None:
    """The video id of a YouTube watch URL."""
    match = _YOUTUBE_RE.match(url)
    return match.group("videoid") if match else None


def select_value(mapping: Mapping[Any, Any]) -> dict[Any, Any]:
    """The entries of *mapping* whose value is truthy."""
    if not isinstance(mapping, Mapping):
        raise TypeError("select_value only supports a mapping")
    return {key: value for key, value in mapping.items() if value}


def _is_plain_component(segment: str) -> bool:
    if os.name != "nt":
        return True
    if PureWindowsPath(segment).anchor:
        return False
    return all(p not in (".", "..") for p in segment.replace("\\", "/").split("/"))


def check_path(path: str) -> tuple[str, ...]:
    """The parts of a relative request path; raises :class:`BadRequestPath` otherwise."""
    if path.startswith("/"):
        raise BadRequestPath(f"absolute path not allowed: {path!r}")
    parts = []
    for index, segment in enumerate(path.split("/")):
        if segment == "":
            continue
        if segment == ".":
            if index == 0:
                raise BadRequestPath(f"invalid path: {path!r}")
            continue
        if segment == ".." or not _is_plain_component(segment):
            raise BadRequestPath(f"invalid path: {path!r}")
        parts.append(segment)
    return tuple(parts)


def clean_path(path: Path | str, base_path: Path | str) -> str:
    """*path* relative to *base_path*, with ``/`` separators."""
    try:
        relative = Path(path).relative_to(base_path)
    except ValueError:
        raise ValueError(
            f"dir entry path not relative to base path: {path} ({base_path})"
        ) from None
    return relative.as_posix()


def is_served_file(url_path: str) -> bool:
    """Whether a file under the collection may be served: recipes and images only."""
    if "." not in url_path:
        return False
    ext = url_path.rsplit(".", 1)[1]
    return ext == "cook" or ext in IMAGE_EXTENSIONS


def static_asset_path(url_path: str) -> str | None:
    """The bundled asset name for *url_path*; ``None`` means redirect to the index."""
    path = url_path.lstrip("/")
    if not path or path == INDEX_HTML:
        return None
    return path