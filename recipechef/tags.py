"""Recipe tag rules and the metadata validator used when parsing recipes."""

from __future__ import annotations

import enum
import re
import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

MAX_TAG_LENGTH = 32

IS_VALID_TAG_MSG = (
    "The tag should only have lower case letters and numbers separated by a "
    "single hyphen ('-')"
)
TAG_TOO_LONG_MSG = "The tag is too long"
TAG_EMPTY_MSG = "The tag is empty"
NOT_EMOJI_MSG = "Value is not an emoji"
KEY_NOT_STRING_MSG = "Metadata key is not a string"

_EMOJI_JOINERS = frozenset("\u200d\ufe0f\u20e3")


class Severity(enum.Enum):
    """Outcome level of a metadata check."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class CheckResult:
    """Result of validating one metadata entry.

    ``include`` tells whether the entry should be kept in the recipe metadata.
    """

    severity: Severity = Severity.OK
    messages: tuple[str, ...] = ()
    include: bool = True

    @property
    def ok(self) -> bool:
        return self.severity is Severity.OK


def _is_tag_char(ch: str) -> bool:
    return unicodedata.category(ch) == "Ll" or ch.isdecimal()


def is_valid_tag(tag: str) -> bool:
    """Tell whether *tag* is 1-32 lower case letters and digits, hyphen separated,
    starting with a letter."""
    if not 1 <= len(tag) <= MAX_TAG_LENGTH:
        return False
    if unicodedata.category(tag[0]) != "Ll":
        return False
    return all(part and all(map(_is_tag_char, part)) for part in tag.split("-"))


def _as_tags(value: Any) -> list[str] | None:
    """Read a metadata value as a list of tags: a comma separated string or a list."""
    if isinstance(value, str):
        return value.split(",")
    if isinstance(value, (list, tuple)):
        if all(isinstance(item, str) for item in value):
            return list(value)
        return None
    return None


def _metadata_tags(metadata: Mapping[str, Any] | None) -> list[str] | None:
    if not metadata:
        return None
    tags = _as_tags(metadata.get("tags"))
    if tags is None:
        return None
    return [t.strip() for t in tags]


def _is_emoji(text: str) -> bool:
    if not text:
        return False
    has_symbol = False
    for ch in text:
        code = ord(ch)
        if unicodedata.category(ch) == "So":
            has_symbol = True
        elif ch in _EMOJI_JOINERS or 0x1F3FB <= code <= 0x1F3FF or 0xE0020 <= code <= 0xE007F:
            continue
        else:
            return False
    return has_symbol


def _get_emoji(text: str) -> str | None:
    """Return the emoji for *text*, given as an emoji or a ``:short_code:``."""
    if len(text) >= 2 and text.startswith(":") and text.endswith(":"):
        code = text[1:-1].replace("_", " ").replace("-", " ").upper()
        if not code:
            return None
        try:
            found = unicodedata.lookup(code)
        except KeyError:
            return None
        return found if _is_emoji(found) else None
    return text if _is_emoji(text) else None


def validate_metadata(key: Any, value: Any) -> CheckResult:
    """Check one metadata entry of a recipe."""
    if not isinstance(key, str):
        return CheckResult(Severity.ERROR, (KEY_NOT_STRING_MSG,), include=False)

    if key in ("tag", "tags"):
        tags = _as_tags(value)
        for tag in tags or ():
            tag = tag.strip()
            if not tag:
                return CheckResult(Severity.WARNING, (TAG_EMPTY_MSG,))
            if len(tag) > MAX_TAG_LENGTH:
                return CheckResult(Severity.WARNING, (TAG_TOO_LONG_MSG,))
            if not is_valid_tag(tag):
                return CheckResult(Severity.WARNING, (IS_VALID_TAG_MSG,))
    elif key == "emoji":
        if not isinstance(value, str) or _get_emoji(value) is None:
            return CheckResult(Severity.WARNING, (NOT_EMOJI_MSG,), include=False)
    return CheckResult()


def meta_name(metadata: Mapping[str, Any]) -> str | None:
    """The recipe name from metadata: the first of ``name`` or ``title`` present."""
    for key in ("name", "title"):
        if key in metadata:
            value = metadata[key]
            return value if isinstance(value, str) else None
    return None


_ = re  # kept for callers compiling tag patterns alongside these helpers