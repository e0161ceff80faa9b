"""Changes to recipe files in a collection and their server-sent event form."""

from __future__ import annotations

import enum
import json
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from .web import clean_path

COOK_SUFFIX = ".cook"


class UpdateKind(enum.Enum):
    """What happened to a recipe file."""

    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"
    RENAMED = "renamed"


@dataclass(frozen=True)
class Update:
    """A change to one recipe file.

    Paths are prefixed with the collection base path. For a rename, ``path`` is
    where the file was and ``to`` where it is now.
    """

    kind: UpdateKind
    path: Path
    to: Path | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))
        if self.kind is UpdateKind.RENAMED:
            if self.to is None:
                raise ValueError("a rename needs a destination path")
            object.__setattr__(self, "to", Path(self.to))
        elif self.to is not None:
            raise ValueError(f"only a rename has a destination path, not {self.kind.value}")

    def to_sse(self, base_path: Path | str) -> str:
        """The update as a server-sent event, paths relative to *base_path*."""
        relative = clean_path(self.path, base_path)
        if self.kind is UpdateKind.RENAMED:
            data = json.dumps(
                {"from": relative, "to": clean_path(self.to, base_path)},
                separators=(",", ":"),
            )
        else:
            data = relative
        lines = [f"event: {self.kind.value}"]
        lines.extend(f"data: {line}" for line in data.split("\n"))
        return "\n".join(lines) + "\n\n"


def _relative_cook_paths(base_path: Path, paths: Iterable[Path | str]) -> Iterator[Path]:
    for path in paths:
        try:
            relative = Path(path).relative_to(base_path)
        except ValueError:
            continue
        if relative.suffix == COOK_SUFFIX:
            yield relative


def relative_cook_paths(base_path: Path | str, paths: Iterable[Path | str]) -> list[Path]:
    """The recipe files among *paths* that lie under *base_path*, made relative to it."""
    return list(_relative_cook_paths(Path(base_path), paths))