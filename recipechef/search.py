"""Recipe search queries: parsing, matching and turning back into text."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .tags import _metadata_tags, is_valid_tag

_TRIM_RE = re.compile(r"^[\s()]+|[\s()]+$")
_NESTED_CHARS = frozenset("| ()")


@dataclass
class RecipeData:
    """What the search looks at for one recipe."""

    metadata: Mapping[str, Any] | None = None
    ingredients: list[str] = field(default_factory=list)
    cookware: list[str] = field(default_factory=list)


class Searcher:
    """A node of a parsed search query."""

    def matches_recipe(self, name: str, tokens: RecipeData) -> bool:
        raise NotImplementedError

    def to_query(self) -> str:
        raise NotImplementedError


@dataclass(frozen=True)
class All(Searcher):
    items: tuple[Searcher, ...] = ()

    def matches_recipe(self, name: str, tokens: RecipeData) -> bool:
        return all(s.matches_recipe(name, tokens) for s in self.items)

    def to_query(self) -> str:
        return " ".join(
            f"({s.to_query()})" if isinstance(s, Any) else s.to_query()
            for s in self.items
        )


@dataclass(frozen=True)
class Any(Searcher):
    items: tuple[Searcher, ...] = ()

    def matches_recipe(self, name: str, tokens: RecipeData) -> bool:
        return not self.items or any(s.matches_recipe(name, tokens) for s in self.items)

    def to_query(self) -> str:
        return " | ".join(s.to_query() for s in self.items)


@dataclass(frozen=True)
class Not(Searcher):
    inner: Searcher

    def matches_recipe(self, name: str, tokens: RecipeData) -> bool:
        return not self.inner.matches_recipe(name, tokens)

    def to_query(self) -> str:
        text = self.inner.to_query()
        if isinstance(self.inner, (All, Any)):
            return f"!({text})"
        return f"!{text}"


@dataclass(frozen=True)
class NamePart(Searcher):
    text: str

    def matches_recipe(self, name: str, tokens: RecipeData) -> bool:
        return self.text in name.lower()

    def to_query(self) -> str:
        return self.text.replace(" ", "+")


@dataclass(frozen=True)
class Tag(Searcher):
    tag: str

    def matches_recipe(self, name: str, tokens: RecipeData) -> bool:
        if tokens.metadata is None:
            return False
        return any(self.tag in t for t in _metadata_tags(tokens.metadata) or ())

    def to_query(self) -> str:
        return f"tag:{self.tag}".replace(" ", "+")


@dataclass(frozen=True)
class Ingredient(Searcher):
    name: str

    def matches_recipe(self, name: str, tokens: RecipeData) -> bool:
        return any(self.name in i.lower() for i in tokens.ingredients)

    def to_query(self) -> str:
        return f"ingredient:{self.name}".replace(" ", "+")


@dataclass(frozen=True)
class Cookware(Searcher):
    name: str

    def matches_recipe(self, name: str, tokens: RecipeData) -> bool:
        return any(self.name in c.lower() for c in tokens.cookware)

    def to_query(self) -> str:
        return f"cookware:{self.name}".replace(" ", "+")


def error_correct_query(query: str) -> str:
    """Balance the parentheses of *query*."""
    depth = 0
    pad_left = 0
    for ch in query:
        if ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                pad_left += 1
            else:
                depth -= 1
    return "(" * pad_left + query + ")" * depth


def _split_top_level(query: str, is_separator) -> list[str]:
    depth = 0
    start = 0
    chunks = []
    for pos, ch in enumerate(query):
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif depth == 0 and is_separator(ch):
            if start != pos:
                chunks.append(query[start:pos].strip())
            start = pos + 1
    if start < len(query):
        chunks.append(query[start:].strip())
    return chunks


def parse_disjunct_chunks(query: str) -> list[str]:
    """Split *query* on top level ``|``."""
    return _split_top_level(query, lambda ch: ch == "|")


def parse_conjunct_chunks(query: str) -> list[str]:
    """Split *query* on top level whitespace."""
    return _split_top_level(query, str.isspace)


def _parse_term(part: str) -> Searcher | None:
    part = part.replace("+", " ")
    if part.startswith("tag:"):
        tag = part[len("tag:"):]
        return Tag(tag) if is_valid_tag(tag) else None
    if part.startswith("ingredient:"):
        return Ingredient(part[len("ingredient:"):])
    if part.startswith("cookware:"):
        return Cookware(part[len("cookware:"):])
    return NamePart(part)


def _parse(query: str) -> Searcher:
    q = error_correct_query(_TRIM_RE.sub("", query))
    parts = parse_disjunct_chunks(q)
    if len(parts) == 1:
        parts = parse_conjunct_chunks(q)
        combine = All
    else:
        combine = Any

    items: list[Searcher] = []
    for part in parts:
        negated = part.startswith("!")
        if negated:
            part = part[1:]
        if _NESTED_CHARS.intersection(part):
            node: Searcher | None = _parse(part)
        else:
            node = _parse_term(part)
        if node is None:
            continue
        items.append(Not(node) if negated else node)

    if len(items) == 1:
        return items[0]
    return combine(tuple(items))


def parse_search(query: str | None) -> Searcher:
    """Parse a search box query; an empty or missing query matches everything."""
    if not query:
        return All()
    return _parse(query)