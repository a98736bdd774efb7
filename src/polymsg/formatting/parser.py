"""Parser for the ICU-style message pattern subset.

Supported placeholders::

    {name}
    {name, number}
    {name, number, integer|percent|<pattern>}
    {name, plural, [offset:N] =N{...} one{...} other{...}}
    {name, select, key{...} other{...}}

Anything that cannot be parsed is kept as a literal :class:`TextNode` holding
the original span, so rendering never fails on a malformed pattern.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Mapping, Union

from .plurals import PLURAL_CATEGORIES

_NAME_PATTERN = re.compile(r"^[\w.-]+$")
_SELECTOR_PATTERN = re.compile(r"[^\s{}]+")
_OFFSET_PATTERN = re.compile(r"offset:\s*(\d+)")


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class PoundNode:
    """``#`` inside a plural branch, replaced by the formatted number."""


@dataclass(frozen=True)
class ArgumentNode:
    name: str
    source: str


@dataclass(frozen=True)
class NumberNode:
    name: str
    style: str | None
    source: str


@dataclass(frozen=True)
class PluralNode:
    name: str
    offset: int
    exact: Mapping[Decimal, Message]
    branches: Mapping[str, Message]
    source: str


@dataclass(frozen=True)
class SelectNode:
    name: str
    branches: Mapping[str, Message]
    source: str


Node = Union[TextNode, PoundNode, ArgumentNode, NumberNode, PluralNode, SelectNode]
Message = tuple[Node, ...]


class PatternSyntaxError(ValueError):
    """Raised internally for a malformed placeholder; never leaves the parser."""


def _find_closing_brace(text: str, start: int) -> int:
    """Return the index of the brace closing the one at ``start`` or ``-1``."""

    depth = 0
    for index in range(start, len(text)):
        char = text[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


def _split_top_level(content: str, limit: int) -> list[str]:
    """Split ``content`` on commas outside nested braces, at most ``limit`` times."""

    parts: list[str] = []
    depth = 0
    last = 0
    for index, char in enumerate(content):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        elif char == "," and depth == 0 and len(parts) < limit:
            parts.append(content[last:index])
            last = index + 1
    parts.append(content[last:])
    return parts


def _parse_branches(body: str, in_plural: bool) -> dict[str, Message]:
    branches: dict[str, Message] = {}
    cursor = 0
    length = len(body)

    while cursor < length:
        while cursor < length and body[cursor].isspace():
            cursor += 1
        if cursor >= length:
            break

        match = _SELECTOR_PATTERN.match(body, cursor)
        if not match:
            raise PatternSyntaxError(f"Expected selector at offset {cursor}")
        selector = match.group(0)
        cursor = match.end()

        while cursor < length and body[cursor].isspace():
            cursor += 1
        if cursor >= length or body[cursor] != "{":
            raise PatternSyntaxError(f"Selector '{selector}' has no sub-message")

        closing = _find_closing_brace(body, cursor)
        if closing < 0:
            raise PatternSyntaxError(f"Unbalanced sub-message for '{selector}'")

        if selector in branches:
            raise PatternSyntaxError(f"Duplicate selector '{selector}'")
        branches[selector] = _parse_message(body[cursor + 1 : closing], in_plural)
        cursor = closing + 1

    if "other" not in branches:
        raise PatternSyntaxError("Missing 'other' branch")
    return branches


def _parse_plural(name: str, body: str, source: str) -> PluralNode:
    offset = 0
    stripped = body.lstrip()
    match = _OFFSET_PATTERN.match(stripped)
    if match:
        offset = int(match.group(1))
        stripped = stripped[match.end() :]

    exact: dict[Decimal, Message] = {}
    categories: dict[str, Message] = {}
    for selector, message in _parse_branches(stripped, in_plural=True).items():
        if selector.startswith("="):
            try:
                exact[Decimal(selector[1:])] = message
            except InvalidOperation as error:
                raise PatternSyntaxError(f"Invalid exact selector '{selector}'") from error
        elif selector in PLURAL_CATEGORIES:
            categories[selector] = message
        else:
            raise PatternSyntaxError(f"Unknown plural category '{selector}'")

    return PluralNode(name=name, offset=offset, exact=exact, branches=categories, source=source)


def _parse_placeholder(content: str, source: str, in_plural: bool) -> Node:
    parts = _split_top_level(content, limit=2)
    name = parts[0].strip()
    if not _NAME_PATTERN.match(name):
        raise PatternSyntaxError(f"Invalid argument name '{name}'")

    if len(parts) == 1:
        return ArgumentNode(name=name, source=source)

    kind = parts[1].strip()
    style = parts[2] if len(parts) > 2 else None

    if kind == "number":
        number_style = style.strip() if style is not None else None
        return NumberNode(name=name, style=number_style or None, source=source)
    if kind == "plural" and style is not None:
        return _parse_plural(name, style, source)
    if kind == "select" and style is not None:
        return SelectNode(
            name=name,
            branches=_parse_branches(style, in_plural),
            source=source,
        )

    raise PatternSyntaxError(f"Unsupported argument type '{kind}'")


def _parse_message(pattern: str, in_plural: bool) -> Message:
    nodes: list[Node] = []
    text: list[str] = []

    def flush() -> None:
        if text:
            nodes.append(TextNode("".join(text)))
            text.clear()

    index = 0
    length = len(pattern)
    while index < length:
        char = pattern[index]
        if char == "{":
            closing = _find_closing_brace(pattern, index)
            if closing < 0:
                # Unbalanced: keep the brace as text and carry on.
                text.append(char)
                index += 1
                continue

            source = pattern[index : closing + 1]
            try:
                node = _parse_placeholder(pattern[index + 1 : closing], source, in_plural)
            except PatternSyntaxError:
                text.append(source)
            else:
                flush()
                nodes.append(node)
            index = closing + 1
            continue

        if char == "#" and in_plural:
            flush()
            nodes.append(PoundNode())
        else:
            text.append(char)
        index += 1

    flush()
    return tuple(nodes)


@lru_cache(maxsize=512)
def parse_pattern(pattern: str) -> Message:
    """Parse ``pattern`` into an immutable sequence of nodes."""

    return _parse_message(pattern, in_plural=False)


def argument_names(pattern: str) -> set[str]:
    """Return the names of all arguments referenced by ``pattern``."""

    names: set[str] = set()

    def collect(message: Message) -> None:
        for node in message:
            if isinstance(node, (ArgumentNode, NumberNode)):
                names.add(node.name)
            elif isinstance(node, PluralNode):
                names.add(node.name)
                for branch in (*node.exact.values(), *node.branches.values()):
                    collect(branch)
            elif isinstance(node, SelectNode):
                names.add(node.name)
                for branch in node.branches.values():
                    collect(branch)

    collect(parse_pattern(pattern))
    return names


__all__ = [
    "ArgumentNode",
    "Message",
    "Node",
    "NumberNode",
    "PluralNode",
    "PoundNode",
    "SelectNode",
    "TextNode",
    "argument_names",
    "parse_pattern",
]
