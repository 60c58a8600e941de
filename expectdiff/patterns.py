"""Ignore-path expressions: ``order.cycles[*].index`` style patterns."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .exceptions import PatternParseError

logger = logging.getLogger(__name__)


class _Wildcard:
    """Marker for the ``[*]`` selector."""

    def __repr__(self) -> str:
        return "WILDCARD"


WILDCARD = _Wildcard()


@dataclass(frozen=True)
class Property:
    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class Index:
    selector: Union[int, _Wildcard]

    @property
    def is_wildcard(self) -> bool:
        return self.selector is WILDCARD

    def __str__(self) -> str:
        return "[*]" if self.is_wildcard else f"[{self.selector}]"


PathSegment = Union[Property, Index]
Pattern = tuple[PathSegment, ...]


def parse_pattern(text: str) -> Pattern:
    """
    Parse an ignore-path expression into segments.

    Grammar:
        pattern := (property | index) ("." property | index)*
        index   := "[" (digits | "*") "]"

    Examples:
        "success.price.tax"        -> Property, Property, Property
        "prices[*].price.tax"      -> Property, Index(*), Property, Property
        "items[0]"                 -> Property, Index(0)

    Raises:
        PatternParseError: on empty input, leading/trailing/doubled dots,
            empty or non-numeric brackets, or unbalanced brackets
    """
    source = text
    path = text.strip()
    if not path:
        raise PatternParseError(source, "pattern is empty")

    segments: list[PathSegment] = []
    i = 0
    # True when the next token has to be a property name (after a dot)
    expect_property = False

    while i < len(path):
        char = path[i]

        if char == '.':
            if not segments:
                raise PatternParseError(source, "leading '.'")
            if expect_property:
                raise PatternParseError(source, "empty property between dots")
            expect_property = True
            i += 1

        elif char == '[':
            if expect_property:
                raise PatternParseError(source, "expected a property name after '.'")
            end = path.find(']', i + 1)
            if end == -1:
                raise PatternParseError(source, "unclosed '['")
            content = path[i + 1:end]
            if content == '*':
                segments.append(Index(WILDCARD))
            elif content.isdigit() and content.isascii():
                segments.append(Index(int(content)))
            elif not content:
                raise PatternParseError(source, "empty brackets")
            else:
                raise PatternParseError(source, f"invalid index '{content}'")
            i = end + 1

        elif char == ']':
            raise PatternParseError(source, "unexpected ']'")

        else:
            if segments and not expect_property:
                raise PatternParseError(source, f"missing '.' before '{char}'")
            j = i
            while j < len(path) and path[j] not in '.[]':
                j += 1
            segments.append(Property(path[i:j]))
            expect_property = False
            i = j

    if expect_property:
        raise PatternParseError(source, "trailing '.'")

    return tuple(segments)


def try_parse_pattern(text: str) -> Optional[Pattern]:
    """Parse a pattern, logging and returning None when it is invalid."""
    try:
        return parse_pattern(text)
    except PatternParseError as e:
        logger.warning("Skipping ignore path: %s", e.message)
        return None


def format_pattern(pattern: Pattern) -> str:
    """Render segments back into pattern text."""
    parts = []
    for segment in pattern:
        if isinstance(segment, Property) and parts:
            parts.append('.')
        parts.append(str(segment))
    return ''.join(parts)
