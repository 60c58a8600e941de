"""Redaction of ignored paths before diffing."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from .patterns import Index, Pattern, Property, format_pattern
from .values import JsonKind, deep_copy, kind_of

logger = logging.getLogger(__name__)


class Masker:
    """
    Removes every node matched by the ignore patterns.

    A pattern is relative: it is tried from the document root and again
    from every node below it, so ``order.createdDate`` also removes
    ``success.order.createdDate``. Patterns run in the order given, each
    against the same private copy of the document.
    """

    def __init__(self, patterns: Iterable[Pattern]):
        self.patterns = list(patterns)
        self.removed_count = 0

    def mask(self, expected: Any, actual: Any) -> tuple[Any, Any, int]:
        """
        Apply masking to both documents.

        Returns:
            Tuple of (masked_expected, masked_actual, removed_count)
        """
        self.removed_count = 0
        masked_expected = self.redact(expected)
        masked_actual = self.redact(actual)
        return masked_expected, masked_actual, self.removed_count

    def redact(self, value: Any) -> Any:
        """Return a redacted deep copy of ``value``; the input is untouched."""
        copy = deep_copy(value)
        if not self.patterns:
            return copy

        for pattern in self.patterns:
            before = self.removed_count
            self._walk(copy, pattern)
            logger.debug(
                "Pattern '%s' removed %d node(s)",
                format_pattern(pattern), self.removed_count - before
            )
        return copy

    def _walk(self, node: Any, pattern: Pattern):
        """Try the pattern at ``node``, then at every node left below it."""
        self._match(node, pattern, 0)

        kind = kind_of(node)
        if kind == JsonKind.OBJECT:
            for child in list(node.values()):
                self._walk(child, pattern)
        elif kind == JsonKind.ARRAY:
            for child in list(node):
                self._walk(child, pattern)

    def _match(self, node: Any, pattern: Pattern, position: int):
        segment = pattern[position]
        is_last = position == len(pattern) - 1
        kind = kind_of(node)

        if isinstance(segment, Property):
            if kind != JsonKind.OBJECT or segment.key not in node:
                return
            if is_last:
                del node[segment.key]
                self.removed_count += 1
            else:
                self._match(node[segment.key], pattern, position + 1)

        elif isinstance(segment, Index):
            if kind != JsonKind.ARRAY:
                return
            if segment.is_wildcard:
                if is_last:
                    if node:
                        self.removed_count += len(node)
                        node.clear()
                    return
                for element in node:
                    self._match(element, pattern, position + 1)
                return
            if segment.selector >= len(node):
                return
            if is_last:
                del node[segment.selector]
                self.removed_count += 1
            else:
                self._match(node[segment.selector], pattern, position + 1)

        else:
            raise TypeError(f"Unknown path segment: {segment!r}")


def apply_ignore_patterns(value: Any, patterns: Iterable[Pattern]) -> Any:
    """Return a copy of ``value`` with every pattern match removed."""
    return Masker(patterns).redact(value)
