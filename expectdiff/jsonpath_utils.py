"""JSONPath lookups used to label batch scenarios."""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
from jsonpath_ng.exceptions import JsonPathLexerError, JsonPathParserError

from .exceptions import InvalidConfigError

COMPILE_CACHE_SIZE = 256


@lru_cache(maxsize=COMPILE_CACHE_SIZE)
def _compile(path: str):
    try:
        return jsonpath_parse(path)
    except (JsonPathLexerError, JsonPathParserError) as e:
        raise InvalidConfigError(
            f"Invalid JSONPath expression '{path}': {e}",
            {"path": path},
        )


class JSONPathMatcher:
    """Compiles and evaluates JSONPath expressions against payloads."""

    @staticmethod
    def compile(path: str):
        """Compile a JSONPath expression, reusing recent compilations."""
        return _compile(path)

    @classmethod
    def find_values(cls, data: Any, path: str) -> list[Any]:
        """Find all values matching a JSONPath expression."""
        expr = cls.compile(path)
        return [m.value for m in expr.find(data)]

    @classmethod
    def extract_labels(cls, data: Any, paths: list[str]) -> dict[str, Any]:
        """
        Evaluate each path and key the results by the path text.

        A path with one match maps to that value, several matches to a
        list, and no match to None.
        """
        labels = {}
        for path in paths:
            values = cls.find_values(data, path)
            if not values:
                labels[path] = None
            elif len(values) == 1:
                labels[path] = values[0]
            else:
                labels[path] = values
        return labels
