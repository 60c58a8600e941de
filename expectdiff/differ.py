"""Structural diffing of two JSON documents."""

from __future__ import annotations

from typing import Any

from .models import DiffEntry, DiffType
from .values import JsonKind, kind_of

ROOT_PATH = "root"


def build_path(parent_path: str, key: str | int) -> str:
    """Build a dotted/bracketed path from parent path and key."""
    if isinstance(key, int):
        return f"{parent_path}[{key}]"
    if not parent_path:
        return key
    return f"{parent_path}.{key}"


def scalars_equal(expected: Any, actual: Any) -> bool:
    """
    Equality for two scalars; kinds must agree, so ``True != 1``.

    Numbers compare as float64, so integers beyond 2**53 that round to
    the same double are equal.
    """
    kind = kind_of(expected)
    if kind != kind_of(actual):
        return False
    if kind is JsonKind.NUMBER:
        return float(expected) == float(actual)
    return expected == actual


class Differ:
    """
    Performs a deep, ordered comparison of expected vs actual.

    Arrays are compared by position. Objects are compared over the union
    of their keys: expected's keys in order, then keys only actual has.
    A composite on one side and anything else on the other is a single
    mismatch at that path, without descending further.
    """

    def __init__(self):
        self.diffs: list[DiffEntry] = []
        self.fields_checked = 0

    def diff(self, expected: Any, actual: Any, path: str = "") -> list[DiffEntry]:
        """
        Compare two values and return the differences in traversal order.

        Args:
            expected: The reference value
            actual: The value to check
            path: Path of the values inside their documents ("" for root)
        """
        self.diffs = []
        self.fields_checked = 0
        self._diff(expected, actual, path)
        return self.diffs

    def _diff(self, expected: Any, actual: Any, path: str):
        expected_kind = kind_of(expected)
        actual_kind = kind_of(actual)

        if JsonKind.ARRAY in (expected_kind, actual_kind):
            if expected_kind != actual_kind:
                self._mismatch(path, expected, actual)
            else:
                self._diff_arrays(expected, actual, path)
        elif JsonKind.OBJECT in (expected_kind, actual_kind):
            if expected_kind != actual_kind:
                self._mismatch(path, expected, actual)
            else:
                self._diff_objects(expected, actual, path)
        else:
            self.fields_checked += 1
            if not scalars_equal(expected, actual):
                self._mismatch(path, expected, actual)

    def _diff_arrays(self, expected: list, actual: list, path: str):
        for index in range(max(len(expected), len(actual))):
            child_path = build_path(path, index)

            if index >= len(expected):
                self.diffs.append(DiffEntry(
                    path=child_path,
                    type=DiffType.EXTRA,
                    actual=actual[index],
                ))
                continue

            if index >= len(actual):
                self.diffs.append(DiffEntry(
                    path=child_path,
                    type=DiffType.MISSING,
                    expected=expected[index],
                ))
                continue

            self._diff(expected[index], actual[index], child_path)

    def _diff_objects(self, expected: dict, actual: dict, path: str):
        keys = list(expected)
        keys.extend(key for key in actual if key not in expected)

        for key in keys:
            child_path = build_path(path, key)

            if key not in actual:
                self.diffs.append(DiffEntry(
                    path=child_path,
                    type=DiffType.MISSING,
                    expected=expected[key],
                ))
                continue

            if key not in expected:
                self.diffs.append(DiffEntry(
                    path=child_path,
                    type=DiffType.EXTRA,
                    actual=actual[key],
                ))
                continue

            self._diff(expected[key], actual[key], child_path)

    def _mismatch(self, path: str, expected: Any, actual: Any):
        self.diffs.append(DiffEntry(
            path=path or ROOT_PATH,
            type=DiffType.MISMATCH,
            expected=expected,
            actual=actual,
        ))


def compute_diff(expected: Any, actual: Any, path: str = "") -> list[DiffEntry]:
    """Convenience function returning the differences between two values."""
    return Differ().diff(expected, actual, path)
