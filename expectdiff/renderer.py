"""Unified-diff rendering of the compared documents."""

from __future__ import annotations

import json
from difflib import unified_diff
from typing import Any, Optional, Sequence

from .models import DiffEntry, EngineConfig


def format_json(value: Any, indent: int = 2) -> str:
    """Pretty-print a JSON value, keeping the parsed key order."""
    return json.dumps(value, indent=indent, ensure_ascii=False)


def render_unified_diff(
    expected: Any,
    actual: Any,
    differences: Sequence[DiffEntry],
    config: Optional[EngineConfig] = None
) -> str:
    """
    Render a unified diff of the two documents.

    With no differences the result is ``""``. Otherwise the context
    window defaults to the longer document so the whole file is shown.
    """
    if not differences:
        return ""

    config = config or EngineConfig()
    expected_lines = format_json(expected, config.indent).splitlines()
    actual_lines = format_json(actual, config.indent).splitlines()

    context = config.context_lines
    if context is None:
        context = max(len(expected_lines), len(actual_lines))

    lines = unified_diff(
        expected_lines,
        actual_lines,
        fromfile=config.expected_label,
        tofile=config.actual_label,
        fromfiledate='',
        tofiledate='',
        n=context,
        lineterm='',
    )
    rendered = '\n'.join(lines)
    return rendered + '\n' if rendered else rendered
