"""Collecting ignore paths from channel configuration documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import yaml

from .envelope import loads_strict
from .exceptions import InvalidConfigError

logger = logging.getLogger(__name__)

IGNORE_PATHS_KEY = "ignore_paths"


def _invalid_ignore_paths(key: str, value: Any) -> InvalidConfigError:
    return InvalidConfigError(
        f'Invalid configuration: "{key}" must be an array of strings',
        {"value": value},
    )


def find_ignore_paths(tree: Any, key: str = IGNORE_PATHS_KEY) -> list[str]:
    """
    Collect every ``ignore_paths`` array anywhere in a configuration tree.

    Entries are trimmed, blanks dropped and duplicates coalesced while
    keeping first-collected order. An ``ignore_paths`` value that is not
    an array is searched like any other member.

    Raises:
        InvalidConfigError: if an ``ignore_paths`` array holds a non-string
    """
    collected: dict[str, None] = {}
    stack = [tree]

    while stack:
        node = stack.pop()
        if isinstance(node, dict):
            children = []
            for name, value in node.items():
                if name == key and isinstance(value, list):
                    for item in value:
                        if not isinstance(item, str):
                            raise _invalid_ignore_paths(key, item)
                        item = item.strip()
                        if item:
                            collected.setdefault(item, None)
                else:
                    children.append(value)
            # Reversed so the stack pops children in document order
            stack.extend(reversed(children))
        elif isinstance(node, list):
            stack.extend(reversed(node))

    return list(collected)


def collect_ignore_paths(
    config_text: Optional[str],
    key: str = IGNORE_PATHS_KEY
) -> list[str]:
    """Parse configuration JSON text and return its ignore paths."""
    if config_text is None or not config_text.strip():
        return []

    try:
        tree = loads_strict(config_text)
    except (ValueError, RecursionError) as e:
        raise InvalidConfigError(
            "Invalid configuration JSON: unable to parse configuration",
            {"reason": str(e)},
        )

    paths = find_ignore_paths(tree, key)
    logger.debug("Collected %d ignore path(s)", len(paths))
    return paths


def load_config_file(path: str | Path) -> Any:
    """Load a configuration file, YAML or JSON (JSON is valid YAML)."""
    config_path = Path(path)
    if not config_path.exists():
        raise InvalidConfigError(
            f"Configuration file not found: {config_path}",
            {"path": str(config_path)},
        )

    with open(config_path, 'r', encoding='utf-8') as f:
        content = f.read()

    try:
        return yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise InvalidConfigError(
            f"Failed to parse configuration file: {e}",
            {"path": str(config_path)},
        )
