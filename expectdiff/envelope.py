"""Locating the expected/actual sections inside an input payload."""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Optional

from .exceptions import MalformedInputError, MissingSectionsError
from .models import EngineConfig

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _parse_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"{text} is out of range for a JSON number")
    return value


def _parse_int(text: str) -> int:
    value = int(text)
    try:
        float(value)
    except OverflowError:
        raise ValueError(f"{text[:20]}... is out of range for a JSON number")
    return value


def loads_strict(text: str) -> Any:
    """
    Parse JSON text, rejecting the NaN/Infinity extensions of ``json``.

    Numbers must fit a finite double, so ``1e400`` is an error rather than
    ``inf``.
    """
    return json.loads(
        text,
        parse_constant=_reject_constant,
        parse_float=_parse_float,
        parse_int=_parse_int,
    )


def parse_payload(text: str) -> Any:
    """Parse raw payload text into a JSON tree."""
    try:
        return loads_strict(text)
    except RecursionError:
        raise MalformedInputError(
            "Invalid JSON: input is nested too deeply",
            {"reason": "maximum nesting depth exceeded"},
        )
    except (ValueError, TypeError) as e:
        raise MalformedInputError(
            "Invalid JSON: unable to parse input",
            {"reason": str(e)},
        )


def extract_sections(
    document: Any,
    config: Optional[EngineConfig] = None
) -> tuple[Any, Any]:
    """
    Pull the two documents to compare out of the envelope.

    The container is ``document[compare_item]`` when that is an object,
    otherwise the document itself. A section holding ``null`` is present.

    Returns:
        Tuple of (expected, actual)
    """
    config = config or EngineConfig()

    if not isinstance(document, dict):
        raise MalformedInputError(
            "Parsed input must be a JSON object",
            {"type": type(document).__name__},
        )

    container = document
    nested = document.get(config.container_key)
    if isinstance(nested, dict):
        logger.debug("Using '%s' as the comparison container", config.container_key)
        container = nested

    missing = [
        key for key in (config.expected_key, config.actual_key)
        if key not in container
    ]
    if missing:
        raise MissingSectionsError(missing, config.container_key)

    return container[config.expected_key], container[config.actual_key]
