"""Main comparison engine for expectdiff."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from .config import collect_ignore_paths
from .differ import Differ
from .envelope import extract_sections, parse_payload
from .exceptions import MalformedInputError
from .masker import Masker
from .models import DiffResult, EngineConfig
from .patterns import try_parse_pattern
from .renderer import render_unified_diff

logger = logging.getLogger(__name__)


class ExpectDiffEngine:
    """
    Orchestrates one comparison:

    1. Envelope: parse the payload and pull out expected/actual
    2. Ignore paths: collect and parse patterns from the configuration
    3. Masking: redact private copies of both documents
    4. Diffing: structural comparison of the redacted pair
    5. Rendering: unified diff of the redacted pair

    The engine keeps no state between calls.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def analyze(
        self,
        payload_text: str,
        config_text: Optional[str] = None
    ) -> DiffResult:
        """
        Compare the expected and actual sections of a raw JSON payload.

        Args:
            payload_text: JSON with expected/actual at the root or under compare_item
            config_text: Optional configuration JSON holding ignore_paths arrays

        Returns:
            DiffResult with the original (unredacted) documents

        Raises:
            MalformedInputError, MissingSectionsError, InvalidConfigError
        """
        document = parse_payload(payload_text)
        expected, actual = extract_sections(document, self.config)
        ignore_paths = collect_ignore_paths(config_text, self.config.ignore_paths_key)
        return self._compare_sections(expected, actual, ignore_paths)

    def compare(self, document: Any, ignore_paths: Iterable[str] = ()) -> DiffResult:
        """Compare an already parsed payload document."""
        expected, actual = extract_sections(document, self.config)
        return self._compare_sections(expected, actual, list(ignore_paths))

    def _compare_sections(
        self,
        expected: Any,
        actual: Any,
        ignore_paths: list[str]
    ) -> DiffResult:
        patterns = [
            pattern for pattern in map(try_parse_pattern, ignore_paths)
            if pattern is not None
        ]
        logger.debug(
            "Applying %d of %d ignore path(s)", len(patterns), len(ignore_paths)
        )

        try:
            masker = Masker(patterns)
            masked_expected, masked_actual, removed = masker.mask(expected, actual)

            differences = Differ().diff(masked_expected, masked_actual)
            logger.debug("Found %d difference(s)", len(differences))

            unified_diff = render_unified_diff(
                masked_expected, masked_actual, differences, self.config
            )
        except RecursionError:
            raise MalformedInputError(
                "Input is nested too deeply to compare",
                {"reason": "maximum nesting depth exceeded"},
            )

        return DiffResult(
            expected=expected,
            actual=actual,
            differences=differences,
            unified_diff=unified_diff,
            ignored_paths=ignore_paths,
            fields_ignored=removed,
        )


def analyze(
    payload_text: str,
    config_text: Optional[str] = None,
    config: Optional[EngineConfig] = None
) -> DiffResult:
    """
    Convenience function to compare a raw payload.

    Args:
        payload_text: Raw payload JSON text
        config_text: Optional configuration JSON text
        config: Optional engine configuration

    Returns:
        DiffResult on success; raises an ExpectDiffError subclass otherwise
    """
    engine = ExpectDiffEngine(config)
    return engine.analyze(payload_text, config_text)
