"""
expectdiff - Structural JSON diff of expected vs actual payloads

Compares the ``expected`` and ``actual`` sections of a JSON payload,
optionally redacting ``ignore_paths`` from both sides first, and reports
a list of typed differences together with a unified diff.
"""

from .engine import ExpectDiffEngine, analyze
from .models import (
    EngineConfig,
    DiffResult,
    DiffEntry,
    DiffType,
    Summary,
    ErrorResponse,
)
from .exceptions import (
    ExpectDiffError,
    MalformedInputError,
    MissingSectionsError,
    InvalidConfigError,
    PatternParseError,
)
from .envelope import extract_sections, parse_payload
from .patterns import Index, Property, WILDCARD, parse_pattern
from .config import collect_ignore_paths, find_ignore_paths
from .masker import Masker, apply_ignore_patterns
from .differ import Differ, compute_diff
from .renderer import format_json, render_unified_diff
from .batch import BatchRunner, BatchReport, ScenarioResult, run_batch

__version__ = "1.0.0"
__all__ = [
    # Engine
    "ExpectDiffEngine",
    "EngineConfig",
    "analyze",
    # Results
    "DiffResult",
    "DiffEntry",
    "DiffType",
    "Summary",
    "ErrorResponse",
    # Errors
    "ExpectDiffError",
    "MalformedInputError",
    "MissingSectionsError",
    "InvalidConfigError",
    "PatternParseError",
    # Pipeline stages
    "extract_sections",
    "parse_payload",
    "Index",
    "Property",
    "WILDCARD",
    "parse_pattern",
    "collect_ignore_paths",
    "find_ignore_paths",
    "Masker",
    "apply_ignore_patterns",
    "Differ",
    "compute_diff",
    "format_json",
    "render_unified_diff",
    # Batch
    "BatchRunner",
    "BatchReport",
    "ScenarioResult",
    "run_batch",
]
