"""Data models for the expectdiff engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class DiffType(Enum):
    MISSING = "missing"
    EXTRA = "extra"
    MISMATCH = "mismatch"


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    container_key: str = "compare_item"
    expected_key: str = "expected"
    actual_key: str = "actual"
    ignore_paths_key: str = "ignore_paths"
    indent: int = 2
    expected_label: str = "expected.json"
    actual_label: str = "actual.json"
    # None renders the whole document as context
    context_lines: Optional[int] = None
    log_level: LogLevel = LogLevel.INFO


@dataclass
class DiffEntry:
    """A single difference found during comparison."""
    path: str
    type: DiffType
    expected: Any = None
    actual: Any = None

    def to_dict(self) -> dict:
        result = {
            "path": self.path,
            "type": self.type.value,
        }
        if self.type in (DiffType.MISSING, DiffType.MISMATCH):
            result["expected"] = self.expected
        if self.type in (DiffType.EXTRA, DiffType.MISMATCH):
            result["actual"] = self.actual
        return result


@dataclass
class Summary:
    """Difference counts per type."""
    missing: int = 0
    extra: int = 0
    mismatch: int = 0
    fields_ignored: int = 0

    @property
    def total(self) -> int:
        return self.missing + self.extra + self.mismatch

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "missing": self.missing,
            "extra": self.extra,
            "mismatch": self.mismatch,
            "fields_ignored": self.fields_ignored,
        }


@dataclass
class DiffResult:
    """Complete comparison result for one payload."""
    expected: Any
    actual: Any
    differences: list[DiffEntry] = field(default_factory=list)
    unified_diff: str = ""
    ignored_paths: list[str] = field(default_factory=list)
    fields_ignored: int = 0

    @property
    def is_match(self) -> bool:
        return not self.differences

    def summary(self) -> Summary:
        counts = Summary(fields_ignored=self.fields_ignored)
        for entry in self.differences:
            if entry.type == DiffType.MISSING:
                counts.missing += 1
            elif entry.type == DiffType.EXTRA:
                counts.extra += 1
            else:
                counts.mismatch += 1
        return counts

    def to_dict(self) -> dict:
        return {
            "expected": self.expected,
            "actual": self.actual,
            "differences": [d.to_dict() for d in self.differences],
            "unifiedDiff": self.unified_diff,
            "summary": self.summary().to_dict(),
        }


@dataclass
class ErrorResponse:
    """Error response structure."""
    success: bool = False
    error: Optional[dict] = None

    @classmethod
    def from_exception(cls, exc: Exception) -> ErrorResponse:
        code = getattr(exc, "code", "PROCESSING_ERROR")
        message = getattr(exc, "message", str(exc))
        details = getattr(exc, "details", None) or {"type": type(exc).__name__}
        return cls(
            success=False,
            error={"code": code, "message": message, "details": details},
        )

    def to_dict(self) -> dict:
        result = {"success": self.success}
        if self.error:
            result["error"] = self.error
        return result
