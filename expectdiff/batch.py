"""Batch runner: compare every payload file in a folder."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .config import find_ignore_paths, load_config_file
from .engine import ExpectDiffEngine
from .envelope import parse_payload
from .exceptions import ExpectDiffError, InvalidConfigError
from .jsonpath_utils import JSONPathMatcher
from .models import EngineConfig, ErrorResponse

logger = logging.getLogger(__name__)

REPORT_FIELDS_KEY = "report_fields"


@dataclass
class ScenarioResult:
    """Result of comparing a single payload file."""
    name: str
    payload_path: str
    passed: bool
    differences: list[dict] = field(default_factory=list)
    summary: Optional[dict] = None
    labels: Optional[dict] = None
    error: Optional[dict] = None

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "payload_path": self.payload_path,
            "passed": self.passed,
            "differences": self.differences,
        }
        if self.summary:
            result["summary"] = self.summary
        if self.labels:
            result["labels"] = self.labels
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class BatchReport:
    """Report across all payload files of a batch."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    errored: int = 0
    scenarios: list[ScenarioResult] = field(default_factory=list)
    breakdown: dict[str, list[str]] = field(default_factory=dict)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')
        if not self.breakdown:
            self.breakdown = {
                "no_differences": [],
                "with_differences": [],
                "errors": [],
            }

    @property
    def pass_rate(self) -> str:
        return f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"

    def add(self, result: ScenarioResult):
        self.scenarios.append(result)
        self.total += 1
        if result.error:
            self.failed += 1
            self.errored += 1
            self.breakdown["errors"].append(result.name)
        elif result.passed:
            self.passed += 1
            self.breakdown["no_differences"].append(result.name)
        else:
            self.failed += 1
            self.breakdown["with_differences"].append(result.name)

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_scenarios": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "errored": self.errored,
                "pass_rate": self.pass_rate
            },
            "breakdown": self.breakdown,
            "scenarios": [s.to_dict() for s in self.scenarios]
        }

    def print_summary(self):
        print(f"\nResults: {self.passed}/{self.total} passed ({self.pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")
        if self.breakdown.get("with_differences"):
            print(f"  With differences: {len(self.breakdown['with_differences'])} payloads")
        if self.breakdown.get("errors"):
            print(f"  Errors: {len(self.breakdown['errors'])} payloads")


def _report_fields(config_tree: Any) -> list[str]:
    """Read the optional list of JSONPath expressions used to label scenarios."""
    if not isinstance(config_tree, dict):
        return []
    fields = config_tree.get(REPORT_FIELDS_KEY)
    if fields is None:
        return []
    if not isinstance(fields, list) or not all(isinstance(f, str) for f in fields):
        raise InvalidConfigError(
            f'Invalid configuration: "{REPORT_FIELDS_KEY}" must be an array of strings',
            {"value": fields},
        )
    return list(fields)


class BatchRunner:
    """
    Runs every ``*.json`` payload in a folder through the engine.

    The configuration file (YAML or JSON) supplies ``ignore_paths`` arrays
    anywhere in its tree, and optionally a top-level ``report_fields`` list
    of JSONPath expressions used to label each scenario, e.g.
    ``$.compare_item.request_id``.
    """

    def __init__(
        self,
        config_tree: Any = None,
        engine_config: Optional[EngineConfig] = None
    ):
        self.engine_config = engine_config or EngineConfig()
        self.engine = ExpectDiffEngine(self.engine_config)
        self.ignore_paths = (
            find_ignore_paths(config_tree, self.engine_config.ignore_paths_key)
            if config_tree is not None else []
        )
        self.report_fields = _report_fields(config_tree)

    @classmethod
    def from_config_file(
        cls,
        config_path: Optional[str],
        engine_config: Optional[EngineConfig] = None
    ) -> BatchRunner:
        tree = load_config_file(config_path) if config_path else None
        return cls(tree, engine_config)

    def run_payload(self, payload_text: str, name: str, payload_path: str) -> ScenarioResult:
        """Run a single payload."""
        try:
            document = parse_payload(payload_text)
            result = self.engine.compare(document, self.ignore_paths)
            labels = (
                JSONPathMatcher.extract_labels(document, self.report_fields)
                if self.report_fields else None
            )
        except ExpectDiffError as e:
            logger.warning("%s: %s", name, e.message)
            return ScenarioResult(
                name=name,
                payload_path=payload_path,
                passed=False,
                error=ErrorResponse.from_exception(e).error,
            )

        return ScenarioResult(
            name=name,
            payload_path=payload_path,
            passed=result.is_match,
            differences=[d.to_dict() for d in result.differences],
            summary=result.summary().to_dict(),
            labels=labels,
        )

    def run_folder(self, folder: str, print_report: bool = True) -> BatchReport:
        """Run all payload files in a folder."""
        folder_path = Path(folder)
        if not folder_path.exists():
            raise FileNotFoundError(f"Payload folder not found: {folder_path}")

        report = BatchReport()
        for payload_file in sorted(folder_path.glob("*.json")):
            payload_text = payload_file.read_text(encoding='utf-8')
            result = self.run_payload(payload_text, payload_file.stem, str(payload_file))
            report.add(result)

            if print_report:
                print(f"{'PASS' if result.passed else 'FAIL'}: {result.name}")

        if print_report:
            report.print_summary()

        return report


def run_batch(
    config_path: Optional[str],
    payload_folder: str,
    print_report: bool = True,
    engine_config: Optional[EngineConfig] = None
) -> BatchReport:
    """
    Run a batch from a configuration file and a folder of payloads.

        from expectdiff import run_batch
        report = run_batch("channel.yaml", "payloads/")
    """
    runner = BatchRunner.from_config_file(config_path, engine_config)
    return runner.run_folder(payload_folder, print_report)
