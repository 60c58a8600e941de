"""Command line entry point: ``expectdiff PAYLOAD [-c CONFIG]``."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import load_config_file
from .engine import ExpectDiffEngine
from .exceptions import ExpectDiffError
from .log import init_logging
from .models import DiffResult, EngineConfig, ErrorResponse, LogLevel

EXIT_MATCH = 0
EXIT_DIFFERENCES = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="expectdiff",
        description="Compare the expected and actual sections of a JSON payload",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  expectdiff payload.json
  expectdiff payload.json -c channel.yaml
  cat payload.json | expectdiff - --json
        """
    )
    parser.add_argument("payload", help="Path to the payload JSON file, or - for stdin")
    parser.add_argument(
        "-c", "--config",
        help="Configuration file (JSON or YAML) with ignore_paths arrays"
    )
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument(
        "--context", type=int, default=None,
        help="Context lines in the unified diff (default: whole document)"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _read_payload(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _config_text(config_path: str) -> str:
    # YAML files are accepted here and handed to the engine as JSON
    return json.dumps(load_config_file(config_path), default=str)


def format_result(result: DiffResult) -> str:
    """Human readable rendering of a result."""
    if result.is_match:
        return "No differences detected\n"

    count = len(result.differences)
    lines = [f"{count} difference{'' if count == 1 else 's'} found", ""]
    for entry in result.differences:
        lines.append(f"  [{entry.type.value}] {entry.path}")
        details = entry.to_dict()
        if "expected" in details:
            lines.append(f"      expected: {json.dumps(entry.expected, ensure_ascii=False)}")
        if "actual" in details:
            lines.append(f"      actual:   {json.dumps(entry.actual, ensure_ascii=False)}")
    lines.append("")
    lines.append(result.unified_diff)
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = EngineConfig(
        context_lines=args.context,
        log_level=LogLevel.DEBUG if args.verbose else LogLevel.WARNING,
    )
    init_logging(config.log_level.value)
    engine = ExpectDiffEngine(config)

    try:
        payload_text = _read_payload(args.payload)
        config_text = _config_text(args.config) if args.config else None
        result = engine.analyze(payload_text, config_text)
    except (ExpectDiffError, OSError) as e:
        response = ErrorResponse.from_exception(e)
        print(json.dumps(response.to_dict(), indent=2), file=sys.stderr)
        return EXIT_ERROR

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        sys.stdout.write(format_result(result))

    return EXIT_MATCH if result.is_match else EXIT_DIFFERENCES


if __name__ == "__main__":
    sys.exit(main())
