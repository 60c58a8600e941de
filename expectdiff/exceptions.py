"""Custom exceptions for the expectdiff engine."""


class ExpectDiffError(Exception):
    """Base exception for expectdiff errors."""
    code = "PROCESSING_ERROR"

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class MalformedInputError(ExpectDiffError):
    """Raised when the payload is not JSON or is not a JSON object."""
    code = "MALFORMED_INPUT"


class MissingSectionsError(ExpectDiffError):
    """Raised when the envelope lacks an expected or actual section."""
    code = "MISSING_SECTIONS"

    def __init__(self, missing: list[str], container_key: str = "compare_item"):
        super().__init__(
            'Input JSON must include "expected" and "actual" sections '
            f'either at the root or inside "{container_key}".',
            {"missing": missing},
        )
        self.missing = missing


class InvalidConfigError(ExpectDiffError):
    """Raised when the ignore-path configuration cannot be used."""
    code = "INVALID_CONFIG"


class PatternParseError(ExpectDiffError):
    """Raised when a single ignore-path pattern does not parse."""
    code = "INVALID_PATTERN"

    def __init__(self, pattern: str, reason: str):
        super().__init__(
            f"Invalid ignore path '{pattern}': {reason}",
            {"pattern": pattern, "reason": reason},
        )
        self.pattern = pattern
        self.reason = reason
