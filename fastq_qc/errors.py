"""fastq_qc-specific exceptions."""

from __future__ import annotations


class FastqQCError(Exception):
    """Base class for every error raised by fastq_qc."""


class ConfigError(FastqQCError, ValueError):
    """Raised when a configuration value is missing or out of range."""


class FormatError(FastqQCError, ValueError):
    """Raised when the input violates the four-line FASTQ record contract.

    Always fatal: the scan stops and no report is produced. ``line_number``
    is 1-based and counted across the whole stream.
    """

    detail = "malformed record"

    def __init__(self, line_number: int, detail: str | None = None):
        self.line_number = line_number
        if detail is not None:
            self.detail = detail
        super().__init__(f"FASTQ format error at line #{line_number}: {self.detail}")


class MissingIdentifierMarker(FormatError):
    detail = "identifier line must start with '@'"


class MissingSeparatorMarker(FormatError):
    detail = "separator line must start with '+'"


class QualityLengthMismatch(FormatError):
    detail = "incorrect length of Q-string"


class TruncatedRecord(FormatError):
    detail = "unexpected end of file inside a record"


class QualityScoreOutOfRange(FormatError):
    detail = "quality score out of range"


__all__ = [
    "FastqQCError",
    "ConfigError",
    "FormatError",
    "MissingIdentifierMarker",
    "MissingSeparatorMarker",
    "QualityLengthMismatch",
    "TruncatedRecord",
    "QualityScoreOutOfRange",
]
