"""Resolution result types and status enums."""

from phrasechain.operations.result import FormatResult
from phrasechain.operations.status import ResolutionStatus

__all__ = ["FormatResult", "ResolutionStatus"]
