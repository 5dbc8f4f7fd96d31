"""Format result dataclass.

Result-style value returned for every rendered placeholder so a single
malformed placeholder degrades in place instead of aborting the template.
"""

from dataclasses import dataclass
from typing import Optional

from phrasechain.operations.status import ResolutionStatus


@dataclass(frozen=True)
class FormatResult:
    """Outcome of rendering one placeholder.

    Attributes:
        status: ResolutionStatus -- OK or the degradation that happened
        value: str -- text to splice into the template
        message: Optional[str] -- human-friendly detail for logs
    """

    status: ResolutionStatus
    value: str
    message: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        """True if the placeholder rendered without degradation."""
        return self.status == ResolutionStatus.OK

    @classmethod
    def ok(cls, value: str) -> "FormatResult":
        """Create an OK result.

        Args:
            value: Rendered text

        Returns:
            FormatResult with OK status
        """
        return cls(status=ResolutionStatus.OK, value=value)

    @classmethod
    def fallback(
        cls,
        status: ResolutionStatus,
        value: str,
        message: Optional[str] = None,
    ) -> "FormatResult":
        """Create a degraded result carrying the text to use instead.

        Args:
            status: Why rendering degraded
            value: Replacement text
            message: Optional detail for logs

        Returns:
            FormatResult with the given status
        """
        return cls(status=status, value=value, message=message)
