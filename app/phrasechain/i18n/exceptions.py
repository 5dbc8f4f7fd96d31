"""Custom exceptions for the i18n system.

Runtime entry points (translate, switch_locale) recover from every one of
these locally; they surface to callers only through BundleSchema.parse and
through the loader contract.
"""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from phrasechain.i18n.schema import ValidationIssue


class I18nError(Exception):
    """Base exception for all i18n errors.

    Example:
        try:
            schema.parse(bundle)
        except I18nError as e:
            logger.error("i18n_error", error=str(e))
    """

    pass


class LocaleLoadError(I18nError):
    """Raised when a bundle for a locale cannot be loaded.

    Attributes:
        locale: Locale whose bundle failed to load.
    """

    def __init__(self, locale: str, message: Optional[str] = None):
        self.locale = locale
        super().__init__(message or f"Failed to load bundle for locale '{locale}'")


class UnsupportedLocaleError(LocaleLoadError):
    """Raised when a locale outside the supported set is requested.

    Example:
        >>> await controller.switch_locale("xx")  # logged, not raised
    """

    def __init__(self, locale: str):
        super().__init__(locale, f"Unsupported locale: {locale}")


class BundleValidationError(I18nError):
    """Raised by BundleSchema.parse when a bundle has structural issues.

    Attributes:
        issues: Every issue found, in traversal order.
    """

    def __init__(self, issues: List["ValidationIssue"]):
        self.issues = issues
        lines = [f"{issue.path_string or '<root>'}: {issue.message}" for issue in issues]
        super().__init__(
            f"Bundle validation failed with {len(issues)} issue(s):\n" + "\n".join(lines)
        )
