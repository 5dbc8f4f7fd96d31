"""Resolution status enumeration.

Status codes for the outcome of resolving, pluralizing and formatting a
message. Every non-OK status is recovered locally; the codes exist so the
degraded paths can be logged and inspected uniformly.
"""

from enum import Enum


class ResolutionStatus(Enum):
    """Status codes for translation outcomes.

    Attributes:
        OK: Value resolved and rendered as written
        MISSING_KEY: No value in the active or fallback bundle
        MISSING_PLURAL_FORM: Plural object lacks both the selected and 'other' category
        MISSING_PARAMETER: Placeholder has no matching parameter
        FORMAT_ERROR: Value could not be formatted per its kind or spec
        LOCALE_LOAD_FAILURE: Bundle loader rejected
        LOCALE_LOAD_SKIPPED: Target locale previously failed and was not retried
    """

    OK = "ok"
    MISSING_KEY = "missing_key"
    MISSING_PLURAL_FORM = "missing_plural_form"
    MISSING_PARAMETER = "missing_parameter"
    FORMAT_ERROR = "format_error"
    LOCALE_LOAD_FAILURE = "locale_load_failure"
    LOCALE_LOAD_SKIPPED = "locale_load_skipped"
