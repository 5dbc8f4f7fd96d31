"""Placeholder interpolation and locale-aware value formatting.

Templates carry `{name}` or `{name:spec}` placeholders. Each placeholder is
rendered independently into a FormatResult; a failure degrades that one
placeholder to the value's plain string and never escapes render().

Formatting uses Babel's CLDR data for the active locale:

    {when:date} {when:time} {when:datetime}   date/time styles
    {when:relative}                           "just now", "5 minutes ago", ...
    {n:integer} {n:percent} {n:currency}      number styles
    {n:2}                                     fixed fraction digits
    {x:{"style": "currency", "currency": "EUR"}}  JSON formatting options
    {items:list}                              locale-aware list join
"""

import json
import re
from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal
from functools import lru_cache
from typing import Any, Callable, Dict, Mapping, Optional

from babel import Locale, UnknownLocaleError
from babel.dates import (
    format_date,
    format_datetime,
    format_skeleton,
    format_time,
    format_timedelta,
    get_timezone,
)
from babel.lists import format_list
from babel.numbers import (
    format_currency,
    format_decimal,
    format_percent,
)

from phrasechain.logging import get_module_logger
from phrasechain.operations import FormatResult, ResolutionStatus

logger = get_module_logger()

# The format part may hold one level of nested braces (JSON options)
PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)(?::((?:[^{}]|\{[^{}]*\})+))?\}")

DATE_SPECS = frozenset({"date", "time", "datetime", "relative"})
NUMBER_SPECS = frozenset({"integer", "percent", "currency"})
DATE_STYLES = frozenset({"short", "medium", "long", "full"})

# (upper bound in seconds, seconds per unit) for relative phrases
RELATIVE_BUCKETS = (
    (60 * 60, 60),
    (24 * 60 * 60, 60 * 60),
    (30 * 24 * 60 * 60, 24 * 60 * 60),
)

JUST_NOW = "just now"


@lru_cache(maxsize=64)
def get_babel_locale(locale_id: str) -> Locale:
    """Parse a locale id ("es", "en-US", "pt_BR") into a Babel Locale.

    Falls back to the language part, then to English, for ids Babel
    does not know.
    """
    normalized = locale_id.replace("-", "_")
    try:
        return Locale.parse(normalized)
    except (UnknownLocaleError, ValueError):
        pass

    try:
        return Locale.parse(normalized.split("_")[0])
    except (UnknownLocaleError, ValueError):
        logger.warning("unknown_formatting_locale", locale=locale_id, using="en")
        return Locale.parse("en")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _is_options(spec: str) -> bool:
    return spec.lstrip().startswith("{")


def _parse_options(spec: str) -> Dict[str, Any]:
    options = json.loads(spec)
    if not isinstance(options, dict):
        raise ValueError(f"Format options must be a JSON object: {spec}")
    return options


def to_datetime(value: Any) -> Optional[datetime]:
    """Coerce a date-like value into an aware datetime.

    Accepts datetime/date objects, numeric timestamps in milliseconds since
    the Unix epoch, and ISO-8601 strings. Naive values are taken as UTC.

    Returns:
        The datetime, or None if the value is not date-like.
    """
    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime.combine(value, time())
    elif _is_number(value):
        try:
            result = datetime.fromtimestamp(float(value) / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        try:
            result = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result


def _decimal_pattern(min_digits: int, max_digits: int, grouping: bool = True) -> str:
    if max_digits < min_digits:
        raise ValueError(
            f"maximumFractionDigits ({max_digits}) < minimumFractionDigits ({min_digits})"
        )
    pattern = "#,##0" if grouping else "0"
    if max_digits:
        pattern += "." + "0" * min_digits + "#" * (max_digits - min_digits)
    return pattern


class MessageFormatter:
    """Renders templates for one locale.

    Attributes:
        locale: Locale id whose conventions are used.
        debug: Render missing parameters as a visible token.
        default_currency: Currency code used when a currency format names none.
    """

    def __init__(
        self,
        locale: str,
        debug: bool = False,
        default_currency: str = "USD",
        now: Optional[Callable[[], datetime]] = None,
    ):
        self.locale = locale
        self.debug = debug
        self.default_currency = default_currency
        self._now = now or (lambda: datetime.now(timezone.utc))

    @property
    def babel_locale(self) -> Locale:
        return get_babel_locale(self.locale)

    def render(self, template: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Replace every placeholder in a template.

        Args:
            template: Template string.
            params: Values for placeholders.

        Returns:
            The rendered string. Never raises for bad values or specs.
        """
        if "{" not in template:
            return template

        params = params or {}

        def _substitute(match: re.Match) -> str:
            name, spec = match.group(1), match.group(2)
            result = self.format_placeholder(name, spec, params)
            if not result.is_ok:
                self._report(result, name, spec)
            return result.value

        return PLACEHOLDER_PATTERN.sub(_substitute, template)

    def format_placeholder(
        self, name: str, spec: Optional[str], params: Mapping[str, Any]
    ) -> FormatResult:
        """Render a single placeholder into a FormatResult."""
        if name not in params:
            token = f"[missing: {name}]" if self.debug else ""
            return FormatResult.fallback(
                ResolutionStatus.MISSING_PARAMETER,
                token,
                f"No parameter named '{name}'",
            )

        value = params[name]
        if value is None:
            return FormatResult.ok("")

        try:
            return self.format_value(value, spec)
        except Exception as e:  # pylint: disable=broad-except
            return FormatResult.fallback(
                ResolutionStatus.FORMAT_ERROR,
                str(value),
                f"{type(e).__name__}: {e}",
            )

    def format_value(self, value: Any, spec: Optional[str]) -> FormatResult:
        """Dispatch a value to the formatter for its kind.

        Raises:
            Exception: Any formatting failure; format_placeholder() turns
                it into a FORMAT_ERROR result.
        """
        if spec is None:
            if isinstance(value, (list, tuple)):
                return FormatResult.ok(self._join(value))
            return FormatResult.ok(str(value))

        # Digit-only strings are text here, not compact ISO dates
        moment = None
        if isinstance(value, (datetime, date)) or (
            isinstance(value, str) and not value.strip().isdigit()
        ):
            moment = to_datetime(value)
        if moment is not None:
            return FormatResult.ok(self.format_date(moment, spec))

        if spec in DATE_SPECS and (_is_number(value) or isinstance(value, str)):
            moment = to_datetime(value)
            if moment is None:
                return FormatResult.fallback(
                    ResolutionStatus.FORMAT_ERROR,
                    str(value),
                    f"Invalid date value for '{spec}'",
                )
            return FormatResult.ok(self.format_date(moment, spec))

        if _is_number(value):
            return FormatResult.ok(self.format_number(value, spec))

        if isinstance(value, (list, tuple)):
            if spec == "list":
                return self.format_list(value)
            return FormatResult.ok(self._join(value))

        return FormatResult.ok(str(value))

    def format_date(self, moment: datetime, spec: str) -> str:
        """Format an aware datetime per a date spec or JSON options."""
        locale = self.babel_locale
        match spec:
            case "date":
                return format_date(moment, format="medium", locale=locale)
            case "time":
                return format_time(moment, format="medium", locale=locale)
            case "datetime":
                return format_datetime(moment, format="medium", locale=locale)
            case "relative":
                return self.format_relative(moment)

        if _is_options(spec):
            return self._format_date_options(moment, _parse_options(spec))
        return format_datetime(moment, format="medium", locale=locale)

    def format_relative(self, moment: datetime) -> str:
        """Coarse relative phrase for how long ago a moment was.

        Under a minute (including any future moment) is "just now"; then
        whole minutes, hours and days; from 30 days on, the absolute date.
        """
        elapsed = (self._now() - moment).total_seconds()
        if elapsed < 60:
            return JUST_NOW

        for upper_bound, unit_seconds in RELATIVE_BUCKETS:
            if elapsed < upper_bound:
                count = int(elapsed // unit_seconds)
                # threshold=count pins Babel to this unit instead of a coarser one
                return format_timedelta(
                    timedelta(seconds=-count * unit_seconds),
                    threshold=count,
                    add_direction=True,
                    locale=self.babel_locale,
                )

        return format_date(moment, format="medium", locale=self.babel_locale)

    def _format_date_options(self, moment: datetime, options: Dict[str, Any]) -> str:
        locale = self.babel_locale
        if options.get("timeZone"):
            moment = moment.astimezone(get_timezone(options["timeZone"]))

        if "pattern" in options:
            return format_datetime(moment, format=options["pattern"], locale=locale)
        if "skeleton" in options:
            return format_skeleton(options["skeleton"], moment, locale=locale)

        date_style = options.get("dateStyle")
        time_style = options.get("timeStyle")
        for style in (date_style, time_style):
            if style is not None and style not in DATE_STYLES:
                raise ValueError(f"Unknown date/time style: {style}")

        if date_style and time_style:
            if date_style == time_style:
                return format_datetime(moment, format=date_style, locale=locale)
            return (
                f"{format_date(moment, format=date_style, locale=locale)} "
                f"{format_time(moment, format=time_style, locale=locale)}"
            )
        if date_style:
            return format_date(moment, format=date_style, locale=locale)
        if time_style:
            return format_time(moment, format=time_style, locale=locale)
        return format_datetime(moment, format="medium", locale=locale)

    def format_number(self, value: Any, spec: str) -> str:
        """Format a number per a number spec, a digit count or JSON options."""
        locale = self.babel_locale
        match spec:
            case "integer":
                return format_decimal(value, format="#,##0", locale=locale)
            case "percent":
                return format_percent(value, locale=locale)
            case "currency":
                return format_currency(value, self.default_currency, locale=locale)

        if spec.isdigit():
            digits = int(spec)
            return format_decimal(
                value, format=_decimal_pattern(digits, digits), locale=locale
            )

        if _is_options(spec):
            return self._format_number_options(value, _parse_options(spec))

        return format_decimal(value, locale=locale)

    def _format_number_options(self, value: Any, options: Dict[str, Any]) -> str:
        locale = self.babel_locale
        style = options.get("style", "decimal")
        grouping = bool(options.get("useGrouping", True))
        has_digits = (
            "minimumFractionDigits" in options or "maximumFractionDigits" in options
        )

        if style == "currency":
            currency = options.get("currency") or self.default_currency
            if not has_digits:
                return format_currency(value, currency, locale=locale)
            min_digits = int(options.get("minimumFractionDigits", 0))
            max_digits = int(options.get("maximumFractionDigits", max(min_digits, 2)))
            return format_currency(
                value,
                currency,
                format="¤" + _decimal_pattern(min_digits, max_digits, grouping),
                locale=locale,
                currency_digits=False,
            )

        if style == "percent":
            if not has_digits:
                return format_percent(value, locale=locale)
            min_digits = int(options.get("minimumFractionDigits", 0))
            max_digits = int(options.get("maximumFractionDigits", min_digits))
            return format_percent(
                value,
                format=_decimal_pattern(min_digits, max_digits, grouping) + "%",
                locale=locale,
            )

        if style != "decimal":
            raise ValueError(f"Unknown number style: {style}")

        min_digits = int(options.get("minimumFractionDigits", 0))
        max_digits = int(options.get("maximumFractionDigits", max(min_digits, 3)))
        return format_decimal(
            value,
            format=_decimal_pattern(min_digits, max_digits, grouping),
            locale=locale,
        )

    def format_list(self, items: Any) -> FormatResult:
        """Join items with the locale's list pattern."""
        parts = [str(item) for item in items]
        try:
            return FormatResult.ok(format_list(parts, locale=self.babel_locale))
        except Exception as e:  # pylint: disable=broad-except
            return FormatResult.fallback(
                ResolutionStatus.FORMAT_ERROR,
                ", ".join(parts),
                f"{type(e).__name__}: {e}",
            )

    @staticmethod
    def _join(items: Any) -> str:
        return ", ".join(str(item) for item in items)

    def _report(self, result: FormatResult, name: str, spec: Optional[str]) -> None:
        if result.status == ResolutionStatus.MISSING_PARAMETER:
            log = logger.warning if self.debug else logger.debug
            log("interpolation_parameter_missing", parameter=name, locale=self.locale)
            return
        logger.warning(
            "placeholder_format_failed",
            parameter=name,
            format_spec=spec,
            locale=self.locale,
            status=result.status.value,
            error=result.message,
        )


def render(
    template: str,
    params: Optional[Mapping[str, Any]],
    locale: str,
    debug: bool = False,
    default_currency: str = "USD",
) -> str:
    """Render a template for a locale.

    Convenience wrapper around MessageFormatter.render().

    Args:
        template: Template string with {name} / {name:spec} placeholders.
        params: Values for placeholders.
        locale: Active locale id.
        debug: Render missing parameters as a visible token.
        default_currency: Currency code for specs that name none.

    Returns:
        Rendered string.
    """
    formatter = MessageFormatter(locale, debug=debug, default_currency=default_currency)
    return formatter.render(template, params)
