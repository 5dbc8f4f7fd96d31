"""Structural validation for translation bundles.

Walks a whole bundle and collects issues instead of stopping at the first
one, so a build step can report everything at once. The runtime never
calls this; it is meant for CI and the `phrasechain-validate` command.

Usage:
    options = SchemaOptions(
        plural_key_identifier=lambda key: key.endswith("Count"),
        allowed_date_formats=["date", "relative", "fullDate"],
    )
    issues = validate_bundle(bundle, options)

    # or fail hard
    BundleSchema(options).parse(bundle)
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from phrasechain.i18n.exceptions import BundleValidationError
from phrasechain.i18n.models import (
    DEFAULT_OPTIONAL_PLURAL_CATEGORIES,
    DEFAULT_REQUIRED_PLURAL_CATEGORIES,
)

DATE_PLACEHOLDER_PATTERN = re.compile(r"\{date:([a-zA-Z0-9_]+)\}")

# Shape of a placeholder; only names that already match it are checked
PLACEHOLDER_SHAPE_PATTERN = re.compile(r"\{(\w+)(?::[^{}]*)?\}")
PLACEHOLDER_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_]+$")

PathSegment = Union[str, int]


@dataclass(frozen=True)
class ValidationIssue:
    """One structural problem found in a bundle.

    Attributes:
        code: Machine-readable issue kind.
        message: Human-readable description.
        path: Keys and indices leading to the offending node.
        token: Offending token (date format or placeholder name), if any.
    """

    code: str
    message: str
    path: Tuple[PathSegment, ...] = ()
    token: Optional[str] = None

    @property
    def path_string(self) -> str:
        """Dot-joined path, e.g. "user.items.1.detail"."""
        return ".".join(str(segment) for segment in self.path)


class SchemaOptions(BaseModel):
    """Validation options.

    Attributes:
        plural_key_identifier: Key names that hold plural objects, or a
            predicate over key names.
        required_plural_keys: Categories every plural object must have.
        optional_plural_keys: Further categories a plural object may have.
        allowed_date_formats: Formats allowed in {date:format} placeholders.
        validate_all_placeholders_syntax: Also check placeholder names.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    plural_key_identifier: Union[List[str], Callable[[str], bool]] = Field(
        default_factory=list
    )
    required_plural_keys: List[str] = Field(
        default_factory=lambda: list(DEFAULT_REQUIRED_PLURAL_CATEGORIES)
    )
    optional_plural_keys: List[str] = Field(
        default_factory=lambda: list(DEFAULT_OPTIONAL_PLURAL_CATEGORIES)
    )
    allowed_date_formats: List[str] = Field(
        default_factory=lambda: ["date", "relative"]
    )
    validate_all_placeholders_syntax: bool = False

    def is_plural_key(self, key: str) -> bool:
        if callable(self.plural_key_identifier):
            return bool(self.plural_key_identifier(key))
        return key in self.plural_key_identifier

    @property
    def allowed_plural_keys(self) -> List[str]:
        """Required then optional categories, without duplicates."""
        return list(dict.fromkeys([*self.required_plural_keys, *self.optional_plural_keys]))


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


class BundleValidator:
    """Recursive bundle walker accumulating ValidationIssues."""

    def __init__(self, options: Optional[SchemaOptions] = None):
        self.options = options or SchemaOptions()

    def validate(self, bundle: Any) -> List[ValidationIssue]:
        """Validate a whole bundle.

        Args:
            bundle: Parsed bundle (never mutated).

        Returns:
            Issues in traversal order; empty if the bundle is valid.
        """
        issues: List[ValidationIssue] = []
        if not isinstance(bundle, Mapping):
            issues.append(
                ValidationIssue(
                    code="invalid_root",
                    message=f"Bundle root must be an object. Found: {_json_type(bundle)}",
                )
            )
            return issues

        self._check_node(bundle, (), issues)
        return issues

    def _check_node(
        self, node: Any, path: Tuple[PathSegment, ...], issues: List[ValidationIssue]
    ) -> None:
        match node:
            case str():
                self._check_string(node, path, issues)
            case Mapping():
                self._check_mapping(node, path, issues)
            case list() | tuple():
                for index, element in enumerate(node):
                    self._check_node(element, (*path, index), issues)
            case None | bool() | int() | float():
                pass
            case _:
                issues.append(
                    ValidationIssue(
                        code="invalid_value",
                        message=f"Unsupported value type: {type(node).__name__}",
                        path=path,
                    )
                )

    def _check_mapping(
        self, node: Mapping, path: Tuple[PathSegment, ...], issues: List[ValidationIssue]
    ) -> None:
        for key, value in node.items():
            current_path = (*path, key)
            if not isinstance(key, str):
                issues.append(
                    ValidationIssue(
                        code="invalid_key",
                        message=f"Object keys must be strings. Found: {_json_type(key)}",
                        path=current_path,
                    )
                )
                continue

            if self.options.is_plural_key(key):
                self._check_plural(key, value, current_path, issues)
            else:
                self._check_node(value, current_path, issues)

    def _check_plural(
        self,
        key: str,
        value: Any,
        path: Tuple[PathSegment, ...],
        issues: List[ValidationIssue],
    ) -> None:
        if not isinstance(value, Mapping):
            issues.append(
                ValidationIssue(
                    code="plural_not_object",
                    message=(
                        f'Key "{key}" was identified as a plural key, so its value '
                        f"must be an object. Found: {_json_type(value)}"
                    ),
                    path=path,
                )
            )
            return

        missing = [k for k in self.options.required_plural_keys if k not in value]
        if missing:
            issues.append(
                ValidationIssue(
                    code="missing_plural_categories",
                    message=(
                        f'Pluralization object for key "{key}" is missing required '
                        f"categories: {', '.join(missing)}."
                    ),
                    path=path,
                    token=", ".join(missing),
                )
            )

        allowed = self.options.allowed_plural_keys
        for category, form in value.items():
            form_path = (*path, category)
            if category not in allowed:
                issues.append(
                    ValidationIssue(
                        code="invalid_plural_category",
                        message=(
                            f'Invalid plural category "{category}" found for key "{key}". '
                            f"Allowed categories: {', '.join(allowed)}."
                        ),
                        path=form_path,
                        token=str(category),
                    )
                )
                continue

            if not isinstance(form, str):
                issues.append(
                    ValidationIssue(
                        code="plural_value_not_string",
                        message=(
                            f'Pluralization value for category "{category}" (under key '
                            f'"{key}") must be a string. Found: {_json_type(form)}'
                        ),
                        path=form_path,
                    )
                )
                continue

            self._check_string(form, form_path, issues)

    def _check_string(
        self, text: str, path: Tuple[PathSegment, ...], issues: List[ValidationIssue]
    ) -> None:
        allowed_formats = self.options.allowed_date_formats
        for match in DATE_PLACEHOLDER_PATTERN.finditer(text):
            date_format = match.group(1)
            if date_format not in allowed_formats:
                issues.append(
                    ValidationIssue(
                        code="invalid_date_format",
                        message=(
                            f"Invalid date format placeholder '{{date:{date_format}}}'. "
                            f"Allowed formats: {', '.join(allowed_formats)}."
                        ),
                        path=path,
                        token=date_format,
                    )
                )

        if not self.options.validate_all_placeholders_syntax:
            return

        # Text that does not look like a placeholder at all is not reported
        for match in PLACEHOLDER_SHAPE_PATTERN.finditer(text):
            name = match.group(1)
            if not PLACEHOLDER_NAME_PATTERN.match(name):
                issues.append(
                    ValidationIssue(
                        code="invalid_placeholder",
                        message=(
                            f"Invalid placeholder name '{{{name}}}': only ASCII letters, "
                            "digits and underscores are allowed."
                        ),
                        path=path,
                        token=name,
                    )
                )


def validate_bundle(
    bundle: Any, options: Optional[SchemaOptions] = None
) -> List[ValidationIssue]:
    """Validate a bundle and return every structural issue found.

    Args:
        bundle: Parsed bundle.
        options: Validation options (default: SchemaOptions()).

    Returns:
        Issues in traversal order; empty if the bundle is valid.
    """
    return BundleValidator(options).validate(bundle)


class BundleSchema:
    """Reusable validator that fails hard.

    Example:
        schema = BundleSchema(SchemaOptions(plural_key_identifier=["itemCount"]))
        bundle = schema.parse(json.loads(raw))
    """

    def __init__(self, options: Optional[SchemaOptions] = None, **option_fields: Any):
        self.options = options or SchemaOptions(**option_fields)
        self._validator = BundleValidator(self.options)

    def validate(self, bundle: Any) -> List[ValidationIssue]:
        return self._validator.validate(bundle)

    def is_valid(self, bundle: Any) -> bool:
        return not self._validator.validate(bundle)

    def parse(self, bundle: Any) -> Any:
        """Return the bundle unchanged if valid.

        Raises:
            BundleValidationError: If any issue is found.
        """
        issues = self._validator.validate(bundle)
        if issues:
            raise BundleValidationError(issues)
        return bundle

