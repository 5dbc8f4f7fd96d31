"""Bundle models for the i18n system.

A translation bundle is a JSON-shaped tree. Nodes are classified one level
at a time into a tagged variant so resolvers pattern-match on the tag
instead of inspecting structure:

    Leaf(template)          a plain template string
    PluralLeaf(forms)       a mapping of plural category -> template
    Branch(children)        any other mapping

Classification is lazy and wraps the stored mapping without copying it,
so edits made to a loaded bundle are visible on the next lookup.
"""

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any, Iterable, Optional, Union

# CLDR plural category names, in CLDR order
PLURAL_CATEGORIES = ("zero", "one", "two", "few", "many", "other")

DEFAULT_REQUIRED_PLURAL_CATEGORIES = ("one", "other")
DEFAULT_OPTIONAL_PLURAL_CATEGORIES = ("zero", "two", "few", "many")

TranslationBundle = Mapping[str, Any]


@dataclass(frozen=True)
class Leaf:
    """A template string."""

    template: str


@dataclass(frozen=True)
class PluralLeaf:
    """A plural object: plural category name -> template string."""

    forms: Mapping[str, str]

    def form(self, category: str) -> Optional[str]:
        """Return the template for a category, or None if absent."""
        return self.forms.get(category)


@dataclass(frozen=True)
class Branch:
    """An interior mapping node."""

    children: Mapping[str, Any]

    def child(
        self, name: str, categories: Iterable[str] = PLURAL_CATEGORIES
    ) -> Optional["Node"]:
        """Classify and return the child at `name`, or None if absent."""
        if name not in self.children:
            return None
        return as_node(self.children[name], categories)


Node = Union[Leaf, PluralLeaf, Branch]


def is_plural_mapping(
    value: Any, categories: Iterable[str] = PLURAL_CATEGORIES
) -> bool:
    """Check whether a mapping holds only plural categories with string values.

    Args:
        value: Candidate node.
        categories: Plural category names recognised as plural keys.

    Returns:
        True if value is a non-empty mapping whose keys are all plural
        categories and whose values are all strings.
    """
    if not isinstance(value, Mapping) or not value:
        return False
    allowed = set(categories)
    return all(
        key in allowed and isinstance(item, str) for key, item in value.items()
    )


def as_node(value: Any, categories: Iterable[str] = PLURAL_CATEGORIES) -> Optional[Node]:
    """Classify one bundle value into its tagged node.

    Args:
        value: Raw bundle value.
        categories: Plural category names recognised as plural keys.

    Returns:
        Leaf, PluralLeaf or Branch; None for values that are not part of
        the translation tree (numbers, booleans, arrays, null).
    """
    if isinstance(value, str):
        return Leaf(value)
    if isinstance(value, Mapping):
        if is_plural_mapping(value, categories):
            return PluralLeaf(value)
        return Branch(value)
    return None


@dataclass(frozen=True)
class I18nConfig:
    """Immutable runtime configuration.

    Attributes:
        fallback_locale: Locale consulted when a key is missing.
        persist_locale: Write the chosen locale to the preference store.
        storage_key: Preference store key holding the chosen locale.
        debug: Render missing keys and parameters visibly.
        default_currency: Currency code for currency formats that name none.
    """

    fallback_locale: str = "en"
    persist_locale: bool = True
    storage_key: str = "app_locale"
    debug: bool = False
    default_currency: str = "USD"

    @classmethod
    def from_settings(cls, i18n_settings: Any) -> "I18nConfig":
        """Build a config from I18nSettings."""
        return cls(
            fallback_locale=i18n_settings.FALLBACK_LOCALE,
            persist_locale=i18n_settings.PERSIST_LOCALE,
            storage_key=i18n_settings.STORAGE_KEY,
            debug=i18n_settings.DEBUG,
            default_currency=i18n_settings.DEFAULT_CURRENCY,
        )

    def updated(self, **changes: Any) -> "I18nConfig":
        """Return a copy with the explicitly provided fields replaced.

        Fields passed as None are left untouched.

        Raises:
            TypeError: If a field name is unknown.
        """
        known = {f.name for f in fields(self)}
        unknown = set(changes) - known
        if unknown:
            raise TypeError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        provided = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **provided)
