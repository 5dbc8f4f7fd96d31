"""i18n system - localized text resolution.

Resolves dot-path keys against per-locale bundles, picks plural forms,
and renders placeholders with locale-aware formatting.

Main components:
- models: tagged bundle nodes (Leaf, PluralLeaf, Branch) and I18nConfig
- store: BundleStore holding loaded bundles
- loader: async bundle loaders (callable, JSON, YAML)
- resolvers: key resolution, plural selection, language negotiation
- formatting: placeholder interpolation and value formatting
- controller: LocaleController with switch_locale() and translate()
- schema: offline bundle structure validation
"""

from phrasechain.i18n.controller import LocaleController
from phrasechain.i18n.exceptions import (
    BundleValidationError,
    I18nError,
    LocaleLoadError,
    UnsupportedLocaleError,
)
from phrasechain.i18n.factory import create_i18n, create_loader
from phrasechain.i18n.formatting import MessageFormatter, render
from phrasechain.i18n.loader import (
    BundleLoader,
    CallableBundleLoader,
    JSONBundleLoader,
    YAMLBundleLoader,
)
from phrasechain.i18n.models import (
    PLURAL_CATEGORIES,
    Branch,
    I18nConfig,
    Leaf,
    PluralLeaf,
)
from phrasechain.i18n.resolvers import LanguageNegotiator, resolve, select_plural
from phrasechain.i18n.schema import (
    BundleSchema,
    SchemaOptions,
    ValidationIssue,
    validate_bundle,
)
from phrasechain.i18n.storage import InMemoryPreferenceStore, PreferenceStore
from phrasechain.i18n.store import BundleStore

__all__ = [
    "PLURAL_CATEGORIES",
    "Leaf",
    "PluralLeaf",
    "Branch",
    "I18nConfig",
    "BundleStore",
    "BundleLoader",
    "CallableBundleLoader",
    "JSONBundleLoader",
    "YAMLBundleLoader",
    "PreferenceStore",
    "InMemoryPreferenceStore",
    "LocaleController",
    "LanguageNegotiator",
    "MessageFormatter",
    "render",
    "resolve",
    "select_plural",
    "BundleSchema",
    "SchemaOptions",
    "ValidationIssue",
    "validate_bundle",
    "create_i18n",
    "create_loader",
    "I18nError",
    "LocaleLoadError",
    "UnsupportedLocaleError",
    "BundleValidationError",
]
