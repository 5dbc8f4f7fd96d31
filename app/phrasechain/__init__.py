"""Phrase Chain - localized text resolution with lazy locale bundles.

Example:
    from phrasechain import create_i18n

    i18n = create_i18n(fallback_bundle={"greeting": "Hello, {name}!"})
    i18n.translate("greeting", {"name": "Ana"})
"""

from phrasechain.i18n import (
    BundleSchema,
    I18nConfig,
    LocaleController,
    SchemaOptions,
    create_i18n,
    validate_bundle,
)

__version__ = "0.1.0"

__all__ = [
    "BundleSchema",
    "I18nConfig",
    "LocaleController",
    "SchemaOptions",
    "create_i18n",
    "validate_bundle",
    "__version__",
]
