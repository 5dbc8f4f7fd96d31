"""Localization settings."""

from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from phrasechain.configuration.base import ComponentSettings


class I18nSettings(ComponentSettings):
    """Locale and bundle configuration.

    Environment Variables:
        I18N_FALLBACK_LOCALE: Locale consulted when a key is missing (default: en)
        I18N_LOCALES: JSON list of supported locale ids (default: ["en"])
        I18N_PERSIST_LOCALE: Persist the chosen locale in the preference store (default: True)
        I18N_STORAGE_KEY: Preference store key for the chosen locale (default: app_locale)
        I18N_DEBUG: Render missing keys and parameters visibly (default: False)
        I18N_DEFAULT_CURRENCY: ISO 4217 code used by {value:currency} (default: USD)
        I18N_TRANSLATIONS_DIR: Directory holding <locale>.json / <locale>.yml bundles

    Example:
        ```python
        from phrasechain.configuration import settings

        if settings.i18n.DEBUG:
            ...
        ```
    """

    model_config = SettingsConfigDict(env_prefix="I18N_")

    FALLBACK_LOCALE: str = Field(
        default="en",
        description="Locale consulted when a key is missing from the active bundle",
    )

    LOCALES: List[str] = Field(
        default_factory=lambda: ["en"],
        description="Closed set of locale ids the application ships bundles for",
    )

    PERSIST_LOCALE: bool = Field(
        default=True,
        description="Write the chosen locale to the preference store",
    )

    STORAGE_KEY: str = Field(
        default="app_locale",
        description="Preference store key holding the chosen locale",
    )

    DEBUG: bool = Field(
        default=False,
        description="Render missing keys as [key] and missing parameters visibly",
    )

    DEFAULT_CURRENCY: str = Field(
        default="USD",
        description="Currency code used when a currency format does not name one",
    )

    TRANSLATIONS_DIR: Optional[Path] = Field(
        default=None,
        description="Directory containing translation bundle files",
    )
