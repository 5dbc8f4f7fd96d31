"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Localization settings class (for testing)

Example:
    ```python
    from phrasechain.configuration import settings

    locales = settings.i18n.LOCALES
    ```
"""

from phrasechain.configuration.i18n import I18nSettings
from phrasechain.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
