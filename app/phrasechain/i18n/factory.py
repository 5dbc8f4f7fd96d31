"""Factory functions for creating i18n components.

Wires a LocaleController from settings with default loaders.
"""

from pathlib import Path
from typing import Optional, Sequence

from phrasechain.configuration import I18nSettings, settings
from phrasechain.i18n.controller import LocaleController
from phrasechain.i18n.loader import BundleLoader, JSONBundleLoader, LoaderFunc, YAMLBundleLoader
from phrasechain.i18n.models import I18nConfig, TranslationBundle
from phrasechain.i18n.storage import PreferenceStore
from phrasechain.logging import get_module_logger

logger = get_module_logger()


def create_loader(translations_dir: Path) -> BundleLoader:
    """Pick a file loader for a translations directory.

    Uses YAML when the directory holds .yml/.yaml files and no .json files,
    JSON otherwise.

    Raises:
        ValueError: If the directory does not exist.
    """
    translations_dir = Path(translations_dir)
    if not translations_dir.exists():
        raise ValueError(f"Translations directory not found: {translations_dir}")

    has_json = any(translations_dir.glob("*.json"))
    has_yaml = any(translations_dir.glob("*.yml")) or any(translations_dir.glob("*.yaml"))
    if has_yaml and not has_json:
        return YAMLBundleLoader(translations_dir)
    return JSONBundleLoader(translations_dir)


def create_i18n(
    loader: Optional["BundleLoader | LoaderFunc"] = None,
    i18n_settings: Optional[I18nSettings] = None,
    locales: Optional[Sequence[str]] = None,
    fallback_bundle: Optional[TranslationBundle] = None,
    preferences: Optional[PreferenceStore] = None,
) -> LocaleController:
    """Create a LocaleController configured from settings.

    If no loader is given, a file loader is created for
    I18N_TRANSLATIONS_DIR when it is set.

    Args:
        loader: Async bundle loader (object or bare callable).
        i18n_settings: Settings to use (default: global settings.i18n).
        locales: Supported locales (default: I18N_LOCALES).
        fallback_bundle: Bundle pre-seeded for the fallback locale.
        preferences: Persisted-preference store.

    Returns:
        LocaleController: Configured controller

    Usage:
        controller = create_i18n(fallback_bundle=json.loads(en_json))
        await controller.switch_locale("fr")
    """
    i18n_settings = i18n_settings or settings.i18n

    if loader is None and i18n_settings.TRANSLATIONS_DIR is not None:
        loader = create_loader(i18n_settings.TRANSLATIONS_DIR)

    controller = LocaleController(
        loader=loader,
        config=I18nConfig.from_settings(i18n_settings),
        locales=locales if locales is not None else i18n_settings.LOCALES,
        fallback_bundle=fallback_bundle,
        preferences=preferences,
    )

    logger.info(
        "i18n_created",
        translations_dir=str(i18n_settings.TRANSLATIONS_DIR or ""),
        has_loader=controller.loader is not None,
        preseeded=fallback_bundle is not None,
    )
    return controller
