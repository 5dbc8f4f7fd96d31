"""Bundle loading interface and implementations.

The loader is the only I/O boundary of the i18n runtime: an async callable
taking a locale id and returning the bundle, raising on failure.
"""

import asyncio
import json
import re
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List

import yaml

from phrasechain.i18n.exceptions import LocaleLoadError
from phrasechain.i18n.models import TranslationBundle
from phrasechain.logging import get_module_logger

logger = get_module_logger()

LoaderFunc = Callable[[str], Awaitable[TranslationBundle]]

# Locale ids become file names, so only plain tags are accepted
LOCALE_ID_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def check_locale_id(locale: str) -> str:
    """Reject locale ids that could escape or widen the bundle directory.

    Raises:
        LocaleLoadError: If the id is not a plain `[A-Za-z0-9_-]+` tag.
    """
    if not isinstance(locale, str) or not LOCALE_ID_PATTERN.fullmatch(locale):
        logger.warning("invalid_locale_id", locale=repr(locale))
        raise LocaleLoadError(str(locale), f"Invalid locale id: {locale!r}")
    return locale


def _ensure_mapping(locale: str, data: Any, source: str) -> TranslationBundle:
    if not isinstance(data, Mapping):
        logger.warning(
            "invalid_bundle_format",
            locale=locale,
            source=source,
            expected="mapping",
            found=type(data).__name__,
        )
        raise LocaleLoadError(
            locale, f"Bundle for locale '{locale}' from {source} is not a mapping"
        )
    return data


class BundleLoader(ABC):
    """Abstract base for bundle loaders."""

    @abstractmethod
    async def load(self, locale: str) -> TranslationBundle:
        """Load the bundle for a locale.

        Args:
            locale: Locale id to load.

        Returns:
            The translation bundle.

        Raises:
            LocaleLoadError: If the bundle cannot be found or parsed.
        """
        pass

    async def __call__(self, locale: str) -> TranslationBundle:
        return await self.load(locale)


class CallableBundleLoader(BundleLoader):
    """Adapts any `async (locale) -> bundle` callable to BundleLoader."""

    def __init__(self, func: LoaderFunc):
        self.func = func

    async def load(self, locale: str) -> TranslationBundle:
        data = await self.func(locale)
        return _ensure_mapping(locale, data, getattr(self.func, "__name__", "callable"))


class JSONBundleLoader(BundleLoader):
    """Loads `<locale>.json` files from a directory.

    Attributes:
        translations_dir: Directory containing the JSON bundles.
    """

    def __init__(self, translations_dir: Path):
        self.translations_dir = Path(translations_dir)
        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )
        logger.info("initialized_json_loader", translations_dir=str(self.translations_dir))

    async def load(self, locale: str) -> TranslationBundle:
        check_locale_id(locale)
        path = self.translations_dir / f"{locale}.json"
        return await asyncio.to_thread(self._read, locale, path)

    def _read(self, locale: str, path: Path) -> TranslationBundle:
        if not path.is_file():
            raise LocaleLoadError(locale, f"No bundle file for locale '{locale}': {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.error("json_parse_error", file=str(path), error=str(e))
            raise LocaleLoadError(locale, f"Failed to parse {path}: {e}") from e

        bundle = _ensure_mapping(locale, data, str(path))
        logger.info("loaded_bundle", locale=locale, file=str(path), top_level_keys=len(bundle))
        return bundle


class YAMLBundleLoader(BundleLoader):
    """Loads YAML bundles from a directory.

    Reads `<locale>.yml` and any `<domain>.<locale>.yml` files and merges
    them into one bundle, later files overriding earlier top-level keys.

    Attributes:
        translations_dir: Directory containing the YAML files.
    """

    def __init__(self, translations_dir: Path):
        self.translations_dir = Path(translations_dir)
        if not self.translations_dir.exists():
            raise ValueError(
                f"Translations directory not found: {self.translations_dir}"
            )
        logger.info("initialized_yaml_loader", translations_dir=str(self.translations_dir))

    def files_for(self, locale: str) -> List[Path]:
        """Return the YAML files contributing to a locale, in merge order."""
        check_locale_id(locale)
        files: List[Path] = []
        for suffix in ("yml", "yaml"):
            files.extend(self.translations_dir.glob(f"{locale}.{suffix}"))
            files.extend(sorted(self.translations_dir.glob(f"*.{locale}.{suffix}")))
        return files

    async def load(self, locale: str) -> TranslationBundle:
        check_locale_id(locale)
        return await asyncio.to_thread(self._read, locale)

    def _read(self, locale: str) -> TranslationBundle:
        yaml_files = self.files_for(locale)
        if not yaml_files:
            raise LocaleLoadError(
                locale,
                f"No translation files found for locale {locale} in {self.translations_dir}",
            )

        bundle: Dict[str, Any] = {}
        for yaml_file in yaml_files:
            try:
                with open(yaml_file, "r", encoding="utf-8") as f:
                    data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                logger.error("yaml_parse_error", file=str(yaml_file), error=str(e))
                raise LocaleLoadError(locale, f"Failed to parse {yaml_file}: {e}") from e
            if data:
                bundle.update(_ensure_mapping(locale, data, str(yaml_file)))

        logger.info(
            "loaded_bundle",
            locale=locale,
            file_count=len(yaml_files),
            top_level_keys=len(bundle),
        )
        return bundle


def as_loader(loader: "BundleLoader | LoaderFunc") -> BundleLoader:
    """Normalize a loader object or bare async callable into a BundleLoader."""
    if isinstance(loader, BundleLoader):
        return loader
    return CallableBundleLoader(loader)
