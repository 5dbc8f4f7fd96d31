"""In-memory bundle store keyed by locale."""

from typing import Dict, List, Optional

from phrasechain.i18n.models import TranslationBundle
from phrasechain.logging import get_module_logger

logger = get_module_logger()


class BundleStore:
    """Holds loaded translation bundles per locale.

    Entries are added by a successful load and never removed; a fresh load
    for the same locale overwrites the previous bundle.
    """

    def __init__(self, initial: Optional[Dict[str, TranslationBundle]] = None):
        self._bundles: Dict[str, TranslationBundle] = dict(initial or {})

    def get(self, locale: str) -> Optional[TranslationBundle]:
        return self._bundles.get(locale)

    def set(self, locale: str, bundle: TranslationBundle) -> None:
        replaced = locale in self._bundles
        self._bundles[locale] = bundle
        logger.debug(
            "bundle_stored",
            locale=locale,
            replaced=replaced,
            top_level_keys=len(bundle),
        )

    def has(self, locale: str) -> bool:
        return locale in self._bundles

    def locales(self) -> List[str]:
        """Return locales with a loaded bundle, in load order."""
        return list(self._bundles)

    def __contains__(self, locale: object) -> bool:
        return locale in self._bundles

    def __len__(self) -> int:
        return len(self._bundles)
