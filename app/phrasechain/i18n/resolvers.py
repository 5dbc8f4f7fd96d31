"""Key, plural and locale resolution.

- resolve(): dot-path lookup with active -> fallback locale search order
- select_plural(): two-bucket plural category selection
- LanguageNegotiator: match environment language hints to supported locales
"""

from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from phrasechain.i18n.models import (
    PLURAL_CATEGORIES,
    Branch,
    Leaf,
    Node,
    PluralLeaf,
    TranslationBundle,
)
from phrasechain.i18n.store import BundleStore
from phrasechain.logging import get_module_logger

logger = get_module_logger()


def walk(
    bundle: Optional[TranslationBundle],
    key: str,
    categories: Iterable[str] = PLURAL_CATEGORIES,
) -> Optional[Node]:
    """Walk a bundle along a dot-separated key.

    Descends through branches, and through plural objects by category
    name ("items.one"). Any other intermediate node ends the walk.

    Args:
        bundle: Bundle to search, or None if not loaded.
        key: Dot-separated key path.
        categories: Plural category names recognised as plural keys.

    Returns:
        The node at the end of the path, or None if the path does not exist.
    """
    if bundle is None:
        return None

    categories = tuple(categories)
    node: Optional[Node] = Branch(bundle)
    for segment in key.split("."):
        match node:
            case Branch():
                node = node.child(segment, categories)
            case PluralLeaf():
                form = node.form(segment)
                node = Leaf(form) if form is not None else None
            case _:
                return None
        if node is None:
            return None
    return node


def resolve(
    key: str,
    active_locale: str,
    fallback_locale: str,
    store: BundleStore,
    categories: Iterable[str] = PLURAL_CATEGORIES,
) -> Optional[Node]:
    """Resolve a key against the active bundle, then the fallback bundle.

    Resolution is never cached, so bundle edits are observed immediately.

    Args:
        key: Dot-separated key path.
        active_locale: Locale searched first.
        fallback_locale: Locale searched when the active bundle has no value.
        store: Bundle store holding loaded bundles.
        categories: Plural category names recognised as plural keys.

    Returns:
        The resolved node, or None if absent from both bundles.
    """
    node = walk(store.get(active_locale), key, categories)
    if node is None and active_locale != fallback_locale:
        node = walk(store.get(fallback_locale), key, categories)
        if node is not None:
            logger.debug(
                "used_fallback_translation",
                key=key,
                requested_locale=active_locale,
                fallback_locale=fallback_locale,
            )
    return node


def select_plural(
    plural: Union[PluralLeaf, Mapping[str, str]],
    count: Optional[float],
) -> Optional[str]:
    """Select the template for a count from a plural object.

    Uses the two-bucket rule: 'one' for a count of exactly 1, 'other'
    otherwise, falling back to 'other' when the chosen category is absent.
    Categories such as 'zero' or 'few' are only reachable by key path.

    Args:
        plural: Plural object (PluralLeaf or raw mapping).
        count: Count to pluralize for; None selects 'other'.

    Returns:
        The template string, or None if neither category exists.
    """
    forms = plural.forms if isinstance(plural, PluralLeaf) else plural
    category = "one" if count == 1 else "other"
    template = forms.get(category)
    if template is None and category != "other":
        template = forms.get("other")
    return template


def parse_language_hint(hint: Optional[str]) -> List[str]:
    """Parse an Accept-Language style hint into tags ordered by quality.

    "fr-CA,fr;q=0.9,en;q=0.8" -> ["fr-CA", "fr", "en"]. Wildcards are dropped.

    Args:
        hint: Raw hint string, e.g. a browser language or header value.

    Returns:
        Language tags, most preferred first.
    """
    if not hint:
        return []

    preferences: List[Tuple[str, float]] = []
    for part in hint.split(","):
        lang_range = part.split(";")[0].strip()
        if not lang_range or lang_range == "*":
            continue

        quality = 1.0
        if ";" in part and "q=" in part:
            try:
                quality = float(part.split("q=")[1])
            except ValueError:
                quality = 1.0

        preferences.append((lang_range.replace("_", "-"), quality))

    # sorted() is stable, so equal qualities keep their written order
    return [tag for tag, _ in sorted(preferences, key=lambda x: x[1], reverse=True)]


class LanguageNegotiator:
    """Matches requested language tags against the supported locale ids.

    Supports language-only matching for cases like a hint of "pt-BR"
    when only "pt" is available, or "en" when only "en-US" is.
    """

    @staticmethod
    def matches_language(
        requested: str,
        available: str,
        strict: bool = False,
    ) -> bool:
        """Check if an available locale matches a requested tag.

        Args:
            requested: Requested language tag (e.g., "en-US").
            available: Available locale id (e.g., "en").
            strict: If True, requires exact (case-insensitive) match.

        Returns:
            True if the tags match.
        """
        requested = requested.replace("_", "-")
        available = available.replace("_", "-")
        if requested.lower() == available.lower():
            return True

        if strict:
            return False

        requested_lang = requested.split("-")[0].lower()
        available_lang = available.split("-")[0].lower()
        return requested_lang == available_lang

    @staticmethod
    def find_best_match(
        requested: Sequence[str],
        available: Sequence[str],
        default: Optional[str] = None,
    ) -> Optional[str]:
        """Find the best available locale for requested tags.

        Args:
            requested: Requested language tags in preference order.
            available: Supported locale ids.
            default: Returned when nothing matches.

        Returns:
            Best matching locale id from available, or default.
        """
        for req_lang in requested:
            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=True):
                    return avail_lang

            for avail_lang in available:
                if LanguageNegotiator.matches_language(req_lang, avail_lang, strict=False):
                    return avail_lang

        return default
