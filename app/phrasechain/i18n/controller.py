"""Locale controller and translation entry point.

Owns the active locale, the bundle store and the failed-load set for one
application (or one test). Several controllers can coexist; nothing here
is module-global.

Usage:
    controller = LocaleController(
        loader=JSONBundleLoader(Path("locales")),
        locales=("en", "es", "fr"),
        fallback_bundle=en_bundle,
    )
    await controller.switch_locale("es")
    controller.translate("cart.items", {"name": "Ana"}, count=3)
"""

import asyncio
import itertools
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Set

from phrasechain.i18n.exceptions import LocaleLoadError, UnsupportedLocaleError
from phrasechain.i18n.formatting import MessageFormatter
from phrasechain.i18n.loader import BundleLoader, LoaderFunc, as_loader
from phrasechain.i18n.models import (
    PLURAL_CATEGORIES,
    Branch,
    I18nConfig,
    Leaf,
    PluralLeaf,
    TranslationBundle,
)
from phrasechain.i18n.resolvers import (
    LanguageNegotiator,
    parse_language_hint,
    resolve,
    select_plural,
)
from phrasechain.i18n.storage import PreferenceStore
from phrasechain.i18n.store import BundleStore
from phrasechain.logging import bind_locale_context, get_module_logger
from phrasechain.operations import ResolutionStatus

logger = get_module_logger()


class LocaleController:
    """Manages the active locale and lazily loaded bundles.

    Overlapping switch_locale() calls follow "last request wins": every
    call takes a request token, and only the most recent call may change
    the active locale when its load completes. Superseded loads still
    store their bundle and still record a failure.

    Attributes:
        config: Immutable runtime configuration.
        store: Loaded bundles by locale.
        failed_locales: Locales whose most recent load failed.
        missing_keys: Keys found in neither bundle (recorded in debug mode).
    """

    def __init__(
        self,
        loader: Optional["BundleLoader | LoaderFunc"] = None,
        config: Optional[I18nConfig] = None,
        locales: Optional[Sequence[str]] = None,
        fallback_bundle: Optional[TranslationBundle] = None,
        store: Optional[BundleStore] = None,
        preferences: Optional[PreferenceStore] = None,
        plural_categories: Iterable[str] = PLURAL_CATEGORIES,
    ):
        """Initialize the controller.

        Args:
            loader: Async bundle loader (object or bare callable).
            config: Runtime configuration (default: I18nConfig()).
            locales: Closed set of supported locale ids; None accepts any.
            fallback_bundle: Bundle pre-seeded for the fallback locale.
            store: Bundle store to use (default: a new empty store).
            preferences: Persisted-preference store.
            plural_categories: Category names that mark a plural object.

        Raises:
            ValueError: If the fallback locale is not a supported locale.
        """
        self.config = config or I18nConfig()
        self.locales = tuple(locales) if locales is not None else None
        if self.locales is not None and self.config.fallback_locale not in self.locales:
            raise ValueError(
                f"Fallback locale '{self.config.fallback_locale}' is not in supported locales {self.locales}"
            )

        self.loader = as_loader(loader) if loader is not None else None
        self.store = store or BundleStore()
        self.preferences = preferences
        self.plural_categories = tuple(plural_categories)
        self.failed_locales: Dict[str, bool] = {}
        self.missing_keys: Set[str] = set()

        if fallback_bundle is not None:
            self.store.set(self.config.fallback_locale, fallback_bundle)

        self._active_locale = self.config.fallback_locale
        self._request_ids = itertools.count(1)
        self._latest_request = 0
        self._background_tasks: Set["asyncio.Task[None]"] = set()

        logger.info(
            "initialized_locale_controller",
            fallback_locale=self.config.fallback_locale,
            locales=list(self.locales) if self.locales is not None else None,
            debug=self.config.debug,
        )

    # Locale state

    def get_active_locale(self) -> str:
        """Return the active locale id."""
        return self._active_locale

    @property
    def active_locale(self) -> str:
        return self._active_locale

    def is_supported(self, locale: str) -> bool:
        return self.locales is None or locale in self.locales

    def reconfigure(self, **changes: Any) -> I18nConfig:
        """Replace the explicitly provided configuration fields.

        Args:
            **changes: I18nConfig fields to replace; None values are ignored.

        Returns:
            The new configuration.

        Raises:
            TypeError: If a field name is unknown.
            ValueError: If the new fallback locale is not supported.
        """
        updated = self.config.updated(**changes)
        if not self.is_supported(updated.fallback_locale):
            raise ValueError(
                f"Fallback locale '{updated.fallback_locale}' is not in supported locales {self.locales}"
            )
        changed = [
            name
            for name, value in changes.items()
            if value is not None and getattr(self.config, name) != value
        ]
        self.config = updated
        logger.info("reconfigured_i18n", changed_fields=changed)
        return updated

    # Switching

    async def switch_locale(self, target: str, silent: bool = False) -> None:
        """Switch the active locale, loading its bundle if needed.

        The active locale is set before the bundle load completes so that
        concurrent formatting already uses the target's conventions. A
        locale whose last load failed is not retried; the active locale
        becomes the fallback instead.

        Never raises; failures are logged (at debug level when silent).

        Args:
            target: Locale id to activate.
            silent: Suppress warning/error diagnostics.
        """
        request_id = next(self._request_ids)
        self._latest_request = request_id

        with bind_locale_context(request_id=request_id, target_locale=target):
            if self.failed_locales.get(target):
                self._active_locale = self.config.fallback_locale
                self._report(
                    silent,
                    "warning",
                    "locale_load_skipped",
                    status=ResolutionStatus.LOCALE_LOAD_SKIPPED,
                    locale=target,
                    active_locale=self._active_locale,
                )
                return

            previous = self._active_locale
            self._active_locale = target

            if self.store.has(target):
                self._on_switched(target, previous, loaded=False)
                return

            try:
                bundle = await self._load(target)
            except Exception as e:  # pylint: disable=broad-except
                self.failed_locales[target] = True
                reverted = False
                if request_id == self._latest_request and self._active_locale == target:
                    self._active_locale = self.config.fallback_locale
                    reverted = True
                self._report(
                    silent,
                    "error",
                    "locale_load_failed",
                    status=ResolutionStatus.LOCALE_LOAD_FAILURE,
                    locale=target,
                    error=str(e),
                    error_type=type(e).__name__,
                    reverted_to=self.config.fallback_locale if reverted else None,
                )
                return

            self.store.set(target, bundle)
            self.failed_locales.pop(target, None)

            if request_id != self._latest_request:
                logger.info(
                    "superseded_locale_switch",
                    locale=target,
                    active_locale=self._active_locale,
                )
                return

            self._active_locale = target
            self._on_switched(target, previous, loaded=True)

    async def _load(self, target: str) -> TranslationBundle:
        if not self.is_supported(target):
            raise UnsupportedLocaleError(target)
        if self.loader is None:
            raise LocaleLoadError(target, "No bundle loader configured")
        return await self.loader.load(target)

    def _on_switched(self, locale: str, previous: str, loaded: bool) -> None:
        logger.info(
            "locale_switched",
            locale=locale,
            previous_locale=previous,
            loaded_bundle=loaded,
        )
        if self.config.persist_locale and self.preferences is not None:
            self.preferences.set(self.config.storage_key, locale)

    def _report(self, silent: bool, level: str, event: str, **fields: Any) -> None:
        status = fields.pop("status")
        log = logger.debug if silent else getattr(logger, level)
        log(event, status=status.value, **fields)

    def desired_locale(
        self,
        prefer_storage: bool = True,
        prefer_browser: bool = True,
        default_locale: Optional[str] = None,
        browser_hint: Optional[str] = None,
    ) -> str:
        """Compute the locale to start with.

        Priority: persisted preference, then the browser/environment hint
        negotiated against the supported locales, then default_locale,
        then the fallback locale.
        """
        if prefer_storage and self.config.persist_locale and self.preferences is not None:
            stored = self.preferences.get(self.config.storage_key)
            if stored and self.is_supported(stored):
                return stored

        if prefer_browser and browser_hint:
            tags = parse_language_hint(browser_hint)
            if self.locales is None:
                if tags:
                    return tags[0]
            else:
                match = LanguageNegotiator.find_best_match(tags, self.locales)
                if match:
                    return match

        return default_locale or self.config.fallback_locale

    def initialize_locale(
        self,
        prefer_storage: bool = True,
        prefer_browser: bool = True,
        default_locale: Optional[str] = None,
        browser_hint: Optional[str] = None,
    ) -> "asyncio.Task[None]":
        """Pick the starting locale and switch to it in the background.

        Must be called with a running event loop. The switch is silent.

        Returns:
            The scheduled task; callers may await it but need not.
        """
        desired = self.desired_locale(
            prefer_storage=prefer_storage,
            prefer_browser=prefer_browser,
            default_locale=default_locale,
            browser_hint=browser_hint,
        )
        logger.info("initializing_locale", desired_locale=desired)
        task = asyncio.get_running_loop().create_task(
            self.switch_locale(desired, silent=True)
        )
        # The loop only holds a weak reference to the task
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)
        return task

    # Translation

    def translate(
        self,
        key: str,
        params: Optional[Mapping[str, Any]] = None,
        count: Optional[float] = None,
    ) -> str:
        """Resolve, pluralize and render a message for the active locale.

        Never raises and always returns a string.

        Args:
            key: Dot-separated key path.
            params: Values for template placeholders.
            count: Count used to pick a plural form; also available as {count}.

        Returns:
            The rendered message, or a missing-key marker.
        """
        locale = self._active_locale
        node = resolve(
            key,
            locale,
            self.config.fallback_locale,
            self.store,
            self.plural_categories,
        )

        match node:
            case Leaf(template=template):
                pass
            case PluralLeaf():
                template = select_plural(node, count)
                if template is None:
                    return self._missing(key, locale, ResolutionStatus.MISSING_PLURAL_FORM)
            case Branch() | None:
                return self._missing(key, locale, ResolutionStatus.MISSING_KEY)

        values: Dict[str, Any] = dict(params or {})
        if count is not None:
            values.setdefault("count", count)

        formatter = MessageFormatter(
            locale,
            debug=self.config.debug,
            default_currency=self.config.default_currency,
        )
        return formatter.render(template, values)

    t = translate

    def _missing(self, key: str, locale: str, status: ResolutionStatus) -> str:
        event = (
            "plural_form_missing"
            if status == ResolutionStatus.MISSING_PLURAL_FORM
            else "translation_missing"
        )
        if self.config.debug:
            self.missing_keys.add(key)
            logger.warning(event, key=key, locale=locale, status=status.value)
            return f"[{key}]"

        logger.debug(event, key=key, locale=locale, status=status.value)
        return key.split(".")[-1] or f"[{key}]"
