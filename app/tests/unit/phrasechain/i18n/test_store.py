"""Tests for phrasechain.i18n.store and phrasechain.i18n.storage modules."""

import pytest

from phrasechain.i18n.storage import InMemoryPreferenceStore, PreferenceStore
from phrasechain.i18n.store import BundleStore


@pytest.mark.unit
class TestBundleStore:
    """Tests for BundleStore."""

    def test_empty_store(self):
        """A new store holds no bundles."""
        store = BundleStore()
        assert len(store) == 0
        assert store.get("en") is None
        assert not store.has("en")

    def test_set_and_get(self, en_bundle):
        """set() stores the bundle object as given."""
        store = BundleStore()
        store.set("en", en_bundle)
        assert store.get("en") is en_bundle
        assert "en" in store

    def test_set_overwrites(self, en_bundle, es_bundle):
        """A fresh load for the same locale overwrites the bundle."""
        store = BundleStore({"en": en_bundle})
        store.set("en", es_bundle)
        assert store.get("en") is es_bundle
        assert len(store) == 1

    def test_locales_in_load_order(self, en_bundle, es_bundle):
        """locales() lists locales in the order they were stored."""
        store = BundleStore()
        store.set("es", es_bundle)
        store.set("en", en_bundle)
        assert store.locales() == ["es", "en"]


@pytest.mark.unit
class TestInMemoryPreferenceStore:
    """Tests for InMemoryPreferenceStore."""

    def test_satisfies_protocol(self):
        """InMemoryPreferenceStore is a PreferenceStore."""
        assert isinstance(InMemoryPreferenceStore(), PreferenceStore)

    def test_get_and_set(self):
        """Values round through get/set; unset keys are None."""
        store = InMemoryPreferenceStore({"theme": "dark"})
        assert store.get("app_locale") is None
        store.set("app_locale", "es")
        assert store.get("app_locale") == "es"
        assert store.values == {"theme": "dark", "app_locale": "es"}
