"""Tests for phrasechain.i18n.loader module."""

import json

import pytest

from phrasechain.i18n.exceptions import LocaleLoadError
from phrasechain.i18n.loader import (
    BundleLoader,
    CallableBundleLoader,
    JSONBundleLoader,
    YAMLBundleLoader,
    as_loader,
    check_locale_id,
)


@pytest.mark.unit
class TestCallableBundleLoader:
    """Tests for CallableBundleLoader."""

    @pytest.mark.asyncio
    async def test_load_calls_function(self, es_bundle):
        """load() returns what the wrapped coroutine returns."""

        async def fetch(locale):
            return es_bundle

        loader = CallableBundleLoader(fetch)
        assert await loader.load("es") is es_bundle
        assert await loader("es") is es_bundle

    @pytest.mark.asyncio
    async def test_non_mapping_payload_raises(self):
        """A loader returning a non-mapping is a load failure."""

        async def fetch(locale):
            return ["not", "a", "bundle"]

        with pytest.raises(LocaleLoadError) as exc_info:
            await CallableBundleLoader(fetch).load("es")
        assert exc_info.value.locale == "es"

    def test_as_loader_wraps_callables(self):
        """as_loader() wraps bare callables and passes loaders through."""

        async def fetch(locale):
            return {}

        wrapped = as_loader(fetch)
        assert isinstance(wrapped, CallableBundleLoader)
        assert as_loader(wrapped) is wrapped


@pytest.mark.unit
class TestCheckLocaleId:
    """Tests for check_locale_id."""

    @pytest.mark.parametrize("locale", ["en", "es-MX", "zh_Hant", "fr-CA-x-test"])
    def test_plain_tags_pass(self, locale):
        """Letters, digits, hyphens and underscores are accepted."""
        assert check_locale_id(locale) == locale

    @pytest.mark.parametrize(
        "locale", ["../secrets", "*", "", "en/..", "en.json", "en\n", "es?"]
    )
    def test_path_like_ids_rejected(self, locale):
        """Ids that could change the file path or glob raise LocaleLoadError."""
        with pytest.raises(LocaleLoadError, match="Invalid locale id"):
            check_locale_id(locale)


@pytest.mark.unit
class TestJSONBundleLoader:
    """Tests for JSONBundleLoader."""

    def test_missing_directory_raises(self, tmp_path):
        """Initialization fails for a directory that does not exist."""
        with pytest.raises(ValueError, match="not found"):
            JSONBundleLoader(tmp_path / "nope")

    @pytest.mark.asyncio
    async def test_load_reads_locale_file(self, json_translations_dir, es_bundle):
        """load() parses <locale>.json."""
        loader = JSONBundleLoader(json_translations_dir)
        assert isinstance(loader, BundleLoader)
        assert await loader.load("es") == es_bundle

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, json_translations_dir):
        """A locale without a file raises LocaleLoadError."""
        loader = JSONBundleLoader(json_translations_dir)
        with pytest.raises(LocaleLoadError, match="No bundle file"):
            await loader.load("fr")

    @pytest.mark.asyncio
    async def test_malformed_file_raises(self, json_translations_dir):
        """Malformed JSON raises LocaleLoadError."""
        loader = JSONBundleLoader(json_translations_dir)
        with pytest.raises(LocaleLoadError, match="Failed to parse"):
            await loader.load("broken")

    @pytest.mark.asyncio
    async def test_non_object_root_raises(self, json_translations_dir):
        """A JSON array root is rejected."""
        loader = JSONBundleLoader(json_translations_dir)
        with pytest.raises(LocaleLoadError, match="not a mapping"):
            await loader.load("list")

    @pytest.mark.asyncio
    async def test_parent_directory_locale_rejected(self, tmp_path, en_bundle):
        """A locale id with "../" cannot read a file outside the directory."""
        translations = tmp_path / "translations"
        translations.mkdir()
        (tmp_path / "secrets.json").write_text(json.dumps(en_bundle), encoding="utf-8")
        loader = JSONBundleLoader(translations)
        with pytest.raises(LocaleLoadError, match="Invalid locale id") as exc_info:
            await loader.load("../secrets")
        assert exc_info.value.locale == "../secrets"


@pytest.mark.unit
class TestYAMLBundleLoader:
    """Tests for YAMLBundleLoader."""

    def test_files_for_locale(self, yaml_translations_dir):
        """files_for() lists the base file first, then domain files sorted."""
        loader = YAMLBundleLoader(yaml_translations_dir)
        names = [path.name for path in loader.files_for("es")]
        assert names == ["es.yml", "cart.es.yml", "nav.es.yml"]

    @pytest.mark.asyncio
    async def test_load_merges_files(self, yaml_translations_dir):
        """load() merges every file contributing to the locale."""
        loader = YAMLBundleLoader(yaml_translations_dir)
        bundle = await loader.load("es")
        assert bundle == {
            "greeting": "¡Hola, {name}!",
            "cart": {"one": "{count} artículo", "other": "{count} artículos"},
            "nav": {"home": "Inicio"},
        }

    @pytest.mark.asyncio
    async def test_unknown_locale_raises(self, yaml_translations_dir):
        """A locale without files raises LocaleLoadError."""
        loader = YAMLBundleLoader(yaml_translations_dir)
        with pytest.raises(LocaleLoadError) as exc_info:
            await loader.load("fr")
        assert exc_info.value.locale == "fr"

    @pytest.mark.asyncio
    async def test_malformed_yaml_raises(self, tmp_path):
        """Malformed YAML raises LocaleLoadError."""
        (tmp_path / "es.yml").write_text("greeting: [unclosed", encoding="utf-8")
        loader = YAMLBundleLoader(tmp_path)
        with pytest.raises(LocaleLoadError, match="Failed to parse"):
            await loader.load("es")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("locale", ["*", "../secrets", "[ef]s"])
    async def test_pattern_locale_rejected(self, yaml_translations_dir, locale):
        """Glob characters and parent segments never reach the directory."""
        loader = YAMLBundleLoader(yaml_translations_dir)
        with pytest.raises(LocaleLoadError, match="Invalid locale id"):
            await loader.load(locale)
        with pytest.raises(LocaleLoadError, match="Invalid locale id"):
            loader.files_for(locale)
