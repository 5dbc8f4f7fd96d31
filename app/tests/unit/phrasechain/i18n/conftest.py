"""Feature-level fixtures for i18n system tests.

Provides controllers, loaders and on-disk translation directories.
"""

import json

import pytest
import yaml

from phrasechain.i18n import I18nConfig, LocaleController
from tests.factories.i18n import make_loader


@pytest.fixture
def loader_calls():
    """List recording every locale requested from the loader."""
    return []


@pytest.fixture
def controller(en_bundle, es_bundle, loader_calls, preferences):
    """Controller with English pre-seeded and a loader serving Spanish.

    'fr' is supported but has no bundle, so switching to it fails.
    """
    return LocaleController(
        loader=make_loader({"es": es_bundle}, calls=loader_calls),
        config=I18nConfig(fallback_locale="en"),
        locales=("en", "es", "fr"),
        fallback_bundle=en_bundle,
        preferences=preferences,
    )


@pytest.fixture
def debug_controller(en_bundle, es_bundle):
    """Controller in debug mode with persistence disabled."""
    return LocaleController(
        loader=make_loader({"es": es_bundle}),
        config=I18nConfig(fallback_locale="en", debug=True, persist_locale=False),
        locales=("en", "es"),
        fallback_bundle=en_bundle,
    )


@pytest.fixture
def json_translations_dir(tmp_path, en_bundle, es_bundle):
    """Directory with en.json, es.json and a malformed broken.json."""
    (tmp_path / "en.json").write_text(json.dumps(en_bundle), encoding="utf-8")
    (tmp_path / "es.json").write_text(
        json.dumps(es_bundle, ensure_ascii=False), encoding="utf-8"
    )
    (tmp_path / "broken.json").write_text("{not json", encoding="utf-8")
    (tmp_path / "list.json").write_text("[1, 2]", encoding="utf-8")
    return tmp_path


@pytest.fixture
def yaml_translations_dir(tmp_path):
    """Directory with a base es.yml plus per-domain *.es.yml files.

    Returns a directory structure like:
    - es.yml
    - cart.es.yml
    - nav.es.yml
    - en.yml
    """
    with open(tmp_path / "es.yml", "w", encoding="utf-8") as f:
        yaml.dump({"greeting": "¡Hola, {name}!"}, f, allow_unicode=True)
    with open(tmp_path / "cart.es.yml", "w", encoding="utf-8") as f:
        yaml.dump({"cart": {"one": "{count} artículo", "other": "{count} artículos"}}, f, allow_unicode=True)
    with open(tmp_path / "nav.es.yml", "w", encoding="utf-8") as f:
        yaml.dump({"nav": {"home": "Inicio"}}, f, allow_unicode=True)
    with open(tmp_path / "en.yml", "w", encoding="utf-8") as f:
        yaml.dump({"greeting": "Hello, {name}!"}, f)
    return tmp_path
