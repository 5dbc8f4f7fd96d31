import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `phrasechain.i18n`) works during pytest collection regardless
# of the directory pytest is invoked from.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest
from tests.factories.i18n import (
    make_en_bundle,
    make_es_bundle,
)
from phrasechain.i18n import InMemoryPreferenceStore


@pytest.fixture
def en_bundle():
    """English bundle used as the fallback in most tests."""
    return make_en_bundle()


@pytest.fixture
def es_bundle():
    """Spanish bundle with a few keys missing on purpose."""
    return make_es_bundle()


@pytest.fixture
def preferences():
    """Empty in-memory preference store."""
    return InMemoryPreferenceStore()
