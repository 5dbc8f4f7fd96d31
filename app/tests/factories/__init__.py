"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_en_bundle,
    make_es_bundle,
    make_loader,
    make_gated_loader,
)

__all__ = [
    "make_en_bundle",
    "make_es_bundle",
    "make_loader",
    "make_gated_loader",
]
