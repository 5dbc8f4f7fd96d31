"""Persisted-preference store interface.

The locale controller only needs a string get/set; platforms plug in
whatever backs it (a settings file, a cookie jar, a database row).
"""

from typing import Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class PreferenceStore(Protocol):
    """Key-value store for user preferences."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value, or None if unset."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        ...


class InMemoryPreferenceStore:
    """Dict-backed PreferenceStore for tests and single-process use."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(values or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value
