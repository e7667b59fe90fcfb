"""
Mock utilities for testing the root router without HTTP or a database

Provides in-memory implementations of:
- PreferenceStore (the language cookie)
- ContentStore (readiness + homepage links)
"""


class MockPreferenceStore:
    """PreferenceStore that records every write in memory"""

    def __init__(self, value: str | None = None):
        self.value = value
        self.writes: list[str] = []
        self.cleared = False

    def get(self) -> str | None:
        return self.value

    def set(self, value: str) -> None:
        self.value = value
        self.writes.append(value)

    def clear(self) -> None:
        self.value = None
        self.cleared = True


class MockContentStore:
    """ContentStore with a fixed readiness flag and homepage table"""

    def __init__(self, ready: bool = True, homepages: dict[str, str] | None = None, default: str = "home"):
        self.ready = ready
        self.homepages = homepages or {}
        self.default = default
        self.lookups: list[str] = []

    def is_ready(self) -> bool:
        return self.ready

    def homepage_link(self, locale: str) -> str:
        self.lookups.append(locale)
        return self.homepages.get(locale, self.default)
