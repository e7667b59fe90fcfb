"""
Reusable settings builders for tests

Every test app uses an English/French site on an in-memory SQLite content
store unless a test overrides it.
"""

from locale_root.config import Settings

TEST_DATABASE_URL = "sqlite://"

BASE_SETTINGS = {
    "default_locale": "en_US",
    "allowed_locales": ["en_US", "fr_FR"],
    "database_url": TEST_DATABASE_URL,
    "json_logs": False,
}


def make_settings(**overrides) -> Settings:
    """Build test settings; keyword arguments override the English/French defaults."""
    return Settings(_env_file=None, **{**BASE_SETTINGS, **overrides})
