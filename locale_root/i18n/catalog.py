"""
Locale catalog

Read-only view of the configured locales: the allow-list, the default locale
and the lang -> locale table derived from them. The catalog holds one
immutable snapshot; ``reload`` replaces it wholesale and is meant to be
called only when the application is (re)configured, never mid-request.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from locale_root.exceptions import ConfigurationError
from locale_root.i18n.locale import LIKELY_SUBTAGS, locale_to_lang

if TYPE_CHECKING:
    from locale_root.config import Settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CatalogSnapshot:
    allowed: tuple[str, ...]
    default_locale: str
    lang_table: Mapping[str, str]


def _build_snapshot(allowed_locales: Iterable[str], default_locale: str) -> _CatalogSnapshot:
    allowed = tuple(dict.fromkeys(allowed_locales))
    if default_locale not in allowed:
        raise ConfigurationError(f"Default locale '{default_locale}' is not in the allowed locales {list(allowed)}")

    # Allowed locales win over the likely-subtag guesses; the first allowed
    # locale of a language owns that language.
    lang_table = dict(LIKELY_SUBTAGS)
    claimed: set[str] = set()
    for locale in allowed:
        lang = locale_to_lang(locale)
        if lang in claimed:
            logger.warning(f"Language '{lang}' of locale '{locale}' is already served by '{lang_table[lang]}'")
            continue
        lang_table[lang] = locale
        claimed.add(lang)

    return _CatalogSnapshot(
        allowed=allowed,
        default_locale=default_locale,
        lang_table=MappingProxyType(lang_table),
    )


class LocaleCatalog:
    """Lookups over the allowed locales and the default locale."""

    def __init__(self, allowed_locales: Iterable[str], default_locale: str):
        self._snapshot = _build_snapshot(allowed_locales, default_locale)

    @classmethod
    def from_settings(cls, settings: Settings) -> LocaleCatalog:
        return cls(settings.allowed_locales, settings.default_locale)

    def reload(self, settings: Settings) -> None:
        """Replace the catalog contents with those of ``settings``."""
        self._snapshot = _build_snapshot(settings.allowed_locales, settings.default_locale)
        logger.info(
            f"Locale catalog reloaded: default={self._snapshot.default_locale}, "
            f"allowed={list(self._snapshot.allowed)}"
        )

    @property
    def allowed_locales(self) -> tuple[str, ...]:
        return self._snapshot.allowed

    @property
    def default_locale(self) -> str:
        return self._snapshot.default_locale

    @property
    def default_lang(self) -> str:
        return locale_to_lang(self._snapshot.default_locale)

    def is_allowed(self, locale: str) -> bool:
        return locale in self._snapshot.allowed

    def lang_to_locale(self, lang: str) -> str | None:
        """Return the locale served for a bare language code, or None if unknown."""
        return self._snapshot.lang_table.get(lang)

    def locale_to_lang(self, locale: str) -> str:
        return locale_to_lang(locale)
