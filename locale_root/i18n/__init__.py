"""
i18n (Internationalization) package

Provides the locale catalog, lang/locale conversion, Accept-Language
negotiation and URL language segment parsing used by the root router.
"""

from .catalog import LocaleCatalog
from .locale import (
    LIKELY_SUBTAGS,
    AcceptLanguageEntry,
    locale_to_lang,
    negotiate_locale,
    parse_accept_language,
)
from .segment import URLLanguageStyle, build_segment, parse_segment

__all__ = [
    "LIKELY_SUBTAGS",
    "AcceptLanguageEntry",
    "LocaleCatalog",
    "URLLanguageStyle",
    "build_segment",
    "locale_to_lang",
    "negotiate_locale",
    "parse_accept_language",
    "parse_segment",
]
