"""
URL language segment parsing

The first path segment of a multilingual URL names the language of the page.
Three URL styles are supported:

    LANG          /fr/       bare language code
    LOCALE        /fr_FR/    full locale
    LOCALE_DASH   /fr-fr/    full locale, lowercase with a dash

``parse_segment`` validates a segment for the active style and returns the
locale it names; ``build_segment`` renders a locale in the style's URL form.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from locale_root.exceptions import MalformedSegmentError, UnknownLanguageError
from locale_root.i18n.locale import locale_to_lang

if TYPE_CHECKING:
    from locale_root.i18n.catalog import LocaleCatalog


class URLLanguageStyle(str, enum.Enum):
    """How the language of a page is written in its URL."""

    LANG = "lang"
    LOCALE = "locale"
    LOCALE_DASH = "locale_dash"

    @property
    def uses_locale(self) -> bool:
        return self is not URLLanguageStyle.LANG


def parse_segment(segment: str, style: URLLanguageStyle, catalog: LocaleCatalog) -> str:
    """Return the locale named by a URL language segment.

    Raises:
        MalformedSegmentError: wrong separator or casing for ``style``.
        UnknownLanguageError: LANG style segment with no known locale.
    """
    if style is URLLanguageStyle.LANG:
        if "_" in segment or "-" in segment:
            raise MalformedSegmentError(segment, style.value, "a language segment cannot contain a locale separator")

        locale = catalog.lang_to_locale(segment)
        if locale is None:
            raise UnknownLanguageError(segment, style.value)
        return locale

    if style is URLLanguageStyle.LOCALE:
        if "_" not in segment:
            raise MalformedSegmentError(segment, style.value, "a locale segment must contain an underscore")
        return segment

    if segment.count("-") != 1:
        raise MalformedSegmentError(segment, style.value, "a dashed locale segment must contain exactly one dash")

    lang, _, country = segment.partition("-")
    if not lang or not country:
        raise MalformedSegmentError(segment, style.value, "a dashed locale segment needs a language and a country")

    # Non-canonical casing (en-US) is reported as malformed, so it 404s rather
    # than redirecting to en-us. Whether it should redirect is still undecided.
    if segment != segment.lower():
        raise MalformedSegmentError(segment, style.value, "a dashed locale segment must be lowercase")

    return f"{lang}_{country.upper()}"


def build_segment(locale: str, style: URLLanguageStyle) -> str:
    """Render ``locale`` as the URL segment for ``style``."""
    if style is URLLanguageStyle.LANG:
        return locale_to_lang(locale)
    if style is URLLanguageStyle.LOCALE_DASH:
        return locale.lower().replace("_", "-")
    return locale
