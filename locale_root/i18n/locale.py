"""
Locale helpers

Pure functions for locale handling:
- lang <-> locale conversion (``fr`` <-> ``fr_FR``)
- Accept-Language header parsing with quality-value (q=) support
- Negotiation of the best allowed locale for a client
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

# ── Constants ─────────────────────────────────────────────────────────────────

# Most likely locale for a bare language code, used when no allowed locale
# carries that language.
LIKELY_SUBTAGS: dict[str, str] = {
    "ar": "ar_EG",
    "cs": "cs_CZ",
    "da": "da_DK",
    "de": "de_DE",
    "el": "el_GR",
    "en": "en_US",
    "es": "es_ES",
    "fa": "fa_IR",
    "fi": "fi_FI",
    "fr": "fr_FR",
    "he": "he_IL",
    "hi": "hi_IN",
    "hu": "hu_HU",
    "id": "id_ID",
    "it": "it_IT",
    "ja": "ja_JP",
    "ko": "ko_KR",
    "nb": "nb_NO",
    "nl": "nl_NL",
    "pl": "pl_PL",
    "pt": "pt_BR",
    "ro": "ro_RO",
    "ru": "ru_RU",
    "sv": "sv_SE",
    "th": "th_TH",
    "tr": "tr_TR",
    "uk": "uk_UA",
    "vi": "vi_VN",
    "zh": "zh_CN",
}

DEFAULT_PRIORITY = 1.0

ACCEPT_LANGUAGE_PATTERN = re.compile(
    r"(?P<code>[a-z]{1,8}(?:-[a-z]{1,8})?)\s*(?:;\s*q\s*=\s*(?P<priority>1|0\.[0-9]+))?",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class AcceptLanguageEntry:
    """One language tag of an Accept-Language header."""

    language_tag: str
    priority: float = DEFAULT_PRIORITY


# ── Public helpers ────────────────────────────────────────────────────────────


def locale_to_lang(locale: str) -> str:
    """Return the bare language of a locale: ``"fr_FR"`` -> ``"fr"``, ``"en-us"`` -> ``"en"``."""
    return re.split(r"[_-]", locale, maxsplit=1)[0]


def parse_accept_language(header: str | None) -> list[AcceptLanguageEntry]:
    """Parse an Accept-Language header into candidates in negotiation order.

    Algorithm:
    1. Find every ``tag[;q=factor]`` token in the header (default q=1.0).
       A tag seen twice keeps its first position and its last q-value.
    2. Group tags by q-value and order the groups by descending q-value.
    3. Within a group, keep the order the tags appear in the header.

    Args:
        header: Value of the Accept-Language HTTP header, e.g.
                "fr-CA,fr;q=0.9,en-US;q=0.8,en;q=0.7".

    Returns:
        AcceptLanguageEntry list, highest priority first. Empty when the
        header is missing or contains no language tag.
    """
    if not header:
        return []

    weights: dict[str, float] = {}
    for match in ACCEPT_LANGUAGE_PATTERN.finditer(header):
        priority = match.group("priority")
        weights[match.group("code")] = float(priority) if priority else DEFAULT_PRIORITY

    # sorted() is stable, so tags sharing a q-value stay in header order
    ordered = sorted(weights.items(), key=lambda item: item[1], reverse=True)
    return [AcceptLanguageEntry(language_tag=tag, priority=priority) for tag, priority in ordered]


def negotiate_locale(header: str | None, allowed: Iterable[str]) -> str | None:
    """Return the allowed locale best matching the client's Accept-Language header.

    Candidates are tried in priority order. A candidate matches an allowed
    locale when the dashed form of the locale starts with the candidate,
    ignoring case, so a coarse tag like ``en`` matches ``en_US``. Allowed
    locales are tried in their configured order and the first match wins.

    Args:
        header:  Value of the Accept-Language HTTP header.
        allowed: Locales the site serves, e.g. ["en_US", "fr_FR"].

    Returns:
        The matching allowed locale, or None.
    """
    allowed = list(allowed)
    dashed = [locale.replace("_", "-").lower() for locale in allowed]

    for entry in parse_accept_language(header):
        tag = entry.language_tag.lower()
        for locale, candidate in zip(allowed, dashed):
            if candidate.startswith(tag):
                return locale

    return None
