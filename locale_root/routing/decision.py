"""
Root URL routing decision

Decides, for a request to the site root or to a language root such as
``/fr/``, whether to serve the homepage in a locale, redirect to the
canonical language URL, or answer 404. Every request gets exactly one
``RoutingDecision``; the HTTP layer turns it into a response.

State is explicit: the active locale and the "handled at root" flag live on
the per-request ``RequestContext``, never on module or class attributes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union
from urllib.parse import quote

from fastapi import status

from locale_root.exceptions import SegmentParseError
from locale_root.i18n.catalog import LocaleCatalog
from locale_root.i18n.locale import negotiate_locale
from locale_root.i18n.segment import URLLanguageStyle, build_segment, parse_segment
from locale_root.services.content_service import ContentStore
from locale_root.services.preference_service import PreferenceStore

if TYPE_CHECKING:
    from locale_root.config import Settings

logger = logging.getLogger(__name__)


# ── Decisions ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ServeContent:
    locale: str
    canonical_path_prefix: str
    homepage_link: str = ""
    status_code: int = status.HTTP_200_OK


@dataclass(frozen=True)
class Redirect:
    target_path: str
    status_code: int = status.HTTP_301_MOVED_PERMANENTLY


@dataclass(frozen=True)
class NotFound:
    message: str = "The requested page could not be found."
    status_code: int = status.HTTP_404_NOT_FOUND


@dataclass(frozen=True)
class BootstrapRedirect:
    """The content store is not initialized yet; send the visitor to build it."""

    target_path: str
    status_code: int = status.HTTP_302_FOUND


RoutingDecision = Union[ServeContent, Redirect, NotFound, BootstrapRedirect]


@dataclass
class RequestContext:
    """Per-request routing state."""

    path_segment: Optional[str] = None
    accept_language: Optional[str] = None
    request_path: str = "/"
    locale: Optional[str] = None
    at_root: bool = False


# ── Router ────────────────────────────────────────────────────────────────────


class RootRouter:
    """Resolves the locale of root URL requests.

    Args:
        style:          URL language style in effect.
        catalog:        Allowed and default locales.
        content_store:  Readiness check and homepage lookup.
        base_path:      Prefix of every redirect target, ending with "/".
        bootstrap_path: Where to send visitors while the content store is not ready,
                        relative to base_path.
    """

    def __init__(
        self,
        style: URLLanguageStyle,
        catalog: LocaleCatalog,
        content_store: ContentStore,
        base_path: str = "/",
        bootstrap_path: str = "/dev/build",
    ):
        self.style = style
        self.catalog = catalog
        self.content_store = content_store
        self.base_path = base_path
        self.bootstrap_path = bootstrap_path

    @classmethod
    def from_settings(cls, settings: Settings, catalog: LocaleCatalog, content_store: ContentStore) -> RootRouter:
        return cls(
            style=settings.url_language_style,
            catalog=catalog,
            content_store=content_store,
            base_path=settings.base_path,
            bootstrap_path=settings.bootstrap_path,
        )

    def decide(self, context: RequestContext, preferences: PreferenceStore) -> RoutingDecision:
        context.at_root = True

        if context.path_segment:
            decision = self._decide_with_segment(context, preferences)
        else:
            decision = self._decide_without_segment(context, preferences)

        logger.debug(f"Root routing for '{context.request_path}' -> {decision}")
        return decision

    def detect_locale(self, context: RequestContext, preferences: PreferenceStore) -> str | None:
        """Return the visitor's locale from their stored preference or browser languages."""
        stored = preferences.get()
        if stored:
            locale = self._stored_locale(stored)
            if locale is not None:
                return locale
            logger.info(f"Discarding stored language preference '{stored}' for style '{self.style.value}'")
            preferences.clear()

        return negotiate_locale(context.accept_language, self.catalog.allowed_locales)

    def default_segment(self) -> str:
        return build_segment(self.catalog.default_locale, self.style)

    def _decide_with_segment(self, context: RequestContext, preferences: PreferenceStore) -> RoutingDecision:
        segment = context.path_segment
        try:
            locale = parse_segment(segment, self.style, self.catalog)
        except SegmentParseError as e:
            logger.info(f"Language segment rejected: {e.message}")
            return NotFound()

        if not self.catalog.is_allowed(locale):
            logger.info(f"Locale '{locale}' is not allowed, redirecting to the default")
            # The default is written in the active style (en-us under LOCALE_DASH)
            # since the raw locale form would itself be a malformed segment there.
            return Redirect(self._language_root(self.default_segment()))

        preferences.set(segment)
        context.locale = locale

        if not self.content_store.is_ready():
            logger.warning("Content store is not ready, redirecting to bootstrap")
            return_url = quote(context.request_path, safe="")
            return BootstrapRedirect(f"{self.base_path}{self.bootstrap_path.lstrip('/')}?returnURL={return_url}")

        homepage_link = self.content_store.homepage_link(locale)
        return ServeContent(
            locale=locale,
            canonical_path_prefix=f"{segment}/{homepage_link}/",
            homepage_link=homepage_link,
        )

    def _decide_without_segment(self, context: RequestContext, preferences: PreferenceStore) -> RoutingDecision:
        locale = self.detect_locale(context, preferences)
        if locale is None:
            return Redirect(self._language_root(self.default_segment()))

        segment = build_segment(locale, self.style)
        preferences.set(segment)
        return Redirect(self._language_root(segment))

    def _stored_locale(self, stored: str) -> str | None:
        # The URL style may have changed since the preference was written
        try:
            locale = parse_segment(stored, self.style, self.catalog)
        except SegmentParseError:
            return None
        return locale if self.catalog.is_allowed(locale) else None

    def _language_root(self, segment: str) -> str:
        return f"{self.base_path}{segment}/"


def should_be_on_root(relative_link: str, at_root: bool, homepage_link: str) -> bool:
    """Return True if a page should be reached through its language root instead.

    A page is served on the root when it is the homepage of the active locale,
    unless the request is already being handled at the root.
    """
    if at_root:
        return False
    return relative_link.strip("/") == homepage_link
