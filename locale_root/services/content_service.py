"""
Content store access for the root router.

The router only needs two things from the content tree: whether it exists
yet, and the URL segment of the homepage for a locale. ``ContentStore`` is
that contract; ``SQLContentStore`` implements it over the ``site_tree`` table.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from locale_root.database import Base, create_session_factory
from locale_root.exceptions import ContentStoreError
from locale_root.models.site_tree import SiteTree

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    def is_ready(self) -> bool:
        """True once the content tree exists and can be queried."""
        ...

    def homepage_link(self, locale: str) -> str:
        """URL segment of the homepage for ``locale``."""
        ...


class SQLContentStore:
    """ContentStore backed by the ``site_tree`` table."""

    def __init__(self, engine: Engine, default_locale: str, default_homepage_link: str = "home"):
        self.engine = engine
        self.default_locale = default_locale
        self.default_homepage_link = default_homepage_link
        self._session_factory: sessionmaker = create_session_factory(engine)

    def is_ready(self) -> bool:
        try:
            return inspect(self.engine).has_table(SiteTree.__tablename__)
        except SQLAlchemyError as e:
            logger.warning(f"Content store is not reachable: {e}")
            return False

    def homepage_link(self, locale: str) -> str:
        """Resolve the homepage URL segment for ``locale``.

        Lookup order:
        1. The page flagged as homepage in ``locale``.
        2. The translation, in ``locale``, of the default locale's homepage.
        3. The configured default homepage link.
        """
        try:
            with self._session_factory() as session:
                link = self._flagged_homepage(session, locale) or self._translated_homepage(session, locale)
        except SQLAlchemyError as e:
            logger.error(f"Homepage lookup failed for locale '{locale}': {e}")
            raise ContentStoreError(operation="homepage_link") from e

        if link is None:
            logger.debug(f"No homepage stored for '{locale}', using '{self.default_homepage_link}'")
            return self.default_homepage_link
        return link

    def create_schema(self) -> None:
        """Create the content tables that do not exist yet."""
        try:
            Base.metadata.create_all(bind=self.engine)
        except SQLAlchemyError as e:
            logger.error(f"Content schema creation failed: {e}")
            raise ContentStoreError("Could not create the content schema", operation="create_schema") from e
        logger.info("Content schema created (if not existing).")

    @staticmethod
    def _flagged_homepage(session: Session, locale: str) -> str | None:
        stmt = (
            select(SiteTree.url_segment)
            .where(SiteTree.locale == locale, SiteTree.is_homepage.is_(True))
            .order_by(SiteTree.id)
            .limit(1)
        )
        return session.execute(stmt).scalar_one_or_none()

    def _translated_homepage(self, session: Session, locale: str) -> str | None:
        default_home = session.execute(
            select(SiteTree)
            .where(SiteTree.locale == self.default_locale, SiteTree.is_homepage.is_(True))
            .order_by(SiteTree.id)
            .limit(1)
        ).scalar_one_or_none()
        if default_home is None or default_home.translation_group is None:
            return None

        stmt = (
            select(SiteTree.url_segment)
            .where(SiteTree.locale == locale, SiteTree.translation_group == default_home.translation_group)
            .order_by(SiteTree.id)
            .limit(1)
        )
        return session.execute(stmt).scalar_one_or_none()
