"""
SiteTree model

The minimal slice of the page tree the root router needs: each row is a
page in one locale, pages that are translations of each other share a
``translation_group``, and the homepage of a locale is flagged with
``is_homepage``.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Column, Index, Integer, String

from locale_root.database import Base


class SiteTree(Base):
    """A page of the content tree in a single locale."""

    __tablename__ = "site_tree"

    id = Column(Integer, primary_key=True, index=True)
    url_segment = Column(String(255), nullable=False)
    locale = Column(String(10), nullable=False, index=True)  # e.g. "en_US"
    is_homepage = Column(Boolean, nullable=False, default=False)
    translation_group = Column(Integer, nullable=True, index=True)

    __table_args__ = (Index("ix_site_tree_locale_homepage", "locale", "is_homepage"),)

    def relative_link(self) -> str:
        return f"{self.url_segment}/"

    def __repr__(self) -> str:
        return f"<SiteTree(id={self.id}, url_segment='{self.url_segment}', locale='{self.locale}')>"
