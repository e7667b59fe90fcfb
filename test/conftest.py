"""
Pytest configuration and fixtures for locale routing tests
"""

import os
import sys

import pytest
from fastapi.testclient import TestClient

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))  # noqa: PTH100, PTH118, PTH119, PTH120

from locale_root.config import Settings  # noqa: E402
from locale_root.database import create_content_engine  # noqa: E402
from locale_root.i18n.catalog import LocaleCatalog  # noqa: E402
from locale_root.models.site_tree import SiteTree  # noqa: E402
from locale_root.services.content_service import SQLContentStore  # noqa: E402
from utils.fixtures import make_settings  # noqa: E402
from utils.mocks import MockContentStore  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def catalog(settings: Settings) -> LocaleCatalog:
    return LocaleCatalog.from_settings(settings)


@pytest.fixture
def content_store() -> MockContentStore:
    return MockContentStore(homepages={"en_US": "home", "fr_FR": "maison"})


@pytest.fixture
def sql_content_store():
    """SQLContentStore over in-memory SQLite with an English and a French homepage"""
    settings = make_settings()
    engine = create_content_engine(settings)
    store = SQLContentStore(engine, default_locale="en_US", default_homepage_link="home")
    store.create_schema()

    with store._session_factory() as session:
        session.add_all(
            [
                SiteTree(url_segment="home", locale="en_US", is_homepage=True, translation_group=1),
                SiteTree(url_segment="maison", locale="fr_FR", is_homepage=False, translation_group=1),
                SiteTree(url_segment="about-us", locale="en_US", is_homepage=False, translation_group=2),
            ]
        )
        session.commit()

    yield store
    engine.dispose()


@pytest.fixture
def make_client(content_store: MockContentStore):
    """Factory for a TestClient over an app built with the given setting overrides"""
    from main import create_app

    def _make(store=None, **overrides) -> TestClient:
        app = create_app(make_settings(**overrides), content_store=store or content_store)
        return TestClient(app, follow_redirects=False)

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
