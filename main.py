import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI

from locale_root.config import Settings, settings as default_settings
from locale_root.database import create_content_engine
from locale_root.exception_handlers import register_exception_handlers
from locale_root.i18n.catalog import LocaleCatalog
from locale_root.middleware.logging import StructuredLoggingMiddleware, setup_structured_logging
from locale_root.routes import monitoring, root
from locale_root.routing.decision import RootRouter
from locale_root.services.content_service import ContentStore, SQLContentStore

setup_structured_logging(log_level=default_settings.log_level, json_format=default_settings.json_logs)
logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, content_store: Optional[ContentStore] = None) -> FastAPI:
    """Create the FastAPI application."""
    settings = settings or default_settings

    app = FastAPI(
        title=settings.app_name,
        description="Language routing for the root of a multilingual site",
        debug=settings.debug,
        version=settings.app_version,
    )

    if content_store is None:
        content_store = SQLContentStore(
            create_content_engine(settings),
            default_locale=settings.default_locale,
            default_homepage_link=settings.default_homepage_link,
        )

    catalog = LocaleCatalog.from_settings(settings)
    app.state.settings = settings
    app.state.catalog = catalog
    app.state.content_store = content_store
    app.state.root_router = RootRouter.from_settings(settings, catalog, content_store)

    app.add_middleware(StructuredLoggingMiddleware)
    register_exception_handlers(app)

    # Root routes last: /{language} matches any single segment
    app.include_router(monitoring.router)
    app.include_router(root.router)

    logger.info(
        f"Root routing configured: style={settings.url_language_style.value}, "
        f"default={settings.default_locale}, allowed={settings.allowed_locales}"
    )
    return app


def reload_locale_settings(app: FastAPI, settings: Settings) -> None:
    """Apply new locale settings to a running app.

    Must not run concurrently with request handling; the caller serializes it.
    """
    app.state.catalog.reload(settings)
    app.state.settings = settings
    app.state.root_router = RootRouter.from_settings(settings, app.state.catalog, app.state.content_store)


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=default_settings.debug)
