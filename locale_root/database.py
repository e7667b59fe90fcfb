import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from locale_root.config import Settings

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_content_engine(settings: Settings) -> Engine:
    """Create the synchronous engine backing the content store."""
    if settings.database_url.startswith("sqlite"):
        # In-memory databases must share one connection across threads
        options = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in settings.database_url or settings.database_url == "sqlite://":
            options["poolclass"] = StaticPool
        engine = create_engine(settings.database_url, echo=settings.debug, **options)
    elif settings.environment == "production":
        engine = create_engine(
            settings.database_url,
            pool_size=20,
            max_overflow=50,
            pool_timeout=60,
            pool_recycle=1800,
            pool_pre_ping=True,
        )
    else:
        engine = create_engine(
            settings.database_url,
            echo=settings.debug,
            pool_size=10,
            max_overflow=20,
            pool_timeout=30,
            pool_pre_ping=True,
        )

    logger.info(f"Content store engine created for {engine.url.render_as_string(hide_password=True)}")
    return engine


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)
