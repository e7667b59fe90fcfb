import re
from typing import Optional

from dotenv import load_dotenv
from pydantic import ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from locale_root.exceptions import ConfigurationError
from locale_root.i18n.segment import URLLanguageStyle

load_dotenv()

# xx, xxx, xx_YY or xx_419 style identifiers
LOCALE_PATTERN = re.compile(r"^[a-z]{2,3}(_([A-Z]{2}|[0-9]{3}))?$")


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Multilingual Root URL"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # URL style
    use_locale_url: bool = False
    use_dash_locale: bool = False

    # Locales
    default_locale: str = "en_US"
    allowed_locales: list[str] = ["en_US"]

    # Stored language preference
    language_cookie_name: str = "language"
    language_cookie_max_age: int = 60 * 60 * 24 * 90

    # Routing
    base_path: str = "/"
    default_homepage_link: str = "home"
    bootstrap_path: str = "/dev/build"
    error_page_path: Optional[str] = None

    # Content store
    database_url: str = "sqlite:///./content.db"

    # Logging
    log_level: str = "INFO"
    json_logs: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("default_locale")
    @classmethod
    def validate_default_locale(cls, value: str) -> str:
        value = value.strip()
        if not LOCALE_PATTERN.match(value):
            raise ValueError(f"'{value}' is not a valid locale (expected e.g. 'en_US')")
        return value

    @field_validator("allowed_locales")
    @classmethod
    def validate_allowed_locales(cls, value: list[str]) -> list[str]:
        locales: list[str] = []
        for locale in value:
            locale = locale.strip()
            if not LOCALE_PATTERN.match(locale):
                raise ValueError(f"'{locale}' is not a valid locale (expected e.g. 'en_US')")
            if locale not in locales:
                locales.append(locale)
        return locales

    @field_validator("base_path")
    @classmethod
    def validate_base_path(cls, value: str) -> str:
        return "/" + value.strip("/") + "/" if value.strip("/") else "/"

    @model_validator(mode="after")
    def locales_must_be_routable(self) -> "Settings":
        if self.default_locale not in self.allowed_locales:
            raise ValueError(
                f"default_locale '{self.default_locale}' must be one of allowed_locales {self.allowed_locales}"
            )
        if self.use_locale_url:
            # Locale URLs need a country part to round-trip through the segment
            bare = [locale for locale in self.allowed_locales if "_" not in locale]
            if bare:
                raise ValueError(f"use_locale_url requires full locales, got bare language codes {bare}")
        return self

    @property
    def url_language_style(self) -> URLLanguageStyle:
        """The URL style implied by the two URL flags."""
        if not self.use_locale_url:
            return URLLanguageStyle.LANG
        if self.use_dash_locale:
            return URLLanguageStyle.LOCALE_DASH
        return URLLanguageStyle.LOCALE


def load_settings(**overrides) -> Settings:
    """Build the immutable settings snapshot, failing fast on invalid locale configuration."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        raise ConfigurationError(str(e)) from e


settings = load_settings()
