"""
Locale catalog and settings tests
"""

import logging

import pytest
from utils.fixtures import make_settings

from locale_root.config import load_settings
from locale_root.exceptions import ConfigurationError
from locale_root.i18n.catalog import LocaleCatalog
from locale_root.i18n.segment import URLLanguageStyle


class TestLocaleCatalog:
    def test_defaults(self, catalog):
        assert catalog.default_locale == "en_US"
        assert catalog.default_lang == "en"
        assert catalog.allowed_locales == ("en_US", "fr_FR")

    def test_is_allowed_is_exact(self, catalog):
        assert catalog.is_allowed("fr_FR") is True
        assert catalog.is_allowed("fr_fr") is False
        assert catalog.is_allowed("de_DE") is False

    def test_lang_to_locale_prefers_allowed(self):
        catalog = LocaleCatalog(["en_GB", "fr_FR"], "en_GB")
        assert catalog.lang_to_locale("en") == "en_GB"

    def test_lang_to_locale_falls_back_to_likely_subtags(self, catalog):
        assert catalog.lang_to_locale("ja") == "ja_JP"

    def test_lang_to_locale_unknown(self, catalog):
        assert catalog.lang_to_locale("xx") is None

    def test_first_allowed_locale_owns_its_language(self, caplog):
        with caplog.at_level(logging.WARNING, logger="locale_root.i18n.catalog"):
            catalog = LocaleCatalog(["en_US", "en_GB"], "en_US")
        assert catalog.lang_to_locale("en") == "en_US"
        assert "already served by 'en_US'" in caplog.text

    def test_locale_to_lang(self, catalog):
        assert catalog.locale_to_lang("fr_FR") == "fr"

    def test_duplicates_collapsed(self):
        catalog = LocaleCatalog(["en_US", "en_US", "fr_FR"], "en_US")
        assert catalog.allowed_locales == ("en_US", "fr_FR")

    def test_default_must_be_allowed(self):
        with pytest.raises(ConfigurationError):
            LocaleCatalog(["fr_FR"], "en_US")

    def test_reload_replaces_contents(self, catalog):
        catalog.reload(make_settings(default_locale="de_DE", allowed_locales=["de_DE", "fr_FR"]))
        assert catalog.default_locale == "de_DE"
        assert catalog.is_allowed("en_US") is False
        assert catalog.lang_to_locale("de") == "de_DE"

    def test_from_settings(self):
        catalog = LocaleCatalog.from_settings(make_settings(allowed_locales=["en_US", "nl_NL"]))
        assert catalog.allowed_locales == ("en_US", "nl_NL")


class TestSettings:
    def test_url_style_defaults_to_lang(self):
        assert make_settings().url_language_style is URLLanguageStyle.LANG

    def test_locale_url(self):
        assert make_settings(use_locale_url=True).url_language_style is URLLanguageStyle.LOCALE

    def test_dash_locale(self):
        settings = make_settings(use_locale_url=True, use_dash_locale=True)
        assert settings.url_language_style is URLLanguageStyle.LOCALE_DASH

    def test_dash_locale_ignored_without_locale_url(self):
        assert make_settings(use_dash_locale=True).url_language_style is URLLanguageStyle.LANG

    def test_settings_are_frozen(self):
        settings = make_settings()
        with pytest.raises(Exception):
            settings.use_locale_url = True

    def test_base_path_normalized(self):
        assert make_settings(base_path="site").base_path == "/site/"
        assert make_settings(base_path="/").base_path == "/"

    def test_invalid_locale_rejected(self):
        with pytest.raises(ConfigurationError):
            load_settings(_env_file=None, allowed_locales=["en-us"], default_locale="en_US")

    def test_default_outside_allow_list_rejected(self):
        with pytest.raises(ConfigurationError):
            load_settings(_env_file=None, allowed_locales=["fr_FR"], default_locale="en_US")

    @pytest.mark.parametrize("dash", [False, True])
    def test_bare_language_rejected_for_locale_urls(self, dash):
        with pytest.raises(ConfigurationError):
            load_settings(
                _env_file=None,
                default_locale="en",
                allowed_locales=["en", "fr_FR"],
                use_locale_url=True,
                use_dash_locale=dash,
            )

    def test_bare_language_allowed_for_language_urls(self):
        settings = make_settings(default_locale="en", allowed_locales=["en", "fr_FR"])
        assert settings.allowed_locales == ["en", "fr_FR"]

    def test_env_configuration(self, monkeypatch):
        monkeypatch.setenv("USE_LOCALE_URL", "true")
        monkeypatch.setenv("ALLOWED_LOCALES", '["en_US", "fr_FR"]')
        settings = load_settings(_env_file=None)
        assert settings.use_locale_url is True
        assert settings.allowed_locales == ["en_US", "fr_FR"]
