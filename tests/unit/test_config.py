"""
Tests pour Settings (pydantic-settings).

Verifie les valeurs par defaut, la surcharge par variables d'environnement
(prefixe MEDIAMETA_) et la validation des bornes.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mediameta.config import Settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Isole les tests des variables MEDIAMETA_ de l'environnement reel."""
    for name in (
        "MEDIAMETA_PAGE_LIMIT",
        "MEDIAMETA_OPENLIBRARY_COVER_IMAGE_SIZE",
        "MEDIAMETA_OPENLIBRARY_ISBN_RATE_PER_SECOND",
        "MEDIAMETA_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.page_limit == 20
        assert settings.http_timeout == 30.0
        assert settings.openlibrary_base_url == "https://openlibrary.org/"
        assert settings.openlibrary_image_base_url == "https://covers.openlibrary.org"
        assert settings.openlibrary_cover_image_size == "M"
        assert settings.openlibrary_isbn_rate_per_second == 1.0
        assert settings.openlibrary_isbn_max_attempts == 3


class TestEnvironment:
    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("MEDIAMETA_PAGE_LIMIT", "50")
        monkeypatch.setenv("MEDIAMETA_OPENLIBRARY_COVER_IMAGE_SIZE", "l")

        settings = Settings(_env_file=None)

        assert settings.page_limit == 50
        assert settings.openlibrary_cover_image_size == "L"

    def test_log_file_expands_home(self, monkeypatch):
        monkeypatch.setenv("MEDIAMETA_LOG_FILE", "~/logs/app.log")

        settings = Settings(_env_file=None)

        assert settings.log_file == Path("~/logs/app.log").expanduser()


class TestValidation:
    def test_page_limit_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, page_limit=0)

    def test_unknown_image_size_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, openlibrary_cover_image_size="XL")

    def test_rate_must_be_positive(self, monkeypatch):
        monkeypatch.setenv("MEDIAMETA_OPENLIBRARY_ISBN_RATE_PER_SECOND", "0")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)
