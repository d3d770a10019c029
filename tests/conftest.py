"""
Fixtures pytest partagees pour les tests mediameta.

Ce module contient les fixtures communes utilisees dans les tests:
- Mocks de l'interface IMediaProvider
- Settings de test avec chemins temporaires
"""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from mediameta.config import Settings
from mediameta.core.entities.media import MetadataLot, MetadataSource
from tests.fixtures.providers import make_mock_provider


@pytest.fixture
def mock_book_provider() -> MagicMock:
    """Mock d'un fournisseur de livres (source Open Library)."""
    return make_mock_provider(MetadataSource.OPENLIBRARY)


@pytest.fixture
def mock_movie_provider() -> MagicMock:
    """Mock d'un fournisseur de films multilingue (source TMDB)."""
    return make_mock_provider(
        MetadataSource.TMDB, lot=MetadataLot.MOVIE, languages=frozenset({"en", "fr"})
    )


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """
    Settings de test avec chemins temporaires.

    Utilise tmp_path de pytest pour isoler le fichier de log.
    """
    return Settings(
        page_limit=10,
        openlibrary_cover_image_size="L",
        log_file=tmp_path / "test.log",
    )
