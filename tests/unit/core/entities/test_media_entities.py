"""
Tests pour le modele de donnees canonique.

Verifie les valeurs par defaut, l'immutabilite et les variantes
de StoredUrl / MediaSpecifics.
"""

from dataclasses import FrozenInstanceError

import pytest

from mediameta.core.entities import (
    BookSpecifics,
    MediaDetails,
    MetadataCreator,
    MetadataImage,
    MetadataImageLot,
    MetadataLot,
    MetadataSource,
    MovieSpecifics,
    SearchDetails,
    SearchResults,
    StoredUrl,
    StoredUrlKind,
)


class TestEnums:
    def test_wire_values(self):
        """Les valeurs exposees sont les noms attendus par le catalogue."""
        assert MetadataLot.BOOK.value == "Book"
        assert MetadataSource.OPENLIBRARY.value == "Openlibrary"
        assert MetadataImageLot.POSTER.value == "Poster"

    def test_str_enum_compares_with_string(self):
        assert MetadataSource.OPENLIBRARY == "Openlibrary"


class TestStoredUrl:
    def test_from_url(self):
        url = StoredUrl.from_url("https://covers.openlibrary.org/b/id/1-M.jpg")
        assert url.kind == StoredUrlKind.URL

    def test_from_storage_key(self):
        url = StoredUrl.from_storage_key("images/abc.jpg")
        assert url == StoredUrl(value="images/abc.jpg", kind=StoredUrlKind.S3)

    def test_image_defaults_to_poster(self):
        image = MetadataImage(url=StoredUrl.from_url("https://x/1.jpg"))
        assert image.lot == MetadataImageLot.POSTER


class TestSpecifics:
    def test_variant_lot(self):
        assert BookSpecifics(pages=100).lot == MetadataLot.BOOK
        assert MovieSpecifics(runtime=120).lot == MetadataLot.MOVIE


class TestMediaDetails:
    def test_defaults(self):
        details = MediaDetails(
            identifier="OL1W",
            title="T",
            lot=MetadataLot.BOOK,
            source=MetadataSource.OPENLIBRARY,
        )

        assert details.production_status == "Released"
        assert details.creators == ()
        assert details.suggestions == ()
        assert details.specifics is None
        assert details.is_nsfw is None

    def test_frozen(self):
        details = MediaDetails(
            identifier="OL1W",
            title="T",
            lot=MetadataLot.BOOK,
            source=MetadataSource.OPENLIBRARY,
        )

        with pytest.raises(FrozenInstanceError):
            details.title = "Autre"

    def test_creator_default_role(self):
        assert MetadataCreator(name="A").role == "Author"


class TestSearchResults:
    def test_empty_results(self):
        results = SearchResults(details=SearchDetails(total=0))

        assert results.items == ()
        assert results.details.next_page is None
