"""
Normalisation des donnees Open Library decodees vers le modele canonique.

Fonctions pures, sans effet de bord ni acces reseau : synthese des URLs
d'images, deduplication, calculs de pagination et agregation des editions
(pages moyennes, premiere date de publication).
"""

import re
from datetime import date
from typing import Iterable, Optional

from mediameta.adapters.openlibrary.decoders import (
    AuthorRecord,
    EditionRecord,
    SearchDoc,
    SearchPage,
    WorkRecord,
    parse_date,
)
from mediameta.core.entities.media import (
    BookSpecifics,
    MediaDetails,
    MediaSearchItem,
    MetadataCreator,
    MetadataImage,
    MetadataImageLot,
    MetadataLot,
    MetadataSource,
    PartialMetadata,
    SearchDetails,
    SearchResults,
    StoredUrl,
)

BOOK_COVER_KIND = "b"
AUTHOR_PHOTO_KIND = "a"
SUBJECT_SEPARATOR = ", "
WORD_BOUNDARY = re.compile(r"[\s_-]+")


def get_key(key: str) -> str:
    """
    Reduit une cle Open Library a son dernier segment.

    "/works/OL45804W" -> "OL45804W", quelle que soit la profondeur du prefixe.
    """
    return key.rsplit("/", 1)[-1]


def cover_image_url(image_base_url: str, kind: str, cover_id: int, size: str) -> str:
    """Construit l'URL covers.openlibrary.org d'une image (kind "b" ou "a")."""
    return f"{image_base_url.rstrip('/')}/{kind}/id/{cover_id}-{size}.jpg?default=false"


def book_cover_url(image_base_url: str, cover_id: int, size: str) -> str:
    return cover_image_url(image_base_url, BOOK_COVER_KIND, cover_id, size)


def author_photo_url(image_base_url: str, photo_id: int, size: str) -> str:
    return cover_image_url(image_base_url, AUTHOR_PHOTO_KIND, photo_id, size)


def average_pages(editions: Iterable[EditionRecord]) -> int:
    """
    Moyenne entiere (tronquee) des pages des editions qui en declarent.

    Retourne 0 si aucune edition ne declare de nombre de pages.
    """
    pages = [e.number_of_pages for e in editions if e.number_of_pages is not None]
    if not pages:
        return 0
    return sum(pages) // len(pages)


def earliest_publish_date(editions: Iterable[EditionRecord]) -> Optional[date]:
    """Plus ancienne date parsable parmi les editions (les autres sont ignorees)."""
    dates = [d for d in (parse_date(e.publish_date) for e in editions if e.publish_date) if d]
    return min(dates) if dates else None


def collect_images(
    work: WorkRecord,
    editions: Iterable[EditionRecord],
    image_base_url: str,
    size: str,
) -> tuple[MetadataImage, ...]:
    """
    Rassemble les couvertures de l'oeuvre puis de ses editions.

    Les identifiants non positifs (-1 = pas de couverture) sont ignores ;
    les doublons d'URL sont supprimes en gardant l'ordre de premiere apparition.
    """
    cover_ids = list(work.covers)
    for edition in editions:
        cover_ids.extend(edition.covers)

    seen: set[str] = set()
    images = []
    for cover_id in cover_ids:
        if cover_id <= 0:
            continue
        url = book_cover_url(image_base_url, cover_id, size)
        if url in seen:
            continue
        seen.add(url)
        images.append(MetadataImage(url=StoredUrl.from_url(url), lot=MetadataImageLot.POSTER))
    return tuple(images)


def title_case(text: str) -> str:
    """
    Met chaque mot en casse titre, separe par des espaces.

    Les tirets et soulignes separent aussi les mots :
    "science-fiction" -> "Science Fiction", "young_adult" -> "Young Adult".
    """
    return " ".join(word.capitalize() for word in WORD_BOUNDARY.split(text) if word)


def genres_from_subjects(subjects: Iterable[str]) -> tuple[str, ...]:
    """
    Decoupe les sujets multi-valeurs (separes par ", ") en genres.

    Chaque genre est mis en casse titre ; les doublons sont supprimes en
    conservant l'ordre de premiere apparition.
    """
    genres: list[str] = []
    for subject in subjects:
        for token in subject.split(SUBJECT_SEPARATOR):
            genre = title_case(token)
            if genre and genre not in genres:
                genres.append(genre)
    return tuple(genres)


def next_page(total: int, page: int, page_limit: int) -> Optional[int]:
    """Page suivante si des elements restent apres la page courante, sinon None."""
    if total - page * page_limit > 0:
        return page + 1
    return None


def to_creator(
    author: AuthorRecord, role: str, image_base_url: str, size: str
) -> MetadataCreator:
    """Createur canonique ; la photo est la premiere d'identifiant positif."""
    photo = next((p for p in author.photos if p > 0), None)
    image = author_photo_url(image_base_url, photo, size) if photo is not None else None
    return MetadataCreator(name=author.name, role=role, image=image)


def to_search_item(doc: SearchDoc, image_base_url: str, size: str) -> MediaSearchItem:
    image = (
        book_cover_url(image_base_url, doc.cover_id, size)
        if doc.cover_id is not None and doc.cover_id > 0
        else None
    )
    return MediaSearchItem(
        identifier=get_key(doc.key),
        title=doc.title,
        image=image,
        publish_year=doc.first_publish_year,
    )


def to_search_results(
    search: SearchPage,
    page: int,
    page_limit: int,
    image_base_url: str,
    size: str,
) -> SearchResults[MediaSearchItem]:
    return SearchResults(
        details=SearchDetails(
            total=search.total,
            next_page=next_page(search.total, page, page_limit),
        ),
        items=tuple(to_search_item(doc, image_base_url, size) for doc in search.docs),
    )


def build_details(
    work: WorkRecord,
    editions: Iterable[EditionRecord],
    creators: Iterable[MetadataCreator],
    suggestions: Iterable[PartialMetadata],
    image_base_url: str,
    size: str,
) -> MediaDetails:
    """
    Assemble le MediaDetails canonique d'une oeuvre Open Library.

    Args:
        work: Oeuvre decodee
        editions: Editions decodees de l'oeuvre
        creators: Createurs resolus, dans l'ordre de la source
        suggestions: Oeuvres liees extraites du fragment HTML
        image_base_url: Origine des images
        size: Taille d'image (S, M, L)
    """
    editions = tuple(editions)
    first_release = earliest_publish_date(editions)
    return MediaDetails(
        identifier=get_key(work.key),
        title=work.title,
        lot=MetadataLot.BOOK,
        source=MetadataSource.OPENLIBRARY,
        description=work.description,
        creators=tuple(creators),
        genres=genres_from_subjects(work.subjects),
        images=collect_images(work, editions, image_base_url, size),
        publish_year=first_release.year if first_release else None,
        specifics=BookSpecifics(pages=average_pages(editions)),
        suggestions=tuple(suggestions),
    )

