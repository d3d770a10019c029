"""
Extraction des oeuvres liees depuis le carrousel HTML d'Open Library.

L'API JSON n'expose pas les "related works" : on parse le fragment HTML
du composant RelatedWorkCarousel (endpoint partials.json, non documente).
Ce fragment est fragile par nature : un element qui ne correspond pas aux
selecteurs est ignore silencieusement, et un fragment sans element donne
une liste vide.
"""

from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from mediameta.adapters.openlibrary.normalizer import get_key
from mediameta.core.entities.media import MetadataLot, MetadataSource, PartialMetadata

CAROUSEL_ITEM_SELECTOR = ".book.carousel__item"
IMAGE_SELECTOR = "img.bookcover"
IDENTIFIER_SELECTOR = "a[href]"
TITLE_SEPARATOR = " by "


def _identifier_from_href(href: str) -> str:
    # "/works/OL123W/Some_Title?edition=key" -> "OL123W" (slug ignore si present)
    path = urlsplit(href).path.rstrip("/")
    segments = [s for s in path.split("/") if s]
    if len(segments) >= 2 and segments[0] in ("works", "books", "authors"):
        return segments[1]
    return get_key(path)


def _absolute_image(src: str) -> str:
    if src.startswith("//"):
        return f"https:{src}"
    return src


def extract_related_works(
    html: str,
    lot: MetadataLot = MetadataLot.BOOK,
    source: MetadataSource = MetadataSource.OPENLIBRARY,
) -> list[PartialMetadata]:
    """
    Extrait les suggestions d'un fragment HTML de carrousel.

    Pour chaque element du carrousel :
    - identifiant : cible du premier lien, reduite a sa forme canonique
    - titre : texte alternatif de la couverture, avant " by "
    - image : attribut src de la couverture (optionnel)

    Args:
        html: Fragment HTML du composant RelatedWorkCarousel
        lot: Categorie des oeuvres suggerees
        source: Source des oeuvres suggerees

    Returns:
        Liste (eventuellement vide) de PartialMetadata
    """
    soup = BeautifulSoup(html, "html.parser")
    suggestions = []
    for item in soup.select(CAROUSEL_ITEM_SELECTOR):
        anchor = item.select_one(IDENTIFIER_SELECTOR)
        image = item.select_one(IMAGE_SELECTOR)
        if anchor is None or image is None:
            continue
        alt = image.get("alt")
        if not alt:
            continue

        identifier = _identifier_from_href(anchor["href"])
        title = alt.split(TITLE_SEPARATOR)[0].strip()
        if not identifier or not title:
            continue

        src = image.get("src")
        suggestions.append(
            PartialMetadata(
                identifier=identifier,
                title=title,
                lot=lot,
                source=source,
                image=_absolute_image(src) if src else None,
            )
        )
    return suggestions
