"""
Modele de donnees canonique.

Valeurs produites par tous les fournisseurs, quelle que soit la forme native
de la source. Toutes les valeurs sont immutables (@dataclass(frozen=True)),
construites a chaque appel et jamais persistees par le core : la persistance
est la responsabilite du catalogue.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Generic, Optional, TypeVar, Union


class MetadataLot(str, Enum):
    """Categorie de media."""

    BOOK = "Book"
    MOVIE = "Movie"
    SHOW = "Show"
    VIDEO_GAME = "VideoGame"
    AUDIO_BOOK = "AudioBook"
    PODCAST = "Podcast"
    ANIME = "Anime"
    MANGA = "Manga"


class MetadataSource(str, Enum):
    """Source externe dont provient un enregistrement."""

    OPENLIBRARY = "Openlibrary"
    TMDB = "Tmdb"
    IGDB = "Igdb"
    AUDIBLE = "Audible"
    ITUNES = "Itunes"
    LISTENNOTES = "Listennotes"
    GOOGLE_BOOKS = "GoogleBooks"
    ANILIST = "Anilist"
    CUSTOM = "Custom"


class MetadataImageLot(str, Enum):
    """Usage d'une image."""

    POSTER = "Poster"
    BACKDROP = "Backdrop"


class StoredUrlKind(str, Enum):
    URL = "Url"
    S3 = "S3"


@dataclass(frozen=True)
class StoredUrl:
    """
    Reference vers une image.

    Soit une URL absolue deja resolue (kind=URL), soit une cle dans le
    stockage propre du catalogue (kind=S3), resolue plus tard par celui-ci.

    Attributs :
        value : URL absolue ou cle de stockage
        kind : Nature de la reference
    """

    value: str
    kind: StoredUrlKind = StoredUrlKind.URL

    @classmethod
    def from_url(cls, url: str) -> "StoredUrl":
        return cls(value=url, kind=StoredUrlKind.URL)

    @classmethod
    def from_storage_key(cls, key: str) -> "StoredUrl":
        return cls(value=key, kind=StoredUrlKind.S3)


@dataclass(frozen=True)
class MetadataImage:
    """Image rattachee a une oeuvre, avec son usage (poster, backdrop)."""

    url: StoredUrl
    lot: MetadataImageLot = MetadataImageLot.POSTER


@dataclass(frozen=True)
class MetadataCreator:
    """
    Createur d'une oeuvre (auteur, illustrateur, realisateur...).

    Attributs :
        name : Nom affiche
        role : Libelle libre du role ("Author" si la source ne le precise pas)
        image : URL optionnelle de la photo
    """

    name: str
    role: str = "Author"
    image: Optional[str] = None


@dataclass(frozen=True)
class BookSpecifics:
    """Donnees propres aux livres."""

    pages: Optional[int] = None

    @property
    def lot(self) -> MetadataLot:
        return MetadataLot.BOOK


@dataclass(frozen=True)
class MovieSpecifics:
    """Donnees propres aux films (duree en minutes)."""

    runtime: Optional[int] = None

    @property
    def lot(self) -> MetadataLot:
        return MetadataLot.MOVIE


# Union etiquetee : la variante se reconnait a son type (et a sa propriete lot)
MediaSpecifics = Union[BookSpecifics, MovieSpecifics]


@dataclass(frozen=True)
class PartialMetadata:
    """
    Reference vers une autre oeuvre (suggestions, oeuvres liees).

    Ne porte pas les details complets : il faut un appel details()
    sur le fournisseur correspondant pour les obtenir.
    """

    identifier: str
    title: str
    lot: MetadataLot
    source: MetadataSource
    image: Optional[str] = None


@dataclass(frozen=True)
class MetadataVideo:
    """Video associee (bande-annonce...) hebergee sur une plateforme tierce."""

    identifier: str
    source: str


@dataclass(frozen=True)
class MetadataGroupReference:
    """Appartenance a un groupe d'oeuvres (saga, collection)."""

    identifier: str
    title: str
    part: Optional[int] = None


@dataclass(frozen=True)
class MediaDetails:
    """
    Enregistrement canonique complet d'une oeuvre.

    Attributs :
        identifier : Identifiant local a la source, stable (dernier segment
                     de la cle opaque de la source, jamais la cle complete)
        title : Titre
        lot : Categorie de media
        source : Source d'origine
        description : Resume texte
        production_status : Statut de production ("Released" par defaut)
        creators : Createurs dans l'ordre de la source
        genres : Genres en casse titre, sans doublon
        images : Images sans doublon d'URL, ordre de premiere apparition
        publish_year : Annee de premiere publication
        publish_date : Date de premiere publication
        specifics : Donnees propres a la categorie (pages pour un livre...)
        suggestions : Oeuvres liees (references partielles)
        provider_rating : Note attribuee par la source
        videos : Videos associees
        groups : Groupes d'appartenance
        is_nsfw : Contenu adulte, None si la source ne le dit pas
    """

    identifier: str
    title: str
    lot: MetadataLot
    source: MetadataSource
    description: Optional[str] = None
    production_status: str = "Released"
    creators: tuple[MetadataCreator, ...] = ()
    genres: tuple[str, ...] = ()
    images: tuple[MetadataImage, ...] = ()
    publish_year: Optional[int] = None
    publish_date: Optional[date] = None
    specifics: Optional[MediaSpecifics] = None
    suggestions: tuple[PartialMetadata, ...] = ()
    provider_rating: Optional[float] = None
    videos: tuple[MetadataVideo, ...] = ()
    groups: tuple[MetadataGroupReference, ...] = ()
    is_nsfw: Optional[bool] = None


@dataclass(frozen=True)
class MediaSearchItem:
    """
    Projection legere pour les listes de resultats.

    Ne contient que des champs disponibles au moment de la recherche ;
    l'image est la premiere seulement.
    """

    identifier: str
    title: str
    image: Optional[str] = None
    publish_year: Optional[int] = None


@dataclass(frozen=True)
class SearchDetails:
    """Pagination : total rapporte par la source et page suivante (1-based)."""

    total: int
    next_page: Optional[int] = None


T = TypeVar("T")


@dataclass(frozen=True)
class SearchResults(Generic[T]):
    details: SearchDetails
    items: tuple[T, ...] = field(default_factory=tuple)
