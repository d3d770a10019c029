"""
Fournisseur Open Library pour les metadonnees de livres.

Implemente IMediaProvider pour Open Library (openlibrary.org) :
- details : oeuvre + editions + auteurs + oeuvres liees (HTML)
- search : recherche paginee d'oeuvres
- id_from_isbn : recherche inverse par ISBN (endpoint limite en debit)

Usage:
    provider = OpenLibraryProvider(cover_image_size="M", page_limit=20)
    results = await provider.search("dune", page=1)
    details = await provider.details(results.items[0].identifier)
    work_id = await provider.id_from_isbn("9780441013593")
    await provider.close()
"""

from typing import Optional

from loguru import logger

from mediameta.adapters.api.rate_limiter import TokenBucket
from mediameta.adapters.api.transport import HttpTransport
from mediameta.adapters.openlibrary import decoders, normalizer
from mediameta.adapters.openlibrary.related_works import extract_related_works
from mediameta.core.entities.media import (
    MediaDetails,
    MediaSearchItem,
    MetadataCreator,
    MetadataLot,
    MetadataSource,
    PartialMetadata,
    SearchResults,
)
from mediameta.core.exceptions import TransportError
from mediameta.core.ports.providers import IMediaProvider


class OpenLibraryProvider(IMediaProvider):
    """
    Fournisseur de metadonnees de livres Open Library.

    Politiques de transport :
    - simple (sans retry) pour l'oeuvre, les editions, les auteurs,
      la recherche et le fragment des oeuvres liees ;
    - protegee (token bucket + retry) pour la recherche par ISBN.

    Open Library ne sait pas filtrer le contenu adulte : le parametre
    include_adult de search() est ignore.

    Attributes:
        BASE_URL: Origine publique d'Open Library
        IMAGE_BASE_URL: Origine des couvertures et photos d'auteurs
        SEARCH_FIELDS: Champs demandes a search.json
    """

    BASE_URL = "https://openlibrary.org/"
    IMAGE_BASE_URL = "https://covers.openlibrary.org"
    SEARCH_FIELDS = ("key", "title", "author_name", "cover_i", "first_publish_year")
    RELATED_WORKS_COMPONENT = "RelatedWorkCarousel"

    def __init__(
        self,
        cover_image_size: str = "M",
        page_limit: int = 20,
        base_url: str = BASE_URL,
        image_base_url: str = IMAGE_BASE_URL,
        isbn_rate_per_second: float = 1.0,
        isbn_max_attempts: int = 3,
        timeout: float = 30.0,
        transport: Optional[HttpTransport] = None,
    ) -> None:
        """
        Initialise le fournisseur.

        Args:
            cover_image_size: Taille des images (S, M ou L)
            page_limit: Nombre d'elements par page de recherche
            base_url: Origine de l'API (surcharge possible)
            image_base_url: Origine des images
            isbn_rate_per_second: Debit maximum des appels ISBN
            isbn_max_attempts: Tentatives maximum d'un appel ISBN
            timeout: Timeout HTTP en secondes
            transport: Transport deja construit (remplace les parametres reseau)
        """
        if page_limit < 1:
            raise ValueError(f"page_limit doit etre >= 1, recu {page_limit}")
        self._image_base_url = image_base_url
        self._image_size = cover_image_size
        self._page_limit = page_limit
        self._transport = transport or HttpTransport(
            base_url=base_url,
            source=MetadataSource.OPENLIBRARY.value,
            timeout=timeout,
            rate_limiter=TokenBucket(rate=isbn_rate_per_second),
            max_attempts=isbn_max_attempts,
        )

    @property
    def source(self) -> MetadataSource:
        """Retourne l'identifiant de la source."""
        return MetadataSource.OPENLIBRARY

    @property
    def lot(self) -> MetadataLot:
        return MetadataLot.BOOK

    @property
    def page_limit(self) -> int:
        return self._page_limit

    def supported_languages(self) -> frozenset[str]:
        return frozenset({"us"})

    def default_language(self) -> str:
        return "us"

    async def details(self, identifier: str) -> MediaDetails:
        """
        Recupere les details complets d'une oeuvre.

        Enchaine les appels (sequentiels) : oeuvre, editions, chaque auteur
        dans l'ordre de l'oeuvre, puis le fragment des oeuvres liees.

        Args:
            identifier: Identifiant de l'oeuvre (ex: "OL45804W")

        Returns:
            MediaDetails canonique

        Raises:
            TransportError: Si l'oeuvre, les editions ou un auteur sont inaccessibles
            DecodeError: Si un champ obligatoire manque
        """
        logger.debug(f"Open Library details: {identifier}")
        work_ref = f"works/{identifier}.json"
        work = decoders.decode_work(
            await self._transport.get_json(work_ref), reference=work_ref
        )
        work_id = normalizer.get_key(work.key)

        editions_ref = f"works/{work_id}/editions.json"
        editions = decoders.decode_editions(
            await self._transport.get_json(editions_ref), reference=editions_ref
        )

        creators = await self._fetch_creators(work.authors)
        suggestions = await self._fetch_related_works(work_id)

        return normalizer.build_details(
            work,
            editions,
            creators,
            suggestions,
            image_base_url=self._image_base_url,
            size=self._image_size,
        )

    async def _fetch_creators(
        self, authors: tuple[decoders.AuthorRef, ...]
    ) -> list[MetadataCreator]:
        """
        Resout chaque auteur par un appel dedie, dans l'ordre de la source.

        Open Library n'a pas d'endpoint groupe pour les auteurs. Un echec
        remonte tel quel : ignorer un auteur fausserait l'attribution.
        """
        creators = []
        for author in authors:
            author_ref = f"{author.key.lstrip('/')}.json"
            record = decoders.decode_author(
                await self._transport.get_json(author_ref), reference=author_ref
            )
            creators.append(
                normalizer.to_creator(
                    record, author.role, self._image_base_url, self._image_size
                )
            )
        return creators

    async def _fetch_related_works(self, work_id: str) -> list[PartialMetadata]:
        """
        Recupere les oeuvres liees via le fragment HTML non documente.

        Donnee d'appoint : tout echec (transport, enveloppe inattendue,
        HTML illisible) donne une liste vide, jamais une erreur.
        """
        try:
            payload = await self._transport.get_json(
                "partials.json",
                params={"workid": work_id, "_component": self.RELATED_WORKS_COMPONENT},
            )
            html = decoders.decode_partial_html(payload)
            if html is None:
                logger.warning(f"Fragment des oeuvres liees inattendu pour {work_id}")
                return []
            return extract_related_works(html, lot=self.lot, source=self.source)
        except Exception as e:
            logger.warning(f"Oeuvres liees indisponibles pour {work_id}: {e}")
            return []

    async def search(
        self,
        query: str,
        page: Optional[int] = None,
        include_adult: bool = False,
    ) -> SearchResults[MediaSearchItem]:
        """
        Recherche des oeuvres par texte libre.

        Args:
            query: Texte recherche
            page: Page demandee (1-based, 1 par defaut)
            include_adult: Ignore (Open Library ne filtre pas)

        Returns:
            Resultats pagines ; next_page vaut None sur la derniere page

        Raises:
            ValueError: Si page < 1
            TransportError: Si la recherche echoue
            DecodeError: Si la reponse n'a pas la forme attendue
        """
        page = 1 if page is None else page
        if page < 1:
            raise ValueError(f"page doit etre >= 1, recu {page}")

        params = {
            "q": query,
            "fields": ",".join(self.SEARCH_FIELDS),
            "offset": (page - 1) * self._page_limit,
            "limit": self._page_limit,
            "type": "work",
        }
        logger.debug(f"Open Library search: {query!r} page {page}")
        payload = await self._transport.get_json("search.json", params=params)
        search = decoders.decode_search(payload, reference=f"search:{query}")
        return normalizer.to_search_results(
            search,
            page=page,
            page_limit=self._page_limit,
            image_base_url=self._image_base_url,
            size=self._image_size,
        )

    async def id_from_isbn(self, isbn: str) -> Optional[str]:
        """
        Retrouve l'identifiant d'oeuvre associe a un ISBN.

        Endpoint limite en debit cote Open Library : appel protege
        (token bucket + retry exponentiel).

        Args:
            isbn: ISBN-10 ou ISBN-13

        Returns:
            Identifiant de la premiere oeuvre associee, None si aucune

        Raises:
            RetryExhaustedError: Si toutes les tentatives ont echoue
            TransportError: Pour les autres erreurs que 404
        """
        try:
            payload = await self._transport.get_json(f"isbn/{isbn}.json", guarded=True)
        except TransportError as e:
            if e.status_code == 404:
                logger.info(f"Aucune edition pour l'ISBN {isbn}")
                return None
            raise

        works = decoders.decode_isbn_works(payload)
        if not works:
            logger.info(f"Aucune oeuvre associee a l'ISBN {isbn}")
            return None
        return normalizer.get_key(works[0])

    async def close(self) -> None:
        """Ferme le transport HTTP."""
        await self._transport.close()
