"""
Interface port pour les fournisseurs de metadonnees.

Interface abstraite definissant le contrat que chaque source externe
(catalogue de livres, base de films...) doit satisfaire. Le catalogue ne
depend que de ce contrat, jamais d'un type de source concret.
"""

from abc import ABC, abstractmethod
from typing import Optional

from mediameta.core.entities.media import (
    MediaDetails,
    MediaSearchItem,
    MetadataLot,
    MetadataSource,
    SearchResults,
)


class IMediaProvider(ABC):
    """
    Interface de base des fournisseurs de metadonnees.

    Capacites :
    - Lookup : details(identifier) -> MediaDetails
    - Search : search(query, page, include_adult) -> SearchResults
    - Langues : supported_languages() / default_language()

    Toute implementation retourne le schema canonique, quelle que soit la
    forme native de la source. Les erreurs sont des ProviderError.
    """

    @abstractmethod
    async def details(self, identifier: str) -> MediaDetails:
        """
        Recupere et normalise completement une oeuvre.

        Idempotent et en lecture seule cote source.

        Args:
            identifier: Identifiant canonique de l'oeuvre

        Returns:
            MediaDetails canonique

        Raises:
            ProviderError: Si une donnee essentielle ne peut etre obtenue
        """
        ...

    @abstractmethod
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
            page: Numero de page (1-based), 1 si absent
            include_adult: Inclure le contenu adulte, si la source sait filtrer

        Returns:
            Resultats pagines
        """
        ...

    @abstractmethod
    def supported_languages(self) -> frozenset[str]:
        """Langues gerees par la source."""
        ...

    @abstractmethod
    def default_language(self) -> str:
        """Langue utilisee quand l'appelant n'en precise pas."""
        ...

    @property
    @abstractmethod
    def source(self) -> MetadataSource:
        """Retourne l'identifiant de la source (ex: MetadataSource.OPENLIBRARY)."""
        ...

    @property
    @abstractmethod
    def lot(self) -> MetadataLot:
        """Categorie de media servie par la source."""
        ...

    async def close(self) -> None:
        """Libere les ressources reseau (rien a faire par defaut)."""
