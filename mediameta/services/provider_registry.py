"""
Registre des fournisseurs de metadonnees.

Point d'entree du catalogue : il retrouve le fournisseur d'une source et
verifie la langue demandee avant de lui router une requete. Le registre ne
connait que l'interface IMediaProvider, jamais un type de source concret.
"""

from typing import Iterable, Optional

from loguru import logger

from mediameta.core.entities.media import MetadataLot, MetadataSource
from mediameta.core.exceptions import ProviderNotFoundError, UnsupportedLanguageError
from mediameta.core.ports.providers import IMediaProvider


class ProviderRegistry:
    """
    Index des fournisseurs par source.

    Example:
        registry = ProviderRegistry([OpenLibraryProvider()])
        provider = registry.resolve(MetadataSource.OPENLIBRARY, language="us")
        details = await provider.details("OL45804W")
        await registry.close()
    """

    def __init__(self, providers: Iterable[IMediaProvider]) -> None:
        self._providers: dict[MetadataSource, IMediaProvider] = {}
        for provider in providers:
            if provider.source in self._providers:
                raise ValueError(f"Fournisseur deja enregistre pour {provider.source.value}")
            self._providers[provider.source] = provider

    @property
    def sources(self) -> tuple[MetadataSource, ...]:
        return tuple(self._providers)

    def get(self, source: MetadataSource) -> IMediaProvider:
        """
        Retourne le fournisseur d'une source.

        Raises:
            ProviderNotFoundError: Si la source n'est pas enregistree
        """
        try:
            return self._providers[source]
        except KeyError:
            raise ProviderNotFoundError(
                "Aucun fournisseur enregistre", source=source.value
            ) from None

    def for_lot(self, lot: MetadataLot) -> list[IMediaProvider]:
        """Fournisseurs servant une categorie de media, dans l'ordre d'enregistrement."""
        return [p for p in self._providers.values() if p.lot == lot]

    def supports_language(self, source: MetadataSource, language: str) -> bool:
        provider = self._providers.get(source)
        return provider is not None and language in provider.supported_languages()

    def resolve(
        self, source: MetadataSource, language: Optional[str] = None
    ) -> IMediaProvider:
        """
        Retourne le fournisseur d'une source apres verification de la langue.

        Args:
            source: Source demandee
            language: Langue demandee (None = langue par defaut du fournisseur)

        Raises:
            ProviderNotFoundError: Si la source n'est pas enregistree
            UnsupportedLanguageError: Si la langue n'est pas geree
        """
        provider = self.get(source)
        if language is not None and language not in provider.supported_languages():
            raise UnsupportedLanguageError(
                f"Langue '{language}' non geree (defaut: {provider.default_language()})",
                source=source.value,
            )
        return provider

    async def close(self) -> None:
        """Ferme tous les fournisseurs enregistres."""
        for provider in self._providers.values():
            logger.debug(f"Fermeture du fournisseur {provider.source.value}")
            await provider.close()
