"""
Container d'injection de dependances via dependency-injector.

Construit les fournisseurs de metadonnees a partir de Settings et les expose
au catalogue via le registre.
"""

from dependency_injector import containers, providers

from .adapters.openlibrary.provider import OpenLibraryProvider
from .config import Settings
from .logging_config import configure_logging
from .services.provider_registry import ProviderRegistry


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        container.init_resources()  # active le logging selon Settings
        registry = container.provider_registry()
        provider = registry.resolve(MetadataSource.OPENLIBRARY)
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Logging - ressource initialisee par init_resources()
    logging = providers.Resource(configure_logging, settings=config)

    # Fournisseurs - singletons pour partager le pool de connexions et le rate limiter
    openlibrary_provider = providers.Singleton(
        OpenLibraryProvider,
        cover_image_size=config.provided.openlibrary_cover_image_size,
        page_limit=config.provided.page_limit,
        base_url=config.provided.openlibrary_base_url,
        image_base_url=config.provided.openlibrary_image_base_url,
        isbn_rate_per_second=config.provided.openlibrary_isbn_rate_per_second,
        isbn_max_attempts=config.provided.openlibrary_isbn_max_attempts,
        timeout=config.provided.http_timeout,
    )

    provider_registry = providers.Singleton(
        ProviderRegistry,
        providers=providers.List(openlibrary_provider),
    )
