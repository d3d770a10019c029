"""
Tests pour le container d'injection de dependances.
"""

import pytest
from dependency_injector import providers
from loguru import logger

from mediameta.adapters.openlibrary.provider import OpenLibraryProvider
from mediameta.config import Settings
from mediameta.container import Container
from mediameta.core.entities.media import MetadataSource
from mediameta.services.provider_registry import ProviderRegistry


@pytest.fixture
def container(test_settings: Settings) -> Container:
    container = Container()
    container.config.override(providers.Object(test_settings))
    yield container
    container.config.reset_override()


class TestContainer:
    def test_openlibrary_provider_uses_settings(self, container: Container):
        provider = container.openlibrary_provider()

        assert isinstance(provider, OpenLibraryProvider)
        assert provider.page_limit == 10
        assert provider._image_size == "L"

    def test_provider_is_singleton(self, container: Container):
        assert container.openlibrary_provider() is container.openlibrary_provider()

    def test_registry_routes_to_openlibrary(self, container: Container):
        registry = container.provider_registry()

        assert isinstance(registry, ProviderRegistry)
        assert registry.resolve(MetadataSource.OPENLIBRARY, language="us") is (
            container.openlibrary_provider()
        )

    @pytest.mark.asyncio
    async def test_registry_close(self, container: Container):
        registry = container.provider_registry()

        await registry.close()

    def test_init_resources_configures_logging(self, container: Container, test_settings):
        container.init_resources()
        sink_ids = container.logging()
        try:
            assert test_settings.log_file.parent.is_dir()
            assert len(sink_ids) == 2
        finally:
            for sink_id in sink_ids:
                logger.remove(sink_id)
            logger.disable("mediameta")
            container.shutdown_resources()
