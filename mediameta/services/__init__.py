"""
Application services layer.

Services coordinate providers on behalf of the catalog collaborator.
They depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.

- ProviderRegistry: routes a request to the provider of a source
"""

from mediameta.services.provider_registry import ProviderRegistry

__all__ = ["ProviderRegistry"]
