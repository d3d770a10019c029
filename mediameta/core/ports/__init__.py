"""
Ports (interfaces abstraites) definissant les contrats pour les adaptateurs.

Ports fournisseur : Contrats pour les sources de metadonnees externes
- IMediaProvider : Capacites details / search / langues
"""

from mediameta.core.ports.providers import IMediaProvider

__all__ = [
    "IMediaProvider",
]
