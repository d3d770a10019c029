"""
Adaptateur Open Library (livres).

- OpenLibraryProvider: Implementation de IMediaProvider
- decoders: Decodage des reponses JSON aux formes variables
- normalizer: Conversion pure vers le modele canonique
- related_works: Extraction des oeuvres liees depuis le HTML
"""

from mediameta.adapters.openlibrary.provider import OpenLibraryProvider

__all__ = ["OpenLibraryProvider"]
