"""
Modele de donnees canonique partage par tous les fournisseurs.

Exports :
- MediaDetails : Enregistrement complet d'une oeuvre
- MediaSearchItem : Projection legere pour les resultats de recherche
- SearchResults / SearchDetails : Resultats pagines
- MetadataCreator, MetadataImage, PartialMetadata : Valeurs composantes
- MetadataLot, MetadataSource, MetadataImageLot : Enumerations
"""

from mediameta.core.entities.media import (
    BookSpecifics,
    MediaDetails,
    MediaSearchItem,
    MediaSpecifics,
    MetadataCreator,
    MetadataGroupReference,
    MetadataImage,
    MetadataImageLot,
    MetadataLot,
    MetadataSource,
    MetadataVideo,
    MovieSpecifics,
    PartialMetadata,
    SearchDetails,
    SearchResults,
    StoredUrl,
    StoredUrlKind,
)

__all__ = [
    "BookSpecifics",
    "MediaDetails",
    "MediaSearchItem",
    "MediaSpecifics",
    "MetadataCreator",
    "MetadataGroupReference",
    "MetadataImage",
    "MetadataImageLot",
    "MetadataLot",
    "MetadataSource",
    "MetadataVideo",
    "MovieSpecifics",
    "PartialMetadata",
    "SearchDetails",
    "SearchResults",
    "StoredUrl",
    "StoredUrlKind",
]
