"""
mediameta - Client d'agregation de metadonnees media.

Ce package recupere les metadonnees bibliographiques (et plus generalement
media) depuis des sources externes heterogenes et les normalise vers un
schema canonique unique, consomme par un catalogue.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (modele canonique, ports, exceptions)
- services/ : Couche application (routage vers les fournisseurs)
- adapters/ : Couche infrastructure (transport HTTP, fournisseurs concrets)
"""

from loguru import logger

# Silencieux par defaut : l'application hote active les logs via configure_logging
logger.disable("mediameta")
