"""
Erreurs typees remontees par les fournisseurs de metadonnees.

Chaque erreur porte assez de contexte (source, identifiant/requete/URL)
pour etre journalisee et permettre au catalogue de basculer sur une autre
source. La cause sous-jacente est chainee via ``raise ... from``.

Hierarchie :
- ProviderError
  - TransportError : erreur reseau, statut non-2xx, corps illisible
    - RetryExhaustedError : appel protege ayant epuise ses tentatives
  - DecodeError : champ obligatoire absent ou de forme inconnue
  - ProviderNotFoundError : aucune source enregistree pour la demande
  - UnsupportedLanguageError : langue non geree par la source
"""

from typing import Optional


class ProviderError(Exception):
    """
    Erreur de base des fournisseurs.

    Attributes:
        source: Nom de la source concernee (ex: "Openlibrary")
        reference: Identifiant, requete ou URL en cause
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> None:
        self.source = source
        self.reference = reference
        context = ", ".join(
            f"{name}={value}"
            for name, value in (("source", source), ("reference", reference))
            if value
        )
        super().__init__(f"{message} ({context})" if context else message)


class TransportError(ProviderError):
    """
    Echec d'un appel HTTP.

    Attributes:
        status_code: Statut HTTP recu, ou None pour une erreur reseau
    """

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        reference: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, source=source, reference=reference)


class RetryExhaustedError(TransportError):
    """Un appel protege a utilise toutes ses tentatives."""

    def __init__(
        self,
        attempts: int,
        source: Optional[str] = None,
        reference: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.attempts = attempts
        super().__init__(
            f"Echec apres {attempts} tentative(s)",
            source=source,
            reference=reference,
            status_code=status_code,
        )


class DecodeError(ProviderError):
    """Un champ obligatoire de la reponse est absent ou illisible."""


class ProviderNotFoundError(ProviderError):
    """Aucun fournisseur enregistre pour la source demandee."""


class UnsupportedLanguageError(ProviderError):
    """La langue demandee n'est pas geree par le fournisseur."""
