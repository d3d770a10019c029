"""
Transport HTTP resilient partage par les fournisseurs.

Enveloppe un httpx.AsyncClient lie a l'origine d'une source et a ses
headers par defaut, avec deux politiques par site d'appel :

- simple (guarded=False) : une seule requete, aucun retry. Pour les appels
  nombreux et peu couteux (recherche, details, auteurs) ou un echec doit
  remonter immediatement plutot qu'amplifier la charge.
- protege (guarded=True) : token bucket + retry borne avec backoff
  exponentiel, pour les endpoints connus pour etre limites ou instables
  (ex: recherche inverse par ISBN).

Toute erreur est convertie en TransportError (RetryExhaustedError pour un
appel protege ayant epuise ses tentatives).

Usage:
    transport = HttpTransport("https://openlibrary.org/", source="Openlibrary")
    data = await transport.get_json("works/OL45804W.json")
    data = await transport.get_json("isbn/9780140328721.json", guarded=True)
    await transport.close()
"""

from typing import Any, Optional

import httpx
from loguru import logger

from mediameta.adapters.api.rate_limiter import TokenBucket
from mediameta.adapters.api.retry import TRANSIENT_ERRORS, request_with_retry
from mediameta.core.exceptions import RetryExhaustedError, TransportError


class HttpTransport:
    """
    Client HTTP d'une source, avec politiques simple et protegee.

    Attributes:
        base_url: Origine de la source
        source: Nom de la source, repris dans les erreurs
        max_attempts: Tentatives maximum d'un appel protege
    """

    DEFAULT_HEADERS = {"Accept": "application/json"}

    def __init__(
        self,
        base_url: str,
        source: str,
        headers: Optional[dict[str, str]] = None,
        timeout: float = 30.0,
        rate_limiter: Optional[TokenBucket] = None,
        max_attempts: int = 3,
        max_wait: float = 10.0,
        min_wait: float = 1.0,
    ) -> None:
        """
        Initialise le transport (le client HTTP est cree a la demande).

        Args:
            base_url: URL de base de la source
            source: Nom de la source
            headers: Headers par defaut (Accept: application/json si absent)
            timeout: Timeout httpx en secondes
            rate_limiter: Token bucket des appels proteges (aucun si None)
            max_attempts: Tentatives maximum d'un appel protege (>= 1)
            max_wait: Delai maximum entre deux tentatives
            min_wait: Delai minimum entre deux tentatives
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts doit etre >= 1, recu {max_attempts}")
        self.base_url = base_url
        self.source = source
        self.max_attempts = max_attempts
        self._headers = dict(headers) if headers is not None else dict(self.DEFAULT_HEADERS)
        self._timeout = timeout
        self._rate_limiter = rate_limiter
        self._max_wait = max_wait
        self._min_wait = min_wait
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Retourne le client HTTP, le cree si necessaire (lazy init).

        Un client unique par transport pour beneficier du connection pooling.
        Les redirections sont suivies (ex: isbn/{isbn}.json -> books/{id}.json).
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
        return self._client

    def _describe(self, url: str, params: Optional[dict[str, Any]]) -> str:
        return str(httpx.URL(url, params=params)) if params else url

    async def get(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        guarded: bool = False,
    ) -> httpx.Response:
        """
        Execute un GET selon la politique demandee.

        Args:
            url: Chemin relatif a base_url (ou URL absolue)
            params: Parametres de requete
            guarded: True pour la politique protegee (rate limit + retry)

        Returns:
            httpx.Response avec un statut 2xx

        Raises:
            RetryExhaustedError: Appel protege sans succes apres max_attempts
            TransportError: Erreur reseau ou statut non-2xx
        """
        client = self._get_client()
        reference = self._describe(url, params)
        logger.debug(f"GET {reference} ({'protege' if guarded else 'simple'})")

        if guarded:
            try:
                return await request_with_retry(
                    client,
                    "GET",
                    url,
                    max_attempts=self.max_attempts,
                    max_wait=self._max_wait,
                    min_wait=self._min_wait,
                    rate_limiter=self._rate_limiter,
                    params=params,
                )
            except TRANSIENT_ERRORS as e:
                raise RetryExhaustedError(
                    self.max_attempts,
                    source=self.source,
                    reference=reference,
                    status_code=getattr(e, "status_code", None),
                ) from e
            except httpx.HTTPStatusError as e:
                raise self._status_error(e, reference) from e

        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._status_error(e, reference) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"Erreur reseau: {e!r}", source=self.source, reference=reference
            ) from e
        return response

    async def get_json(
        self,
        url: str,
        params: Optional[dict[str, Any]] = None,
        guarded: bool = False,
    ) -> Any:
        """
        Execute un GET et decode le corps JSON.

        Raises:
            TransportError: En plus des cas de get(), si le corps n'est pas du JSON
        """
        response = await self.get(url, params=params, guarded=guarded)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                "Corps de reponse JSON illisible",
                source=self.source,
                reference=self._describe(url, params),
                status_code=response.status_code,
            ) from e

    def _status_error(self, error: httpx.HTTPStatusError, reference: str) -> TransportError:
        status = error.response.status_code
        return TransportError(
            f"Statut HTTP {status}",
            source=self.source,
            reference=reference,
            status_code=status,
        )

    async def close(self) -> None:
        """
        Ferme le client HTTP.

        Doit etre appele a la fin de l'utilisation pour liberer
        les ressources reseau.
        """
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None
