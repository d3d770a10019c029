"""
Mecanisme de retry avec backoff exponentiel pour les API externes.

Gere automatiquement les erreurs transitoires (429 rate limiting, 5xx,
erreurs reseau) en relancant les requetes avec un delai croissant et du
jitter aleatoire. Les autres erreurs HTTP (404...) ne sont jamais relancees.

Usage:
    # Avec le decorateur
    @with_retry(max_attempts=3, max_wait=10)
    async def my_api_call():
        ...

    # Avec la fonction helper
    response = await request_with_retry(client, "GET", url, rate_limiter=bucket)
"""

from typing import Optional

import httpx
from loguru import logger
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)

from mediameta.adapters.api.rate_limiter import TokenBucket


class RateLimitError(Exception):
    """
    Exception levee quand l'API retourne 429 Too Many Requests.

    Attributes:
        retry_after: Nombre de secondes a attendre (depuis le header Retry-After),
                     ou None si non specifie.
    """

    status_code = 429

    def __init__(self, retry_after: Optional[int] = None) -> None:
        """
        Initialise l'erreur avec la valeur Retry-After optionnelle.

        Args:
            retry_after: Secondes a attendre avant de relancer (optionnel)
        """
        self.retry_after = retry_after
        super().__init__(f"Rate limited. Retry after: {retry_after}s")


class ServerError(Exception):
    """Exception levee quand l'API retourne une erreur 5xx."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"Server error: HTTP {status_code}")


# Erreurs considerees comme transitoires (relancees)
TRANSIENT_ERRORS = (RateLimitError, ServerError, httpx.TransportError)


def _log_retry(retry_state: RetryCallState) -> None:
    """Journalise chaque tentative echouee avant la pause."""
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"Tentative {retry_state.attempt_number} echouee ({exception!r}), nouvel essai"
    )


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        # Retry-After peut aussi etre une date HTTP, ignoree ici
        return None


def with_retry(max_attempts: int = 5, max_wait: float = 60, min_wait: float = 1):
    """
    Decorateur pour relancer sur erreur transitoire avec backoff exponentiel.

    Utilise wait_random_exponential pour ajouter du jitter et eviter
    le "thundering herd" quand plusieurs clients relancent en meme temps.

    Args:
        max_attempts: Nombre maximum de tentatives, premiere incluse (defaut: 5)
        max_wait: Delai maximum entre les tentatives en secondes (defaut: 60)
        min_wait: Delai minimum entre les tentatives en secondes (defaut: 1)

    Returns:
        Decorateur a appliquer sur une fonction async

    Example:
        @with_retry(max_attempts=3, max_wait=30)
        async def fetch_data():
            # Sera relance jusqu'a 3 fois si une erreur transitoire est levee
            ...
    """
    return retry(
        retry=retry_if_exception_type(TRANSIENT_ERRORS),
        wait=wait_random_exponential(multiplier=1, min=min_wait, max=max_wait),
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log_retry,
        reraise=True,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_attempts: int = 5,
    max_wait: float = 60,
    min_wait: float = 1,
    rate_limiter: Optional[TokenBucket] = None,
    **kwargs,
) -> httpx.Response:
    """
    Execute une requete HTTP avec limitation de debit et retry automatique.

    Chaque tentative consomme d'abord un jeton du rate limiter (s'il est
    fourni). Les reponses 429 et 5xx sont converties en RateLimitError /
    ServerError et relancees avec backoff exponentiel, tout comme les
    erreurs reseau. Les autres erreurs HTTP (4xx) sont propagees
    immediatement sans retry.

    Args:
        client: Client httpx async a utiliser
        method: Methode HTTP (GET, POST, etc.)
        url: URL a appeler
        max_attempts: Nombre maximum de tentatives (defaut: 5)
        max_wait: Delai maximum entre tentatives (defaut: 60)
        min_wait: Delai minimum entre tentatives (defaut: 1)
        rate_limiter: Token bucket partage, optionnel
        **kwargs: Arguments supplementaires passes a client.request()

    Returns:
        httpx.Response en cas de succes

    Raises:
        RateLimitError: Si 429 apres epuisement des tentatives
        ServerError: Si 5xx apres epuisement des tentatives
        httpx.TransportError: Si erreur reseau apres epuisement des tentatives
        httpx.HTTPStatusError: Pour les autres erreurs HTTP
    """

    @with_retry(max_attempts=max_attempts, max_wait=max_wait, min_wait=min_wait)
    async def _do_request() -> httpx.Response:
        if rate_limiter is not None:
            await rate_limiter.acquire()
        response = await client.request(method, url, **kwargs)
        if response.status_code == 429:
            raise RateLimitError(_parse_retry_after(response.headers.get("Retry-After")))
        if response.status_code >= 500:
            raise ServerError(response.status_code)
        response.raise_for_status()
        return response

    return await _do_request()
