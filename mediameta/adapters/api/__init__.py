"""
Infrastructure HTTP partagee par les fournisseurs de metadonnees.

- HttpTransport: Client HTTP d'une source avec politiques simple / protegee
- TokenBucket: Limiteur de debit asynchrone partage entre appels
- RateLimitError / ServerError: Erreurs transitoires internes au retry
- with_retry / request_with_retry: Backoff exponentiel (tenacity)
"""

from mediameta.adapters.api.rate_limiter import TokenBucket
from mediameta.adapters.api.retry import (
    RateLimitError,
    ServerError,
    request_with_retry,
    with_retry,
)
from mediameta.adapters.api.transport import HttpTransport

__all__ = [
    "HttpTransport",
    "RateLimitError",
    "ServerError",
    "TokenBucket",
    "request_with_retry",
    "with_retry",
]
