"""
Limiteur de debit asynchrone (token bucket).

Le seau se remplit a `rate` jetons par seconde jusqu'a `capacity`. Chaque
requete consomme un jeton ; quand le seau est vide, l'appelant attend le
prochain jeton. L'etat (jetons, horloge) est le seul etat partage entre
appels concurrents : un asyncio.Lock en serialise l'acces.

Usage:
    bucket = TokenBucket(rate=1.0)
    await bucket.acquire()  # immediat
    await bucket.acquire()  # attend ~1s
"""

import asyncio
import time
from typing import Awaitable, Callable


class TokenBucket:
    """
    Token bucket partageable entre coroutines.

    Attributes:
        rate: Jetons ajoutes par seconde
        capacity: Nombre maximum de jetons (rafale autorisee)
    """

    def __init__(
        self,
        rate: float,
        capacity: float = 1.0,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """
        Initialise un seau plein.

        Args:
            rate: Debit en requetes par seconde (> 0)
            capacity: Taille du seau (>= 1)
            clock: Horloge monotone (injectable pour les tests)
            sleep: Fonction d'attente asynchrone (injectable pour les tests)
        """
        if rate <= 0:
            raise ValueError(f"rate doit etre positif, recu {rate}")
        if capacity < 1:
            raise ValueError(f"capacity doit etre >= 1, recu {capacity}")
        self.rate = rate
        self.capacity = capacity
        self._clock = clock
        self._sleep = sleep
        self._tokens = capacity
        self._updated_at = clock()
        self._lock = asyncio.Lock()

    def _refill(self) -> None:
        now = self._clock()
        elapsed = max(0.0, now - self._updated_at)
        self._tokens = min(self.capacity, self._tokens + elapsed * self.rate)
        self._updated_at = now

    async def acquire(self) -> None:
        """Attend qu'un jeton soit disponible puis le consomme."""
        async with self._lock:
            while True:
                self._refill()
                if self._tokens >= 1:
                    self._tokens -= 1
                    return
                await self._sleep((1 - self._tokens) / self.rate)
