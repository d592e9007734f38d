# =============================================================================
# FILE: application/rate_limiting.py
# =============================================================================
"""
===============================================================================
SERVICE: Rate Limiting (Fixed Window per identifier + endpoint)
===============================================================================

Name:
    Rate Limiting Service

Qué es:
    Contador de ventana fija por (identifier, endpoint) para frenar fuerza
    bruta contra CVs protegidos por password o secret link.

Arquitectura:
    - Capa: Application (service)
    - Patrón: Fixed Window Counter (no deslizante; los bursts en el borde de
      ventana son una limitación conocida)
    - Storage: RateLimitStore (Postgres en producción, memoria en tests/dev)
    - Tiempo: Clock inyectable (ms epoch)

-------------------------------------------------------------------------------
CRC CARD
-------------------------------------------------------------------------------
Component: RateLimiter
Responsibilities:
  - check(): cobrar el request actual y decidir allow/deny
  - get_status(): leer la ventana vigente sin modificarla
  - cleanup_expired(): borrar ventanas viejas en lotes
  - get_stats(): resumen operativo (activos, última hora, por endpoint)
Collaborators:
  - domain.repositories.RateLimitStore: persistencia atómica de contadores
  - domain.services.Clock: fuente de tiempo
===============================================================================
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, Final, List, Optional, Tuple

from ..domain.entities import RateLimitRecord
from ..domain.repositories import RateLimitStore
from ..domain.services import Clock

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
_ONE_HOUR_MS: Final[int] = 60 * 60 * 1000
DEFAULT_CLEANUP_RETENTION_MS: Final[int] = _ONE_HOUR_MS
DEFAULT_CLEANUP_BATCH_SIZE: Final[int] = 100


class SystemClock:
    """Reloj real (time.time en ms)."""

    def now_ms(self) -> int:
        return int(time.time() * 1000)


# -----------------------------------------------------------------------------
# Result Types
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RateLimitResult:
    """
    Resultado de check().

    Attributes:
        allowed: True si el request entra en la ventana
        remaining: requests restantes en la ventana (nunca negativo)
        reset_at_ms: fin de la ventana vigente (ms epoch)
        limit: max_requests usado para decidir
        retry_after_seconds: solo en denegación, ceil((window_end - now)/1000)
    """

    allowed: bool
    remaining: int
    reset_at_ms: int
    limit: int
    retry_after_seconds: Optional[int] = None


@dataclass(frozen=True)
class RateLimitStatus:
    record: RateLimitRecord
    is_expired: bool


@dataclass(frozen=True)
class RateLimitStats:
    active_records: int
    requests_last_hour: int
    requests_by_endpoint: Dict[str, int] = field(default_factory=dict)
    unique_identifiers_by_endpoint: Dict[str, int] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# Rate Limiter Service
# -----------------------------------------------------------------------------
class RateLimiter:
    """
    Servicio de rate limiting de ventana fija.

    Uso típico:
        limiter = RateLimiter(store)
        result = limiter.check(client_id, "cv_access", window_ms=60_000, max_requests=10)
        if not result.allowed:
            raise rate_limited(result.retry_after_seconds)
    """

    def __init__(self, store: RateLimitStore, clock: Optional[Clock] = None) -> None:
        self._store = store
        self._clock = clock or SystemClock()

    def check(
        self,
        identifier: str,
        endpoint: str,
        *,
        window_ms: int,
        max_requests: int,
    ) -> RateLimitResult:
        """
        Cobra el request actual y decide.

        El request que llega exactamente a max_requests se permite
        (remaining=0); el siguiente se deniega.
        """
        if window_ms <= 0 or max_requests <= 0:
            raise ValueError("window_ms and max_requests must be greater than 0")

        now = self._clock.now_ms()
        record = self._store.increment(
            identifier, endpoint, now_ms=now, window_ms=window_ms
        )

        allowed = record.count <= max_requests
        remaining = max(0, max_requests - record.count)

        if allowed:
            return RateLimitResult(
                allowed=True,
                remaining=remaining,
                reset_at_ms=record.window_end,
                limit=max_requests,
            )

        retry_after = max(0, math.ceil((record.window_end - now) / 1000))
        logger.warning(
            "Rate limit exceeded",
            extra={
                "endpoint": endpoint,
                "limit": max_requests,
                "count": record.count,
                "retry_after": retry_after,
            },
        )
        return RateLimitResult(
            allowed=False,
            remaining=0,
            reset_at_ms=record.window_end,
            limit=max_requests,
            retry_after_seconds=retry_after,
        )

    def get_status(self, identifier: str, endpoint: str) -> Optional[RateLimitStatus]:
        """Ventana guardada (sin modificarla), o None si nunca hubo requests."""
        record = self._store.get(identifier, endpoint)
        if record is None:
            return None
        return RateLimitStatus(
            record=record, is_expired=record.is_expired(self._clock.now_ms())
        )

    def cleanup_expired(
        self,
        *,
        retention_ms: int = DEFAULT_CLEANUP_RETENTION_MS,
        batch_size: int = DEFAULT_CLEANUP_BATCH_SIZE,
    ) -> int:
        """Borra ventanas terminadas hace más de retention_ms. Retorna cantidad."""
        cutoff = self._clock.now_ms() - retention_ms
        deleted = self._store.delete_expired(cutoff, batch_size)
        if deleted:
            logger.info("Rate limit records cleaned up", extra={"deleted": deleted})
        return deleted

    def get_stats(self) -> RateLimitStats:
        now = self._clock.now_ms()
        active = self._store.list_active(now)
        recent = self._store.list_since(now - _ONE_HOUR_MS)

        requests_by_endpoint: Dict[str, int] = {}
        identifiers: Dict[str, set] = {}
        for record in recent:
            requests_by_endpoint[record.endpoint] = (
                requests_by_endpoint.get(record.endpoint, 0) + record.count
            )
            identifiers.setdefault(record.endpoint, set()).add(record.identifier)

        return RateLimitStats(
            active_records=len(active),
            requests_last_hour=sum(r.count for r in recent),
            requests_by_endpoint=requests_by_endpoint,
            unique_identifiers_by_endpoint={
                endpoint: len(ids) for endpoint, ids in identifiers.items()
            },
        )


# -----------------------------------------------------------------------------
# In-Memory Implementation (for testing/development)
# -----------------------------------------------------------------------------
class InMemoryRateLimitStore:
    """
    Implementación en memoria (thread-safe).

    Nota: no apta para múltiples workers; el estado vive mientras viva el proceso.
    """

    def __init__(self) -> None:
        self._data: Dict[Tuple[str, str], RateLimitRecord] = {}
        self._lock = threading.Lock()

    def increment(
        self, identifier: str, endpoint: str, *, now_ms: int, window_ms: int
    ) -> RateLimitRecord:
        key = (identifier, endpoint)
        with self._lock:
            current = self._data.get(key)
            if current is None or current.is_expired(now_ms):
                record = RateLimitRecord(
                    identifier=identifier,
                    endpoint=endpoint,
                    count=1,
                    window_start=now_ms,
                    window_end=now_ms + window_ms,
                )
            else:
                record = RateLimitRecord(
                    identifier=identifier,
                    endpoint=endpoint,
                    count=current.count + 1,
                    window_start=current.window_start,
                    window_end=current.window_end,
                )
            self._data[key] = record
            return record

    def get(self, identifier: str, endpoint: str) -> Optional[RateLimitRecord]:
        with self._lock:
            return self._data.get((identifier, endpoint))

    def delete_expired(self, before_ms: int, limit: int) -> int:
        with self._lock:
            expired = [k for k, r in self._data.items() if r.window_end < before_ms]
            for key in expired[:limit]:
                del self._data[key]
            return min(len(expired), limit)

    def list_active(self, now_ms: int) -> List[RateLimitRecord]:
        with self._lock:
            return [r for r in self._data.values() if not r.is_expired(now_ms)]

    def list_since(self, since_ms: int) -> List[RateLimitRecord]:
        with self._lock:
            return [r for r in self._data.values() if r.window_start >= since_ms]

    def clear(self) -> None:
        with self._lock:
            self._data.clear()
