"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/rate_limit.py
============================================================
Class: PostgresRateLimitStore

Responsibilities:
- Contadores de ventana fija en la tabla rate_limits.
- increment(): reset-o-incremento atómico en UN solo UPSERT, así dos
  workers concurrentes nunca pisan el contador del otro.

Collaborators:
- domain.entities.RateLimitRecord
- application.rate_limiting.RateLimiter (consumidor)
- PostgresRepositoryBase

Notes:
- Tiempos en ms epoch (BIGINT), igual que el Clock del limiter.
- "Ventana terminada" = window_end <= now (mismo criterio que en memoria).
============================================================
"""

from __future__ import annotations

from typing import List, Optional

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import RateLimitRecord
from ._base import PostgresRepositoryBase

_COLUMNS = "identifier, endpoint, count, window_start, window_end"

_SQL_INCREMENT = f"""
    INSERT INTO rate_limits ({_COLUMNS})
    VALUES (%s, %s, 1, %s, %s)
    ON CONFLICT (identifier, endpoint) DO UPDATE SET
        count = CASE
            WHEN rate_limits.window_end <= EXCLUDED.window_start THEN 1
            ELSE rate_limits.count + 1
        END,
        window_start = CASE
            WHEN rate_limits.window_end <= EXCLUDED.window_start
                THEN EXCLUDED.window_start
            ELSE rate_limits.window_start
        END,
        window_end = CASE
            WHEN rate_limits.window_end <= EXCLUDED.window_start
                THEN EXCLUDED.window_end
            ELSE rate_limits.window_end
        END
    RETURNING {_COLUMNS}
"""

_SQL_GET = f"""
    SELECT {_COLUMNS} FROM rate_limits
    WHERE identifier = %s AND endpoint = %s
"""

_SQL_DELETE_EXPIRED = """
    DELETE FROM rate_limits
    WHERE (identifier, endpoint) IN (
        SELECT identifier, endpoint FROM rate_limits
        WHERE window_end < %s
        LIMIT %s
    )
"""

_SQL_LIST_ACTIVE = f"SELECT {_COLUMNS} FROM rate_limits WHERE window_end > %s"

_SQL_LIST_SINCE = f"SELECT {_COLUMNS} FROM rate_limits WHERE window_start >= %s"


class PostgresRateLimitStore(PostgresRepositoryBase):
    @staticmethod
    def _row_to_record(row: tuple) -> RateLimitRecord:
        identifier, endpoint, count, window_start, window_end = row
        return RateLimitRecord(
            identifier=identifier,
            endpoint=endpoint,
            count=int(count),
            window_start=int(window_start),
            window_end=int(window_end),
        )

    def increment(
        self, identifier: str, endpoint: str, *, now_ms: int, window_ms: int
    ) -> RateLimitRecord:
        row = self._fetchone(
            query=_SQL_INCREMENT,
            params=[identifier, endpoint, now_ms, now_ms + window_ms],
            context_msg="PostgresRateLimitStore: Failed to increment counter",
            extra={"endpoint": endpoint},
        )
        if not row:
            raise DatabaseError("PostgresRateLimitStore: Upsert returned no row")
        return self._row_to_record(row)

    def get(self, identifier: str, endpoint: str) -> Optional[RateLimitRecord]:
        row = self._fetchone(
            query=_SQL_GET,
            params=[identifier, endpoint],
            context_msg="PostgresRateLimitStore: Failed to get counter",
            extra={"endpoint": endpoint},
        )
        return self._row_to_record(row) if row else None

    def delete_expired(self, before_ms: int, limit: int) -> int:
        return self._execute(
            query=_SQL_DELETE_EXPIRED,
            params=[before_ms, limit],
            context_msg="PostgresRateLimitStore: Failed to delete expired counters",
            extra={"before_ms": before_ms, "limit": limit},
        )

    def list_active(self, now_ms: int) -> List[RateLimitRecord]:
        rows = self._fetchall(
            query=_SQL_LIST_ACTIVE,
            params=[now_ms],
            context_msg="PostgresRateLimitStore: Failed to list active counters",
            extra={},
        )
        return [self._row_to_record(r) for r in rows]

    def list_since(self, since_ms: int) -> List[RateLimitRecord]:
        rows = self._fetchall(
            query=_SQL_LIST_SINCE,
            params=[since_ms],
            context_msg="PostgresRateLimitStore: Failed to list recent counters",
            extra={},
        )
        return [self._row_to_record(r) for r in rows]
