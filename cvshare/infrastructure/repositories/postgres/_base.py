"""
============================================================
TARJETA CRC - infrastructure/repositories/postgres/_base.py
============================================================
Class: PostgresRepositoryBase

Responsibilities:
- Resolver el pool (inyectado para tests o el global del proceso).
- Ejecutar queries parametrizadas con errores consistentes (DatabaseError)
  y log estructurado del fallo.

Collaborators:
- psycopg_pool.ConnectionPool
- crosscutting.exceptions.DatabaseError
- crosscutting.logger.logger
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import DatabaseError
from ....crosscutting.logger import logger


class PostgresRepositoryBase:
    def __init__(self, pool: Optional[ConnectionPool] = None):
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fail(self, context_msg: str, extra: dict, exc: Exception) -> DatabaseError:
        logger.exception(context_msg, extra={**extra, "error": str(exc)})
        return DatabaseError(f"{context_msg}: {exc}", original_error=exc)

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc

    def _execute(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> int:
        """Ejecuta un comando y devuelve rowcount."""
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).rowcount
        except Exception as exc:
            raise self._fail(context_msg, extra, exc) from exc
