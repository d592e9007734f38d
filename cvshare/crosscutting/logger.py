# cvshare/crosscutting/logger.py
"""
===============================================================================
MÓDULO: Logger estructurado (JSON) con contexto de request
===============================================================================

Una línea JSON por evento, con request_id / method / path del ContextVar.
Las credenciales de un CV (password, hash, secret token) y las del propio
backend (JWT, DATABASE_URL) nunca se escriben: se reemplazan por un marcador.

CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  JSONFormatter + setup_logger()

Responsabilidades:
  - LogRecord -> JSON (extras incluidos)
  - Redactar claves de credenciales, también anidadas en dicts
  - Adjuntar la excepción cuando hay exc_info

Colaboradores:
  - cvshare/context.py (get_context_dict)
  - crosscutting/config.py (log_level, log_json)
===============================================================================
"""

from __future__ import annotations

import json
import logging
import sys
import traceback
from datetime import datetime, timezone
from typing import Any

REDACTED = "***REDACTADO***"

# Atributos estándar de LogRecord: todo lo demás vino por extra=...
_RECORD_ATTRS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "taskName"}

_CREDENTIAL_KEYS = frozenset(
    {"password", "secret", "token", "authorization", "jwt_secret", "database_url"}
)
_CREDENTIAL_SUFFIXES = ("_password", "_token", "_hash", "_secret")

_MAX_STR = 4_000


def is_credential_key(key: str) -> bool:
    k = key.lower()
    return k in _CREDENTIAL_KEYS or k.endswith(_CREDENTIAL_SUFFIXES)


def _scrub(value: Any, depth: int = 0) -> Any:
    if depth > 4:
        return "..."
    if isinstance(value, dict):
        return {
            str(k): REDACTED if is_credential_key(str(k)) else _scrub(v, depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [_scrub(v, depth + 1) for v in value]
    if isinstance(value, str) and len(value) > _MAX_STR:
        return value[:_MAX_STR] + "...(truncado)"
    return value


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        from ..context import get_context_dict

        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **get_context_dict(),
        }

        for key, value in vars(record).items():
            if key in _RECORD_ATTRS:
                continue
            payload[key] = REDACTED if is_credential_key(key) else _scrub(value)

        if record.exc_info and record.exc_info[0] is not None:
            payload["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(name: str = "cvshare") -> logging.Logger:
    """Logger del paquete; idempotente ante reimports."""
    log = logging.getLogger(name)
    if log.handlers:
        return log

    level, use_json = "INFO", True
    try:
        from .config import get_settings

        settings = get_settings()
        level, use_json = settings.log_level, settings.log_json
    except ValueError:
        # Settings inválidos: igual hay que poder loguear el arranque.
        pass

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        JSONFormatter() if use_json else logging.Formatter("%(levelname)s %(message)s")
    )
    log.addHandler(handler)
    log.setLevel(getattr(logging, level, logging.INFO))
    return log


logger = setup_logger()
