"""
===============================================================================
COLLABORATION USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Contrato estable de resultados para invitaciones y membresías de un CV.

Códigos:
    - VALIDATION_ERROR: rol inválido, email vacío.
    - UNAUTHORIZED: no hay actor autenticado.
    - FORBIDDEN: el actor no tiene el permiso requerido.
    - NOT_FOUND: workspace / invitación / colaborador inexistente.
    - CONFLICT: invitación duplicada, ya es colaborador, owner inmutable.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....domain.entities import CollaborationRecord


class CollaborationErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class CollaborationError:
    code: CollaborationErrorCode
    message: str


@dataclass
class CollaborationResult:
    record: CollaborationRecord | None = None
    error: CollaborationError | None = None


@dataclass
class CollaborationListResult:
    records: List[CollaborationRecord] = field(default_factory=list)
    error: CollaborationError | None = None


@dataclass
class CollaborationRemovalResult:
    removed: bool
    error: CollaborationError | None = None


def collaboration_error(
    code: CollaborationErrorCode, message: str
) -> CollaborationError:
    return CollaborationError(code=code, message=message)
