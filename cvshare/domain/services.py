"""
===============================================================================
TARJETA CRC - domain/services.py
===============================================================================

Módulo:
    Puertos de Servicios (Protocols)

Responsabilidades:
    - Definir el contrato del codec de credenciales (tokens y passwords).
    - Definir el reloj inyectable del rate limiter.
    - Mantener el dominio independiente de librerías criptográficas.

Colaboradores:
    - identity/credentials.py: Argon2CredentialCodec.
    - application/rate_limiting.py: SystemClock.

Reglas:
    - SOLO interfaces: nada de implementación.
===============================================================================
"""

from __future__ import annotations

from typing import Protocol


class CredentialCodec(Protocol):
    """Genera secret tokens y deriva/verifica hashes de password."""

    def generate_token(self) -> str:
        """64 caracteres hex en minúscula (32 bytes de CSPRNG)."""
        ...

    def hash_password(self, plaintext: str) -> str:
        """Devuelve "saltHex:keyHex" con salt fresco en cada llamada."""
        ...

    def verify_password(self, plaintext: str, stored: str) -> bool:
        """Comparación en tiempo constante; formato inválido -> False."""
        ...


class Clock(Protocol):
    def now_ms(self) -> int:
        """Milisegundos desde epoch."""
        ...
