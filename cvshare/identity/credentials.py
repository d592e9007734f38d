"""
===============================================================================
TARJETA CRC - identity/credentials.py
===============================================================================

Módulo:
    Codec de credenciales de privacidad (secret tokens + passwords de CV)

Responsabilidades:
    - Generar secret tokens de enlace (CSPRNG, 32 bytes -> 64 hex).
    - Derivar hashes de password con Argon2id crudo: "saltHex:keyHex".
    - Verificar passwords en tiempo constante, fallando cerrado ante basura.

Colaboradores:
    - argon2.low_level.hash_secret_raw (argon2-cffi)
    - domain.services.CredentialCodec (contrato que implementa)
    - domain.privacy_policy / domain.privacy_transitions (consumidores)

Decisiones de diseño:
    - Formato propio "salt:key" (no el string PHC de PasswordHasher) porque el
      valor persistido de la privacidad usa ese layout.
    - Ninguna operación lanza en condiciones normales.
===============================================================================
"""

from __future__ import annotations

import hmac
import secrets
from typing import Final

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

TOKEN_BYTES: Final[int] = 32
SALT_BYTES: Final[int] = 16
KEY_BYTES: Final[int] = 64

# R: parámetros Argon2id (RFC 9106, perfil de memoria moderada).
ARGON2_TIME_COST: Final[int] = 3
ARGON2_MEMORY_COST_KIB: Final[int] = 65536
ARGON2_PARALLELISM: Final[int] = 4

_SEPARATOR: Final[str] = ":"


class Argon2CredentialCodec:
    """
    ----------------------------------------------------------------------------
    CRC (Class Card)
    ----------------------------------------------------------------------------
    Clase:
      Argon2CredentialCodec

    Responsabilidades:
      - generate_token / hash_password / verify_password

    Colaboradores:
      - container.get_credential_codec()
    ----------------------------------------------------------------------------
    """

    def __init__(
        self,
        *,
        time_cost: int = ARGON2_TIME_COST,
        memory_cost: int = ARGON2_MEMORY_COST_KIB,
        parallelism: int = ARGON2_PARALLELISM,
    ):
        self._time_cost = time_cost
        self._memory_cost = memory_cost
        self._parallelism = parallelism

    def generate_token(self) -> str:
        return secrets.token_hex(TOKEN_BYTES)

    def hash_password(self, plaintext: str) -> str:
        salt = secrets.token_bytes(SALT_BYTES)
        key = self._derive(plaintext, salt)
        return f"{salt.hex()}{_SEPARATOR}{key.hex()}"

    def verify_password(self, plaintext: str, stored: str) -> bool:
        if not stored or _SEPARATOR not in stored:
            return False

        salt_hex, _, key_hex = stored.partition(_SEPARATOR)
        if not salt_hex or not key_hex:
            return False

        try:
            salt = bytes.fromhex(salt_hex)
            expected = bytes.fromhex(key_hex)
            actual = self._derive(plaintext, salt)
        except (ValueError, HashingError):
            return False

        return hmac.compare_digest(actual, expected)

    def _derive(self, plaintext: str, salt: bytes) -> bytes:
        return hash_secret_raw(
            secret=(plaintext or "").encode("utf-8"),
            salt=salt,
            time_cost=self._time_cost,
            memory_cost=self._memory_cost,
            parallelism=self._parallelism,
            hash_len=KEY_BYTES,
            type=Type.ID,
        )
