"""
Name: Domain Errors (privacy mutation)

Responsibilities:
  - Typed exceptions raised by the pure privacy transition
  - Carry an end-user-safe message for the owner

Collaborators:
  - domain/privacy_transitions.py: raises them
  - application/usecases/workspace/update_privacy.py: maps them to error codes
"""

from __future__ import annotations


class PrivacyConfigurationError(Exception):
    """Base for invalid privacy mutations."""


class InvalidPrivacyLevelError(PrivacyConfigurationError):
    def __init__(self, level: object):
        self.level = level
        super().__init__(f"Invalid privacy level: {level!r}")


class PasswordRequiredError(PrivacyConfigurationError):
    def __init__(self) -> None:
        super().__init__("Password required for password-protected level")
