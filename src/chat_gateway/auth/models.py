"""
chat_gateway.auth.models

Auth domain models.

Responsibilities:
- Define the configured credential pair and the authenticated identity
  (`Principal`) attached to guarded requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field

POC_PRINCIPAL_ID = "poc-user"
POC_PRINCIPAL_NAME = "PoC User"


@dataclass(frozen=True, slots=True)
class Credential:
    username: str
    password: str = field(repr=False)


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.
    """

    id: str
    display_name: str

    def as_public(self) -> dict[str, str]:
        return {"id": self.id, "name": self.display_name}


# --- Module Notes -----------------------------------------------------------
# Single-account deployment: exactly one Principal exists, derived only from a
# successful credential match (see `auth.authenticator`).
