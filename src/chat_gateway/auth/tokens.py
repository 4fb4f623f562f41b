"""
chat_gateway.auth.tokens

Session token issuing and validation.

Responsibilities:
- Mint HS256 JWTs carrying the principal plus `iat`/`exp`.
- Validate signature, issuer, audience, expiry and principal shape, collapsing
  every failure into a single "invalid" outcome (None).

Note:
- Tokens are self-contained; the server keeps no record of issued tokens.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from chat_gateway.auth.models import Principal
from chat_gateway.errors import ConfigurationError
from chat_gateway.settings import Settings


def utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True, slots=True)
class JwtConfig:
    # Algorithm/issuer/audience are enforced during decoding.
    alg: str
    issuer: str
    audience: str
    secret: str | None

    @classmethod
    def from_settings(cls, settings: Settings) -> JwtConfig:
        return cls(
            alg=settings.jwt_alg,
            issuer=settings.jwt_issuer,
            audience=settings.jwt_audience,
            secret=settings.auth_secret,
        )


class SessionTokenCodec:
    def __init__(
        self,
        settings: Settings,
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._cfg = JwtConfig.from_settings(settings)
        self._lifetime = settings.session_lifetime
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, principal: Principal) -> str:
        if not self._cfg.secret:
            raise ConfigurationError()

        now = self._clock()
        payload: dict[str, Any] = {
            "iss": self._cfg.issuer,
            "aud": self._cfg.audience,
            "sub": principal.id,
            "name": principal.display_name,
            "iat": int(now.timestamp()),
            "exp": int((now + self._lifetime).timestamp()),
        }
        return jwt.encode(payload, self._cfg.secret, algorithm=self._cfg.alg)

    def validate(self, token: str | None) -> Principal | None:
        if not token or not self._cfg.secret:
            return None

        try:
            # Expiry is checked below against the injected clock, not wall time.
            payload = jwt.decode(
                token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                issuer=self._cfg.issuer,
                audience=self._cfg.audience,
                options={
                    "require": ["exp", "iat", "iss", "aud", "sub"],
                    "verify_exp": False,
                    "verify_iat": False,
                },
            )
        except InvalidTokenError:
            return None

        exp = payload.get("exp")
        if not isinstance(exp, int | float) or self._clock().timestamp() > exp:
            return None

        subject = payload.get("sub")
        name = payload.get("name")
        if not isinstance(subject, str) or not subject or not isinstance(name, str):
            return None

        return Principal(id=subject, display_name=name)


# --- Module Notes -----------------------------------------------------------
# Callers (`auth.deps`, `api.routers.auth`) never need to know why a token was
# rejected, only that it was.
