"""
chat_gateway.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Resolve the env-provided secrets the gateway needs (signing secret, the single
  credential pair, provider API key) into one immutable snapshot.
- Hide secrets from repr/logging.
- Flag a degraded ("misconfigured") snapshot instead of failing process start.
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import Any, Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_gateway.auth.models import Credential
from chat_gateway.observability.logging import get_logger

log = get_logger(__name__)


class Settings(BaseSettings):
    """
    Snapshot pattern:
    - Resolved once per process, never mutated afterwards (frozen)
    - Ambient knobs use the CHAT_GATEWAY_ prefix
    - Required secrets keep the unprefixed names the deployment already sets
    """

    model_config = SettingsConfigDict(
        env_prefix="CHAT_GATEWAY_",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "chat-gateway"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Session tokens
    jwt_alg: str = "HS256"
    jwt_issuer: str = "chat-gateway"
    jwt_audience: str = "chat-gateway-client"
    session_lifetime_minutes: int = Field(default=12 * 60, ge=1)
    session_cookie_name: str = "chat_gateway_session"
    session_cookie_secure: bool = True

    # Provider request shape is fixed per deployment, not per call.
    provider_base_url: str = "https://api.openai.com/v1"
    provider_model: str = "gpt-5-mini"
    provider_max_output_tokens: int = 300
    provider_reasoning_effort: str = "minimal"
    provider_timeout_seconds: float = 30.0
    provider_max_retries: int = Field(default=2, ge=0)
    provider_retry_backoff_seconds: float = 0.5

    # Required values.
    auth_secret: str | None = Field(
        default=None,
        repr=False,
        validation_alias=AliasChoices("auth_secret", "AUTH_SECRET", "NEXTAUTH_SECRET"),
    )
    poc_user: str | None = Field(
        default=None,
        validation_alias=AliasChoices("poc_user", "POC_USER"),
    )
    poc_pass: str | None = Field(
        default=None,
        repr=False,
        validation_alias=AliasChoices("poc_pass", "POC_PASS"),
    )
    openai_api_key: str | None = Field(
        default=None,
        repr=False,
        validation_alias=AliasChoices("openai_api_key", "OPENAI_API_KEY"),
    )

    @field_validator("auth_secret", "poc_user", "poc_pass", "openai_api_key", mode="before")
    @classmethod
    def _blank_is_absent(cls, value: Any) -> Any:
        # An exported-but-empty variable is treated exactly like a missing one.
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def credential(self) -> Credential | None:
        if self.poc_user is None or self.poc_pass is None:
            return None
        return Credential(username=self.poc_user, password=self.poc_pass)

    @property
    def session_lifetime(self) -> timedelta:
        return timedelta(minutes=self.session_lifetime_minutes)

    @property
    def auth_misconfigured(self) -> bool:
        return self.auth_secret is None or self.credential is None

    @property
    def misconfigured(self) -> bool:
        return bool(self.missing_values())

    def missing_values(self) -> list[str]:
        missing: list[str] = []
        if self.auth_secret is None:
            missing.append("AUTH_SECRET")
        if self.poc_user is None:
            missing.append("POC_USER")
        if self.poc_pass is None:
            missing.append("POC_PASS")
        if self.openai_api_key is None:
            missing.append("OPENAI_API_KEY")
        return missing


def report_configuration(settings: Settings) -> None:
    """
    Emit a diagnostic record for a degraded snapshot. Never raises: a missing
    secret disables the affected feature, not the process.
    """

    missing = settings.missing_values()
    if not missing:
        return
    log.error(
        "configuration_missing",
        missing=missing,
        signin_disabled=settings.auth_misconfigured,
        relay_disabled=settings.openai_api_key is None,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Every other component receives this snapshot explicitly (constructor args or
# FastAPI dependencies); nothing reads os.environ mid-request.
