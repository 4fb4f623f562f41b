"""
chat_gateway.auth.authenticator

Single-account credential verification.

Responsibilities:
- Compare a submitted username/password against the configured pair.
- Fail closed whenever the signing secret or the credential pair is missing.
"""

from __future__ import annotations

import hmac

from chat_gateway.auth.models import POC_PRINCIPAL_ID, POC_PRINCIPAL_NAME, Principal
from chat_gateway.observability.logging import get_logger
from chat_gateway.settings import Settings

log = get_logger(__name__)


def _same(submitted: str, expected: str) -> bool:
    return hmac.compare_digest(submitted.encode("utf-8"), expected.encode("utf-8"))


class CredentialAuthenticator:
    """
    A failed match is an expected outcome: `authenticate` returns None, it does not raise.
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def authenticate(self, username: str | None, password: str | None) -> Principal | None:
        credential = self._settings.credential
        if self._settings.auth_misconfigured or credential is None:
            # Operator error must never turn into open access.
            log.error("signin_unavailable", missing=self._settings.missing_values())
            return None

        # Evaluate both comparisons so timing does not reveal which field differed.
        user_ok = _same(username or "", credential.username)
        pass_ok = _same(password or "", credential.password)
        if not (user_ok and pass_ok):
            return None

        return Principal(id=POC_PRINCIPAL_ID, display_name=POC_PRINCIPAL_NAME)
