from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from pydantic import BaseModel, Field

from chat_gateway.auth.authenticator import CredentialAuthenticator
from chat_gateway.auth.deps import get_token_codec, require_session
from chat_gateway.auth.models import Principal
from chat_gateway.auth.tokens import SessionTokenCodec
from chat_gateway.errors import AuthenticationFailed
from chat_gateway.observability.logging import get_logger
from chat_gateway.settings import Settings, get_settings

log = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


class SignInRequest(BaseModel):
    username: str = Field(default="", max_length=256)
    password: str = Field(default="", max_length=1024, repr=False)


class PublicUser(BaseModel):
    id: str
    name: str


class SignInResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user: PublicUser


class SessionResponse(BaseModel):
    user: PublicUser


@router.post("/signin", response_model=SignInResponse)
async def sign_in(
    body: SignInRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
    codec: SessionTokenCodec = Depends(get_token_codec),
) -> SignInResponse:
    principal = CredentialAuthenticator(settings).authenticate(body.username, body.password)
    if principal is None:
        log.info("signin_failed")
        raise AuthenticationFailed()

    token = codec.issue(principal)
    max_age = int(codec.lifetime.total_seconds())
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=max_age,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    log.info("signin_succeeded", principal_id=principal.id)
    return SignInResponse(
        access_token=token,
        expires_in=max_age,
        user=PublicUser(**principal.as_public()),
    )


@router.post("/signout")
async def sign_out(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> dict[str, bool]:
    # Stateless sessions: dropping the cookie is all there is to revoke.
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return {"ok": True}


@router.get("/session", response_model=SessionResponse)
async def current_session(principal: Principal = Depends(require_session)) -> SessionResponse:
    return SessionResponse(user=PublicUser(**principal.as_public()))
