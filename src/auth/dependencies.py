"""Auth dependencies for FastAPI route injection."""

import asyncio
import logging
import threading
from dataclasses import dataclass
from typing import Any

from fastapi import Depends, HTTPException, Request

from src.auth.errors import ProviderUnavailable
from src.auth.provider import IdentityProvider
from src.auth.session import Session, resolve_session
from src.config.settings import get_settings
from src.db.models import PROFILES, ROLE_ADMIN
from src.middleware.session_cookies import ROTATED_TOKENS_STATE

logger = logging.getLogger(__name__)


@dataclass
class CurrentUser:
    id: str
    email: str
    role: str | None
    nom: str | None = None
    prenom: str | None = None
    telephone: str | None = None
    db: Any = None

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def display_name(self) -> str:
        return f"{self.prenom or ''} {self.nom or ''}".strip() or self.email


def get_identity_provider(request: Request) -> IdentityProvider:
    """The provider is built once at startup and stored on `app.state`."""
    return request.app.state.identity_provider


async def get_session(
    request: Request,
    provider: IdentityProvider = Depends(get_identity_provider),
) -> Session:
    """FastAPI dependency: run the session gate on the request cookies."""
    settings = get_settings()
    abandoned = threading.Event()

    def gate() -> Session:
        session = resolve_session(
            request.cookies, provider, settings.ACCESS_COOKIE_NAME, settings.REFRESH_COOKIE_NAME
        )
        # The refresh token was spent but the new pair never reaches the client,
        # whose next request will fail with SessionExpired.
        if abandoned.is_set() and session.rotated is not None:
            logger.warning(
                "Tokens of user %s rotated after the session gate timed out; the new pair was dropped",
                session.identity.id,
            )
        return session

    try:
        # Executor future: a timeout returns without waiting on the worker thread
        session = await asyncio.wait_for(
            asyncio.get_running_loop().run_in_executor(None, gate),
            timeout=settings.AUTH_TIMEOUT_SECONDS,
        )
    except asyncio.TimeoutError as exc:
        abandoned.set()
        logger.warning("Session resolution timed out after %ss", settings.AUTH_TIMEOUT_SECONDS)
        raise ProviderUnavailable() from exc

    if session.rotated is not None:
        setattr(request.state, ROTATED_TOKENS_STATE, session.rotated)
    request.state.user_id = session.identity.id
    return session


def get_public_db(provider: IdentityProvider = Depends(get_identity_provider)) -> Any:
    return provider.public_client()


def load_profile(db: Any, user_id: str) -> dict | None:
    result = (
        db.table(PROFILES)
        .select("id, email, nom, prenom, role, telephone")
        .eq("id", user_id)
        .execute()
    )
    return result.data[0] if result.data else None


async def get_current_user(session: Session = Depends(get_session)) -> CurrentUser:
    """Resolved identity enriched with the caller's profile row."""
    profile = load_profile(session.client, session.identity.id) or {}
    return CurrentUser(
        id=session.identity.id,
        email=profile.get("email") or session.identity.email,
        role=profile.get("role"),
        nom=profile.get("nom"),
        prenom=profile.get("prenom"),
        telephone=profile.get("telephone"),
        db=session.client,
    )


def require_roles(*roles: str):
    """Dependency factory restricting a route to the given profile roles."""

    async def checker(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if user.role not in roles:
            raise HTTPException(status_code=403, detail="You do not have permission to perform this action")
        return user

    return checker
