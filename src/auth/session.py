"""Session gate: request cookies -> identity + scoped database handle.

Resolution is a linear procedure. The access token is tried first; a
rejection there is not fatal and falls through to the refresh token, whose
exchange yields a rotated pair the caller must persist. The gate performs no
authorization: the scoped handle forwards the resolved access token and the
table store applies its row-level policies.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from src.auth.errors import (
    CredentialRejected,
    ProviderUnavailable,
    SessionError,
    SessionExpired,
    Unauthenticated,
)
from src.auth.provider import Identity, IdentityProvider, TokenPair

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "sb-access-token"
REFRESH_COOKIE = "sb-refresh-token"


@dataclass(frozen=True)
class Session:
    identity: Identity
    client: Any
    access_token: str
    refresh_token: str | None = None
    rotated: TokenPair | None = None


# --- Step results ---

@dataclass(frozen=True)
class Resolved:
    identity: Identity
    access_token: str
    refresh_token: str | None
    rotated: TokenPair | None = None


@dataclass(frozen=True)
class NeedsRefresh:
    refresh_token: str


@dataclass(frozen=True)
class Failed:
    error: SessionError


StepResult = Resolved | NeedsRefresh | Failed


def _provider_call(operation, *args):
    """Run a provider operation, keeping rejections apart from outages."""
    try:
        return operation(*args)
    except (CredentialRejected, ProviderUnavailable):
        raise
    except Exception as exc:
        logger.warning("Identity provider failed unexpectedly: %r", exc)
        raise ProviderUnavailable() from exc


def resolve_access(provider: IdentityProvider, access_token: str | None, refresh_token: str | None) -> StepResult:
    if access_token:
        try:
            identity = _provider_call(provider.get_user, access_token)
            return Resolved(identity, access_token, refresh_token)
        except CredentialRejected as exc:
            logger.info("Access token rejected, falling back to refresh: %s", exc)

    if refresh_token:
        return NeedsRefresh(refresh_token)
    return Failed(Unauthenticated())


def resolve_refresh(provider: IdentityProvider, refresh_token: str) -> StepResult:
    try:
        identity, pair = _provider_call(provider.refresh, refresh_token)
    except CredentialRejected as exc:
        logger.info("Refresh token rejected: %s", exc)
        return Failed(SessionExpired())
    logger.info("Rotated session tokens for user %s", identity.id)
    return Resolved(identity, pair.access, pair.refresh, rotated=pair)


def resolve_session(cookies: Mapping[str, str], provider: IdentityProvider,
                    access_cookie: str = ACCESS_COOKIE, refresh_cookie: str = REFRESH_COOKIE) -> Session:
    """Resolve the caller's session from request cookies.

    Raises `Unauthenticated` when no usable credential exists, `SessionExpired`
    when the refresh exchange is rejected and `ProviderUnavailable` when the
    provider cannot be reached or answers with something unusable.
    """
    access_token = cookies.get(access_cookie) or None
    refresh_token = cookies.get(refresh_cookie) or None
    if not access_token and not refresh_token:
        raise Unauthenticated()

    result = resolve_access(provider, access_token, refresh_token)
    if isinstance(result, NeedsRefresh):
        result = resolve_refresh(provider, result.refresh_token)
    if isinstance(result, Failed):
        raise result.error

    client = _provider_call(provider.scoped_client, result.access_token)
    return Session(
        identity=result.identity,
        client=client,
        access_token=result.access_token,
        refresh_token=result.refresh_token,
        rotated=result.rotated,
    )
