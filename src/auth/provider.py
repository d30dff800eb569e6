"""Identity provider abstraction with the Supabase Auth implementation."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

import httpx
from supabase import AuthApiError, AuthError

from src.auth.errors import CredentialRejected, ProviderUnavailable
from src.config.settings import Settings
from src.db.client import create_public_client, create_scoped_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str


@dataclass(frozen=True)
class TokenPair:
    access: str
    refresh: str


class IdentityProvider(ABC):
    """Operations the session gate and the auth routes need from the provider.

    Implementations raise `CredentialRejected` when the provider refuses a
    token or password, and `ProviderUnavailable` when it cannot answer.
    """

    @abstractmethod
    def get_user(self, access_token: str) -> Identity:
        ...

    @abstractmethod
    def refresh(self, refresh_token: str) -> tuple[Identity, TokenPair]:
        ...

    @abstractmethod
    def sign_in(self, email: str, password: str) -> tuple[Identity, TokenPair]:
        ...

    @abstractmethod
    def update_password(self, tokens: TokenPair, new_password: str) -> None:
        ...

    @abstractmethod
    def public_client(self) -> Any:
        """Anonymous database handle for data readable without a session."""
        ...

    @abstractmethod
    def scoped_client(self, access_token: str) -> Any:
        """Database handle presenting `access_token` as a bearer credential."""
        ...


class SupabaseIdentityProvider(IdentityProvider):
    def __init__(self, settings: Settings):
        self._settings = settings

    def _call(self, operation: Callable[..., Any], *args: Any) -> Any:
        try:
            return operation(*args)
        except AuthApiError as exc:
            if exc.status and (exc.status >= 500 or exc.status == 429):
                logger.warning("Supabase auth returned %s: %s", exc.status, exc.message)
                raise ProviderUnavailable() from exc
            raise CredentialRejected(exc.message) from exc
        except (AuthError, httpx.HTTPError) as exc:
            logger.warning("Supabase auth unreachable: %s", exc)
            raise ProviderUnavailable() from exc

    @staticmethod
    def _pair_from(response: Any) -> tuple[Identity, TokenPair]:
        session = getattr(response, "session", None)
        user = getattr(response, "user", None) or getattr(session, "user", None)
        if session is None or user is None:
            raise CredentialRejected("No session returned")
        if not session.access_token or not session.refresh_token:
            raise ProviderUnavailable("Authentication service returned an incomplete session.")
        return (
            Identity(id=user.id, email=user.email or ""),
            TokenPair(access=session.access_token, refresh=session.refresh_token),
        )

    def get_user(self, access_token: str) -> Identity:
        client = create_public_client(self._settings)
        response = self._call(client.auth.get_user, access_token)
        if response is None or response.user is None:
            raise CredentialRejected("Unknown user")
        return Identity(id=response.user.id, email=response.user.email or "")

    def refresh(self, refresh_token: str) -> tuple[Identity, TokenPair]:
        client = create_public_client(self._settings)
        response = self._call(client.auth.refresh_session, refresh_token)
        return self._pair_from(response)

    def sign_in(self, email: str, password: str) -> tuple[Identity, TokenPair]:
        client = create_public_client(self._settings)
        response = self._call(client.auth.sign_in_with_password, {"email": email, "password": password})
        return self._pair_from(response)

    def update_password(self, tokens: TokenPair, new_password: str) -> None:
        client = create_public_client(self._settings)
        self._call(client.auth.set_session, tokens.access, tokens.refresh)
        self._call(client.auth.update_user, {"password": new_password})

    def public_client(self) -> Any:
        return create_public_client(self._settings)

    def scoped_client(self, access_token: str) -> Any:
        return create_scoped_client(self._settings, access_token)
