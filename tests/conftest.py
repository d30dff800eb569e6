"""Shared test fixtures: in-memory table store, stub identity provider, app client."""

import os
import re
import threading
import uuid
from dataclasses import dataclass
from typing import Any

os.environ.setdefault("SUPABASE_URL", "http://supabase.test")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")

import pytest
from fastapi.testclient import TestClient

from src.auth.errors import CredentialRejected, ProviderUnavailable
from src.auth.provider import Identity, IdentityProvider, TokenPair
from src.main import app

ACCESS_COOKIE = "sb-access-token"
REFRESH_COOKIE = "sb-refresh-token"


# --- Fake table store ---

@dataclass
class FakeResult:
    data: Any
    count: int | None = None


def _like(pattern: str, value: Any) -> bool:
    if value is None:
        return False
    parts, escaped = [], False
    for c in pattern:
        if escaped:
            parts.append(re.escape(c))
            escaped = False
        elif c == "\\":
            escaped = True
        else:
            parts.append(".*" if c == "%" else "." if c == "_" else re.escape(c))
    regex = "".join(parts)
    return re.fullmatch(regex, str(value), flags=re.IGNORECASE | re.DOTALL) is not None


class FakeQuery:
    """Chainable query builder mimicking the PostgREST calls the repositories make."""

    def __init__(self, store: "FakeTableStore", name: str):
        self._store = store
        self._name = name
        self._action = "select"
        self._payload: Any = None
        self._filters: list = []
        self._order: tuple[str, bool] | None = None
        self._limit: int | None = None

    def select(self, columns: str = "*", count: str | None = None):
        return self

    def insert(self, rows):
        self._action, self._payload = "insert", rows
        return self

    def update(self, data: dict):
        self._action, self._payload = "update", data
        return self

    def delete(self):
        self._action = "delete"
        return self

    def eq(self, column: str, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def gte(self, column: str, value):
        self._filters.append(lambda row: row.get(column) is not None and str(row[column]) >= str(value))
        return self

    def lte(self, column: str, value):
        self._filters.append(lambda row: row.get(column) is not None and str(row[column]) <= str(value))
        return self

    def ilike(self, column: str, pattern: str):
        self._filters.append(lambda row: _like(pattern, row.get(column)))
        return self

    def or_(self, expression: str):
        clauses = []
        for clause in expression.split(","):
            column, operator, value = clause.split(".", 2)
            assert operator == "ilike", f"unsupported or_ operator {operator}"
            clauses.append((column, value))
        self._filters.append(lambda row: any(_like(value, row.get(column)) for column, value in clauses))
        return self

    def order(self, column: str, desc: bool = False):
        self._order = (column, desc)
        return self

    def limit(self, size: int):
        self._limit = size
        return self

    def _matches(self, row: dict) -> bool:
        return all(check(row) for check in self._filters)

    def execute(self) -> FakeResult:
        rows = self._store.tables.setdefault(self._name, [])

        if self._action == "insert":
            payload = self._payload if isinstance(self._payload, list) else [self._payload]
            inserted = []
            for item in payload:
                row = {"id": uuid.uuid4().hex, "created_at": self._store.next_timestamp(), **item}
                rows.append(row)
                inserted.append(dict(row))
            return FakeResult(inserted)

        matched = [row for row in rows if self._matches(row)]
        if self._action == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResult([dict(row) for row in matched])
        if self._action == "delete":
            self._store.tables[self._name] = [row for row in rows if not self._matches(row)]
            return FakeResult([dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched.sort(key=lambda row: (row.get(column) is None, str(row.get(column) or "")), reverse=desc)
        if self._limit is not None:
            matched = matched[: self._limit]
        return FakeResult([dict(row) for row in matched], count=len(matched))


class FakeRpc:
    def __init__(self, handler, params: dict):
        self._handler = handler
        self._params = params

    def execute(self) -> FakeResult:
        return FakeResult(self._handler(self._params))


class FakeTableStore:
    def __init__(self):
        self.tables: dict[str, list[dict]] = {}
        self.rpc_handlers: dict[str, Any] = {}
        self.rpc_calls: list[tuple[str, dict]] = []
        self._clock = 0

    def next_timestamp(self) -> str:
        self._clock += 1
        return f"2025-01-01T00:00:{self._clock:02d}+00:00"

    def seed(self, name: str, *rows: dict) -> list[dict]:
        stored = [{"id": uuid.uuid4().hex, **row} for row in rows]
        self.tables.setdefault(name, []).extend(stored)
        return stored

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        self.rpc_calls.append((name, params))
        return FakeRpc(self.rpc_handlers.get(name, lambda p: {"success": True}), params)


class ScopedHandle:
    """Table store view remembering the bearer token it was opened with."""

    def __init__(self, store: FakeTableStore, access_token: str):
        self.store = store
        self.access_token = access_token

    def table(self, name: str) -> FakeQuery:
        return self.store.table(name)

    def rpc(self, name: str, params: dict) -> FakeRpc:
        return self.store.rpc(name, params)


# --- Stub identity provider ---

class StubIdentityProvider(IdentityProvider):
    """In-memory provider. Refresh tokens are single use, like Supabase's."""

    def __init__(self, store: FakeTableStore | None = None):
        self.store = store or FakeTableStore()
        self.access_tokens: dict[str, Identity] = {}
        self.refresh_tokens: dict[str, Identity] = {}
        self.passwords: dict[str, tuple[str, Identity]] = {}
        self.outage = False
        self.refresh_calls = 0
        self.updated_passwords: list[tuple[TokenPair, str]] = []
        self._lock = threading.Lock()

    def add_user(self, email: str, password: str = "Secret123", user_id: str | None = None) -> tuple[Identity, TokenPair]:
        identity = Identity(id=user_id or uuid.uuid4().hex, email=email)
        self.passwords[email] = (password, identity)
        return identity, self.issue(identity)

    def issue(self, identity: Identity) -> TokenPair:
        pair = TokenPair(access=f"at-{uuid.uuid4().hex}", refresh=f"rt-{uuid.uuid4().hex}")
        self.access_tokens[pair.access] = identity
        self.refresh_tokens[pair.refresh] = identity
        return pair

    def expire(self, access_token: str) -> None:
        self.access_tokens.pop(access_token, None)

    def get_user(self, access_token: str) -> Identity:
        if self.outage:
            raise ProviderUnavailable()
        identity = self.access_tokens.get(access_token)
        if identity is None:
            raise CredentialRejected("invalid JWT")
        return identity

    def refresh(self, refresh_token: str) -> tuple[Identity, TokenPair]:
        if self.outage:
            raise ProviderUnavailable()
        with self._lock:
            self.refresh_calls += 1
            identity = self.refresh_tokens.pop(refresh_token, None)
        if identity is None:
            raise CredentialRejected("Invalid Refresh Token: Already Used")
        return identity, self.issue(identity)

    def sign_in(self, email: str, password: str) -> tuple[Identity, TokenPair]:
        if self.outage:
            raise ProviderUnavailable()
        known = self.passwords.get(email)
        if known is None or known[0] != password:
            raise CredentialRejected("Invalid login credentials")
        return known[1], self.issue(known[1])

    def update_password(self, tokens: TokenPair, new_password: str) -> None:
        identity = self.access_tokens.get(tokens.access)
        if identity is None:
            raise CredentialRejected("invalid JWT")
        self.updated_passwords.append((tokens, new_password))
        self.passwords[identity.email] = (new_password, identity)

    def public_client(self) -> Any:
        return self.store

    def scoped_client(self, access_token: str) -> Any:
        return ScopedHandle(self.store, access_token)


# --- Helpers ---

def cookie_header(tokens: TokenPair) -> dict[str, str]:
    return {"Cookie": f"{ACCESS_COOKIE}={tokens.access}; {REFRESH_COOKIE}={tokens.refresh}"}


def set_cookies(response) -> dict[str, str]:
    """Map cookie name -> raw Set-Cookie header for every cookie on `response`."""
    cookies = {}
    for header in response.headers.get_list("set-cookie"):
        name = header.split("=", 1)[0]
        cookies[name] = header
    return cookies


def cookie_value(set_cookie_header: str) -> str:
    return set_cookie_header.split(";", 1)[0].split("=", 1)[1]


# --- Fixtures ---

@pytest.fixture
def store():
    return FakeTableStore()


@pytest.fixture
def provider(store):
    return StubIdentityProvider(store)


@pytest.fixture
def client(provider):
    previous = getattr(app.state, "identity_provider", None)
    app.state.identity_provider = provider
    yield TestClient(app)
    app.state.identity_provider = previous


def _make_user(provider: StubIdentityProvider, store: FakeTableStore, role: str, email: str, **profile):
    identity, tokens = provider.add_user(email)
    store.seed("profiles", {"id": identity.id, "email": email, "role": role, **profile})
    return identity, tokens


@pytest.fixture
def commercial(provider, store):
    return _make_user(provider, store, "commercial", "alice@example.com", nom="Martin", prenom="Alice")


@pytest.fixture
def other_commercial(provider, store):
    return _make_user(provider, store, "commercial", "bob@example.com", nom="Durand", prenom="Bob")


@pytest.fixture
def admin(provider, store):
    return _make_user(provider, store, "admin", "admin@example.com", nom="Admin", prenom="Root")


@pytest.fixture
def consultant(provider, store):
    return _make_user(provider, store, "consultant", "carla@example.com", nom="Petit", prenom="Carla")


@pytest.fixture
def commercial_headers(commercial):
    return cookie_header(commercial[1])


@pytest.fixture
def admin_headers(admin):
    return cookie_header(admin[1])
