"""Supabase client construction.

Clients are built per call and never shared between requests: the public
client carries only the anon key, the scoped client additionally presents the
caller's access token so row-level policies apply to every query it issues.
"""

from supabase import Client, ClientOptions, create_client

from src.config.settings import Settings


def _options(headers: dict[str, str] | None = None) -> ClientOptions:
    # No session storage and no background refresh timers: the session gate
    # owns token rotation and every request starts from its own cookies.
    options = ClientOptions(auto_refresh_token=False, persist_session=False)
    if headers:
        options.headers.update(headers)
    return options


def create_public_client(settings: Settings) -> Client:
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_ANON_KEY, options=_options())


def create_scoped_client(settings: Settings, access_token: str) -> Client:
    """Client that forwards `access_token` as a bearer credential on every query."""
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_ANON_KEY,
        options=_options({"Authorization": f"Bearer {access_token}"}),
    )
