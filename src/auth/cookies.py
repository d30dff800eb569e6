"""Session cookie helpers."""

from starlette.responses import Response

from src.auth.provider import TokenPair
from src.config.settings import get_settings


def set_auth_cookies(response: Response, tokens: TokenPair) -> None:
    """Issue both HttpOnly session cookies on `response`."""
    settings = get_settings()
    response.set_cookie(
        key=settings.ACCESS_COOKIE_NAME,
        value=tokens.access,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
        max_age=settings.ACCESS_COOKIE_MAX_AGE,
    )
    response.set_cookie(
        key=settings.REFRESH_COOKIE_NAME,
        value=tokens.refresh,
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite="lax",
        path="/",
        max_age=settings.REFRESH_COOKIE_MAX_AGE,
    )


def clear_auth_cookies(response: Response) -> None:
    settings = get_settings()
    for name in (settings.ACCESS_COOKIE_NAME, settings.REFRESH_COOKIE_NAME):
        response.delete_cookie(
            key=name,
            path="/",
            secure=settings.COOKIE_SECURE,
            httponly=True,
            samesite="lax",
        )
