"""Persist rotated session tokens on the outgoing response.

The session dependency stores a rotated pair on `request.state`; writing the
cookies here covers every response of the request, including error responses
and routes that build their own `Response`.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.auth.cookies import set_auth_cookies

ROTATED_TOKENS_STATE = "rotated_tokens"


class SessionCookieMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        rotated = getattr(request.state, ROTATED_TOKENS_STATE, None)
        if rotated is not None:
            set_auth_cookies(response, rotated)
        return response
