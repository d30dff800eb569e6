"""Session failure taxonomy.

`Unauthenticated` and `SessionExpired` both end up as 401 but carry distinct
messages so the client can choose between a silent retry and a login form.
`ProviderUnavailable` is a server-side failure and maps to 500.
"""


class SessionError(Exception):
    status_code: int = 401
    error_type: str = "authentication_error"
    message: str = "Authentication failed."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class Unauthenticated(SessionError):
    error_type = "unauthenticated"
    message = "Please sign in."


class SessionExpired(SessionError):
    error_type = "session_expired"
    message = "Session expired, please sign in again."


class ProviderUnavailable(SessionError):
    status_code = 500
    error_type = "provider_unavailable"
    message = "Authentication service is unavailable."


class CredentialRejected(Exception):
    """Raised by identity providers when a token or password is refused."""
