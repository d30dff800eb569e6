"""Auth endpoints: login, logout, password update, admin password reset."""

import logging
import secrets
import string

from fastapi import APIRouter, Depends, HTTPException, Response
from pydantic import BaseModel, EmailStr, Field
from starlette.concurrency import run_in_threadpool

from src.auth.cookies import clear_auth_cookies, set_auth_cookies
from src.auth.dependencies import CurrentUser, get_identity_provider, get_session, load_profile, require_roles
from src.auth.errors import CredentialRejected
from src.auth.provider import IdentityProvider, TokenPair
from src.auth.session import Session
from src.db.models import ROLE_ADMIN, RPC_ADMIN_RESET_PASSWORD

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])

TEMP_PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*"
TEMP_PASSWORD_LENGTH = 12


# --- Request schemas ---

class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

class UpdatePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    password: str

class ResetPasswordRequest(BaseModel):
    user_id: str = Field(..., min_length=1)


# --- Helpers ---

def generate_temp_password(length: int = TEMP_PASSWORD_LENGTH) -> str:
    return "".join(secrets.choice(TEMP_PASSWORD_ALPHABET) for _ in range(length))


# --- Endpoints ---

@router.post("/auth/login", summary="Login", description="Authenticate with email and password and set the session cookies.")
async def login(body: LoginRequest, response: Response, provider: IdentityProvider = Depends(get_identity_provider)):
    try:
        identity, tokens = await run_in_threadpool(provider.sign_in, body.email, body.password)
    except CredentialRejected:
        raise HTTPException(status_code=401, detail="Invalid email or password")

    set_auth_cookies(response, tokens)
    return {"status": "success", "data": {"user": {"id": identity.id, "email": identity.email}}}


@router.post("/auth/logout", summary="Logout", description="Clear the session cookies.")
async def logout(response: Response):
    clear_auth_cookies(response)
    return {"status": "success", "data": {"message": "Logged out successfully"}}


@router.post("/auth/update-password", summary="Change password", description="Verify the current password, then set a new one.")
async def update_password(
    body: UpdatePasswordRequest,
    session: Session = Depends(get_session),
    provider: IdentityProvider = Depends(get_identity_provider),
):
    if len(body.password) < 6:
        raise HTTPException(status_code=400, detail="The new password must be at least 6 characters long")

    try:
        await run_in_threadpool(provider.sign_in, session.identity.email, body.current_password)
    except CredentialRejected:
        raise HTTPException(status_code=401, detail="Current password is incorrect")

    tokens = TokenPair(access=session.access_token, refresh=session.refresh_token or "")
    try:
        await run_in_threadpool(provider.update_password, tokens, body.password)
    except CredentialRejected as exc:
        raise HTTPException(status_code=400, detail=str(exc) or "Password update rejected")

    return {"status": "success", "data": {"message": "Password updated successfully"}}


@router.post("/admin/reset-password", summary="Reset a user's password", description="Admin only. Sets a random temporary password for the target user.")
async def reset_password(body: ResetPasswordRequest, admin: CurrentUser = Depends(require_roles(ROLE_ADMIN))):
    target = load_profile(admin.db, body.user_id)
    if not target or not target.get("email"):
        raise HTTPException(status_code=404, detail="User not found")

    temp_password = generate_temp_password()
    logger.info("Admin %s resetting password for user %s", admin.id, body.user_id)
    result = admin.db.rpc(
        RPC_ADMIN_RESET_PASSWORD,
        {"target_user_id": body.user_id, "new_password": temp_password},
    ).execute()

    outcome = result.data
    if isinstance(outcome, dict) and not outcome.get("success", True):
        logger.error("Password reset failed for user %s: %s", body.user_id, outcome.get("error"))
        raise HTTPException(status_code=500, detail=outcome.get("error") or "Password reset failed")

    return {
        "status": "success",
        "data": {
            "temp_password": temp_password,
            "email": target["email"],
            "message": "Password reset successfully",
        },
    }
