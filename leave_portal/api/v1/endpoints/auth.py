"""
Sign-in, sign-out and view dispatch.
"""
from typing import Optional

from fastapi import APIRouter, Depends

from leave_portal.api import deps
from leave_portal.models.auth.user_session import UserSession
from leave_portal.schemas.auth import CurrentView, SignInRequest, TokenResponse
from leave_portal.services.auth import AuthenticationService

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/signin", response_model=TokenResponse)
def sign_in(
    payload: SignInRequest,
    auth: AuthenticationService = Depends(deps.get_auth_service),
):
    return deps.unwrap(auth.sign_in(payload.email, payload.password))


@router.post("/signout")
def sign_out(
    _session: UserSession = Depends(deps.get_current_session),
    token: Optional[str] = Depends(deps.get_token),
    auth: AuthenticationService = Depends(deps.get_auth_service),
):
    return {"signed_out": deps.unwrap(auth.sign_out(token))}


@router.get("/me", response_model=CurrentView)
def current_view(
    token: Optional[str] = Depends(deps.get_token),
    auth: AuthenticationService = Depends(deps.get_auth_service),
):
    return auth.resolve_view(token)
