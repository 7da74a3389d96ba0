from leave_portal.schemas.auth.auth import CurrentView, SignInRequest, TokenResponse, View

__all__ = ["CurrentView", "SignInRequest", "TokenResponse", "View"]
