from leave_portal.services.auth.authentication_service import AuthenticationService

__all__ = ["AuthenticationService"]
