"""FastAPI dependencies: settings, the notification sender and the acting user."""

from fastapi import Depends, Request

from storefront.auth.tokens import Principal, decode_token
from storefront.config import Settings
from storefront.exceptions import AuthenticationError, AuthorizationError
from storefront.notifications.sender import NotificationSender


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_notifier(request: Request) -> NotificationSender:
    return request.app.state.notifier


def _bearer_token(request: Request) -> str | None:
    authorization = request.headers.get("Authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token.strip():
        return token.strip()
    return request.cookies.get("token")


def current_principal(request: Request, settings: Settings = Depends(get_settings)) -> Principal:
    token = _bearer_token(request)
    if not token:
        raise AuthenticationError("Please login to access this resource")
    return decode_token(token, settings)


def require_admin(principal: Principal = Depends(current_principal)) -> Principal:
    if not principal.is_admin:
        raise AuthorizationError(f"User role {principal.role} is not authorized to access this route")
    return principal
