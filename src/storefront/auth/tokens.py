"""Bearer tokens identifying the acting user.

Account management lives elsewhere; the storefront only verifies HS256
tokens and trusts the identity they carry.
"""

from datetime import UTC, datetime, timedelta
from enum import Enum

from jose import JWTError, jwt
from pydantic import BaseModel

from storefront.config import Settings
from storefront.exceptions import AuthenticationError


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


class Principal(BaseModel):
    id: str
    email: str | None = None
    name: str | None = None
    role: str = Role.CUSTOMER.value

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def issue_token(principal: Principal, settings: Settings, expires_minutes: int | None = None) -> str:
    expire = datetime.now(UTC) + timedelta(minutes=expires_minutes or settings.token_ttl_minutes)
    claims = {
        "sub": principal.id,
        "email": principal.email,
        "name": principal.name,
        "role": principal.role,
        "exp": expire,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str, settings: Settings) -> Principal:
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise AuthenticationError("Invalid or expired token") from None

    if not payload.get("sub"):
        raise AuthenticationError("Invalid or expired token")

    return Principal(
        id=payload["sub"],
        email=payload.get("email"),
        name=payload.get("name"),
        role=payload.get("role") or Role.CUSTOMER.value,
    )
