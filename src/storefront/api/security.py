"""Bearer-token authentication and role guards for the HTTP API."""

from dataclasses import dataclass

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from protean.exceptions import ObjectNotFoundError

from storefront.identity.credentials import InvalidTokenError, decode_access_token
from storefront.identity.queries import get_user
from storefront.identity.user import Role
from storefront.utils.logging import add_context

_bearer = HTTPBearer(auto_error=False)

_CHALLENGE = {"WWW-Authenticate": "Bearer"}


@dataclass(frozen=True)
class Principal:
    user_id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN.value


def _unauthorized(message: str) -> HTTPException:
    return HTTPException(status_code=401, detail=message, headers=_CHALLENGE)


async def current_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> Principal:
    if credentials is None or not credentials.credentials:
        raise _unauthorized("Authentication required")
    try:
        claims = decode_access_token(credentials.credentials)
    except InvalidTokenError as exc:
        raise _unauthorized(str(exc)) from exc

    # The account may have been deleted or had its role changed since login
    try:
        user = get_user(claims["sub"])
    except ObjectNotFoundError as exc:
        raise _unauthorized("Account no longer exists") from exc

    principal = Principal(user_id=str(user.id), email=user.email, role=user.role)
    add_context(user_id=principal.user_id)
    return principal


def require_roles(*roles: Role):
    allowed = {role.value for role in roles}

    async def guard(principal: Principal = Depends(current_principal)) -> Principal:
        if principal.role not in allowed:
            raise HTTPException(status_code=403, detail="You do not have permission to access this resource")
        return principal

    return guard


require_admin = require_roles(Role.ADMIN)
require_shopper = require_roles(Role.USER, Role.ADMIN)
