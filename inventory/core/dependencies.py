from dataclasses import dataclass, field

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inventory.core.exceptions import ForbiddenError, UnauthorizedError
from inventory.core.security import decode_token
from inventory.db.session import get_db  # noqa: F401  re-exported for routers

bearer_scheme = HTTPBearer(auto_error=False)

ADMIN_ROLES = ("Admin", "Global Administrator")


@dataclass
class CurrentUser:
    oid: str
    name: str | None = None
    email: str | None = None
    roles: list[str] = field(default_factory=list)

    @property
    def is_admin(self) -> bool:
        return any(role in ADMIN_ROLES for role in self.roles)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> CurrentUser:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError()

    try:
        payload = await decode_token(credentials.credentials)
    except ValueError:
        raise UnauthorizedError("Invalid or expired token")

    oid = payload.get("oid") or payload.get("sub")
    if not oid:
        raise UnauthorizedError("Token has no subject")

    roles = payload.get("roles") or []
    if isinstance(roles, str):
        roles = [roles]

    return CurrentUser(
        oid=oid,
        name=payload.get("name"),
        email=payload.get("email") or payload.get("preferred_username"),
        roles=list(roles),
    )


async def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise ForbiddenError("Admin access required")
    return user
