from fastapi import APIRouter, Depends

from inventory.core.dependencies import CurrentUser, get_current_user
from inventory.core.rate_limit import rate_limit
from inventory.schemas.user import CurrentUserResponse

router = APIRouter(prefix="/user", tags=["user"], dependencies=[Depends(rate_limit("general"))])


@router.get("/me", response_model=CurrentUserResponse)
async def get_me(user: CurrentUser = Depends(get_current_user)):
    return CurrentUserResponse(
        oid=user.oid,
        name=user.name,
        email=user.email,
        roles=user.roles,
        is_admin=user.is_admin,
    )
