"""
Entra ID user lookups (Microsoft Graph). Runs under the external rate-limit policy.
"""
from fastapi import APIRouter, Depends, Query

from inventory.core.dependencies import CurrentUser, get_current_user
from inventory.core.rate_limit import rate_limit
from inventory.schemas.user import DirectoryUser
from inventory.services import graph_user_service

router = APIRouter(
    prefix="/graph",
    tags=["graph"],
    dependencies=[Depends(rate_limit("external"))],
)


@router.get("/users/search", response_model=list[DirectoryUser])
async def search_users(
    query: str = Query(""),
    top: int = Query(graph_user_service.DEFAULT_SEARCH_TOP),
    _: CurrentUser = Depends(get_current_user),
):
    return await graph_user_service.search_users(query, top)


@router.get("/users/upn/{upn}", response_model=DirectoryUser)
async def get_user_by_upn(upn: str, _: CurrentUser = Depends(get_current_user)):
    return await graph_user_service.get_user_by_upn(upn)


@router.get("/users/{user_id}", response_model=DirectoryUser)
async def get_user(user_id: str, _: CurrentUser = Depends(get_current_user)):
    return await graph_user_service.get_user(user_id)


@router.get("/users/{user_id}/manager", response_model=DirectoryUser)
async def get_user_manager(user_id: str, _: CurrentUser = Depends(get_current_user)):
    return await graph_user_service.get_user_manager(user_id)
