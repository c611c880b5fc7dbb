"""
Bulk asset creation. Lives apart from the asset router so it runs under the
stricter bulk rate-limit policy only.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser, get_current_user, get_db
from inventory.core.rate_limit import rate_limit
from inventory.schemas.asset import BulkAssetCreate, BulkCreateResult
from inventory.services import asset_service

router = APIRouter(
    prefix="/assets",
    tags=["assets"],
    dependencies=[Depends(rate_limit("bulk"))],
)


@router.post("/bulk", response_model=BulkCreateResult)
async def bulk_create_assets(
    data: BulkAssetCreate,
    db: AsyncSession = Depends(get_db),
    user: CurrentUser = Depends(get_current_user),
):
    return await asset_service.bulk_create_assets(db, data, user)
