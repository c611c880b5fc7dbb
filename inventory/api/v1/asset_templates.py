from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.dependencies import CurrentUser, get_current_user, get_db
from inventory.core.rate_limit import rate_limit
from inventory.schemas.asset_template import AssetTemplateCreate, AssetTemplateResponse, AssetTemplateUpdate
from inventory.services import template_service
from inventory.services.mapping import template_to_response

router = APIRouter(
    prefix="/asset-templates",
    tags=["asset-templates"],
    dependencies=[Depends(rate_limit("general"))],
)


@router.get("", response_model=list[AssetTemplateResponse])
async def list_templates(
    include_inactive: bool = Query(False, alias="includeInactive"),
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return [template_to_response(t) for t in await template_service.list_templates(db, include_inactive)]


@router.get("/{template_id}", response_model=AssetTemplateResponse)
async def get_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return template_to_response(await template_service.get_template(db, template_id))


@router.post("", response_model=AssetTemplateResponse, status_code=201)
async def create_template(
    data: AssetTemplateCreate,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return template_to_response(await template_service.create_template(db, data))


@router.put("/{template_id}", response_model=AssetTemplateResponse)
async def update_template(
    template_id: UUID,
    data: AssetTemplateUpdate,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    return template_to_response(await template_service.update_template(db, template_id, data))


@router.delete("/{template_id}", status_code=204)
async def delete_template(
    template_id: UUID,
    db: AsyncSession = Depends(get_db),
    _: CurrentUser = Depends(get_current_user),
):
    await template_service.delete_template(db, template_id)
    return Response(status_code=204)
