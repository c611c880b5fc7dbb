import logging
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from inventory.core.exceptions import NotFoundError
from inventory.models.asset_template import AssetTemplate
from inventory.schemas.asset_template import AssetTemplateCreate, AssetTemplateUpdate
from inventory.services.mapping import apply_template_update, template_from_create
from inventory.validators.templates import asset_template_rules

logger = logging.getLogger(__name__)


async def list_templates(db: AsyncSession, include_inactive: bool = False) -> list[AssetTemplate]:
    stmt = select(AssetTemplate).order_by(AssetTemplate.template_name)
    if not include_inactive:
        stmt = stmt.where(AssetTemplate.is_active.is_(True))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_template(db: AsyncSession, template_id: uuid.UUID) -> AssetTemplate:
    result = await db.execute(select(AssetTemplate).where(AssetTemplate.id == template_id))
    template = result.scalar_one_or_none()
    if not template:
        raise NotFoundError(f"Asset template with ID {template_id} not found")
    return template


async def create_template(db: AsyncSession, data: AssetTemplateCreate) -> AssetTemplate:
    asset_template_rules.ensure_valid(data)
    template = template_from_create(data)
    db.add(template)
    await db.flush()
    await db.refresh(template)
    logger.info("Created asset template %s (%s)", template.template_name, template.id)
    return template


async def update_template(db: AsyncSession, template_id: uuid.UUID, data: AssetTemplateUpdate) -> AssetTemplate:
    asset_template_rules.ensure_valid(data)
    template = await get_template(db, template_id)
    apply_template_update(template, data)
    await db.flush()
    await db.refresh(template)
    return template


async def delete_template(db: AsyncSession, template_id: uuid.UUID) -> None:
    template = await get_template(db, template_id)
    await db.delete(template)
    await db.flush()
    logger.info("Deleted asset template %s", template_id)
