from fastapi import APIRouter

from inventory.api.v1.asset_bulk import router as asset_bulk_router
from inventory.api.v1.asset_events import router as asset_events_router
from inventory.api.v1.assets import router as assets_router
from inventory.api.v1.asset_types import router as asset_types_router
from inventory.api.v1.csv_import import router as csv_import_router
from inventory.api.v1.asset_templates import router as asset_templates_router
from inventory.api.v1.graph import router as graph_router
from inventory.api.v1.lease_contracts import router as lease_contracts_router
from inventory.api.v1.intune import router as intune_router
from inventory.api.v1.users import router as users_router

router = APIRouter()
router.include_router(asset_bulk_router)
router.include_router(assets_router)
router.include_router(asset_events_router)
router.include_router(asset_types_router)
router.include_router(asset_templates_router)
router.include_router(lease_contracts_router)
router.include_router(csv_import_router)
router.include_router(intune_router)
router.include_router(graph_router)
router.include_router(users_router)
