# Schemas package
from inventory.schemas.asset import (
    AssetCreate,
    AssetEventCreate,
    AssetEventResponse,
    AssetResponse,
    AssetUpdate,
    BulkAssetCreate,
    BulkCreateResult,
)
from inventory.schemas.asset_template import AssetTemplateCreate, AssetTemplateResponse, AssetTemplateUpdate
from inventory.schemas.asset_type import AssetTypeCreate, AssetTypeResponse, AssetTypeUpdate
from inventory.schemas.common import CamelModel, PagedResponse
from inventory.schemas.intune import DeviceCompliance, ManagedDevice
from inventory.schemas.lease_contract import LeaseContractCreate, LeaseContractResponse, LeaseContractUpdate
from inventory.schemas.user import CurrentUserResponse

__all__ = [
    "AssetCreate",
    "AssetEventCreate",
    "AssetEventResponse",
    "AssetResponse",
    "AssetUpdate",
    "BulkAssetCreate",
    "BulkCreateResult",
    "AssetTemplateCreate",
    "AssetTemplateResponse",
    "AssetTemplateUpdate",
    "AssetTypeCreate",
    "AssetTypeResponse",
    "AssetTypeUpdate",
    "CamelModel",
    "PagedResponse",
    "DeviceCompliance",
    "ManagedDevice",
    "LeaseContractCreate",
    "LeaseContractResponse",
    "LeaseContractUpdate",
    "CurrentUserResponse",
]
