from inventory.models.asset_type import AssetType, DEFAULT_ASSET_TYPES
from inventory.models.asset import Asset, AssetStatus
from inventory.models.asset_template import AssetTemplate
from inventory.models.lease_contract import LeaseContract, LeaseStatus
from inventory.models.asset_event import AssetEvent, AssetEventType

__all__ = [
    "AssetType", "DEFAULT_ASSET_TYPES",
    "Asset", "AssetStatus",
    "AssetTemplate",
    "LeaseContract", "LeaseStatus",
    "AssetEvent", "AssetEventType",
]
