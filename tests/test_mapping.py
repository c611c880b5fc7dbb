import uuid
from datetime import date

import pytest

from inventory.core.exceptions import MappingError
from inventory.models.asset import Asset, AssetStatus
from inventory.models.asset_template import AssetTemplate
from inventory.models.lease_contract import LeaseContract, LeaseStatus
from inventory.schemas.asset import AssetCreate, AssetUpdate
from inventory.schemas.lease_contract import LeaseContractCreate
from inventory.services.mapping import (
    MAX_ALIAS_LENGTH,
    apply_asset_update,
    apply_template_defaults,
    asset_from_create,
    asset_to_response,
    generate_alias,
    lease_from_create,
    parse_asset_status,
    parse_lease_status,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("InGebruik", AssetStatus.IN_GEBRUIK),
        ("ingebruik", AssetStatus.IN_GEBRUIK),
        ("DEFECT", AssetStatus.DEFECT),
        ("UitDienst", AssetStatus.UIT_DIENST),
        ("nonsense", AssetStatus.STOCK),
        (None, AssetStatus.STOCK),
    ],
)
def test_parse_asset_status(value, expected):
    assert parse_asset_status(value) is expected


def test_parse_lease_status_is_strict():
    assert parse_lease_status("expiring") is LeaseStatus.EXPIRING
    assert parse_lease_status(None) is LeaseStatus.ACTIVE
    with pytest.raises(ValueError):
        parse_lease_status("Paused")


def test_generate_alias_skips_blanks():
    assert generate_alias("Laptop", "Jan Peeters", "Dell", "Latitude 5440") == "Laptop-Jan Peeters-Dell-Latitude 5440"
    assert generate_alias("Laptop", None, " ", "X1") == "Laptop-X1"
    assert generate_alias(None, None, None, None) is None


def test_generate_alias_fits_the_alias_column():
    alias = generate_alias("Laptop", "O" * 200, "B" * 100, "M" * 200)
    assert len(alias) == MAX_ALIAS_LENGTH
    assert alias.startswith("Laptop-OOO")

    alias = generate_alias("Laptop", "O" * 192, "Dell", None)
    assert not alias.endswith("-")


def _asset() -> Asset:
    asset = asset_from_create(
        AssetCreate(asset_name=" Laptop ", category="Computing", serial_number=" SN-1 ", owner="", brand="Dell"),
        "LAP-26-DELL-00001",
        None,
        "Laptop-Dell",
    )
    asset.id = uuid.uuid4()
    asset.row_version = 1
    return asset


def test_asset_from_create_trims_and_defaults():
    asset = _asset()
    assert asset.asset_code == "LAP-26-DELL-00001"
    assert asset.asset_name == "Laptop"
    assert asset.serial_number == "SN-1"
    assert asset.owner is None
    assert asset.alias == "Laptop-Dell"
    assert asset.status is AssetStatus.STOCK
    assert asset.is_dummy is False


def test_apply_asset_update_never_touches_identity():
    asset = _asset()
    original_id = asset.id
    apply_asset_update(
        asset,
        AssetUpdate(asset_name="Renamed", category="Computing", serial_number="SN-2", status="Defect"),
    )
    assert asset.id == original_id
    assert asset.asset_code == "LAP-26-DELL-00001"
    assert asset.asset_name == "Renamed"
    assert asset.status is AssetStatus.DEFECT


def test_asset_to_response_uses_enum_value():
    response = asset_to_response(_asset())
    assert response.status == "Stock"
    assert response.model_dump(by_alias=True)["assetCode"] == "LAP-26-DELL-00001"


def test_asset_to_response_rejects_none():
    with pytest.raises(MappingError):
        asset_to_response(None)


def test_template_defaults_fill_only_empty_fields():
    template = AssetTemplate(
        template_name="Standard laptop",
        asset_name="Dell Latitude",
        category="Computing",
        brand="Dell",
        model="Latitude 5440",
        purchase_date=date(2025, 1, 1),
    )
    request = AssetCreate(asset_name="Custom name", brand="  ")
    apply_template_defaults(request, template)
    assert request.asset_name == "Custom name"
    assert request.category == "Computing"
    assert request.brand == "Dell"
    assert request.purchase_date == date(2025, 1, 1)


def test_lease_from_create():
    lease = lease_from_create(
        LeaseContractCreate(start_date=date(2025, 1, 1), end_date=date(2027, 1, 1), vendor=" Realdolmen ")
    )
    assert isinstance(lease, LeaseContract)
    assert lease.vendor == "Realdolmen"
    assert lease.status is LeaseStatus.ACTIVE


def test_lease_is_active_rules():
    lease = LeaseContract(start_date=date(2025, 1, 1), end_date=date(2025, 12, 31), status=LeaseStatus.ACTIVE)
    assert lease.is_active_on(date(2025, 6, 1))
    assert not lease.is_active_on(date(2026, 1, 1))
    lease.status = LeaseStatus.TERMINATED
    assert not lease.is_active_on(date(2025, 6, 1))
    lease.is_active_override = True
    assert lease.is_active_on(date(2030, 1, 1))
