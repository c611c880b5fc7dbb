from datetime import date
from decimal import Decimal

import pytest

from inventory.core.exceptions import ValidationFailedError
from inventory.schemas.asset import AssetCreate, BulkAssetCreate
from inventory.schemas.lease_contract import LeaseContractCreate
from inventory.validators.assets import asset_create_rules, bulk_asset_create_rules
from inventory.validators.leases import lease_contract_rules
from inventory.validators.rules import RuleSet, ValidationFailure, max_length, required


def _valid_asset(**overrides) -> AssetCreate:
    data = {
        "asset_code_prefix": "LAP",
        "asset_name": "Dell Latitude",
        "category": "Computing",
        "serial_number": "SN-1",
    }
    data.update(overrides)
    return AssetCreate(**data)


def test_valid_asset_has_no_failures():
    assert asset_create_rules.validate(_valid_asset()) == []


def test_all_failures_are_reported_at_once():
    failures = asset_create_rules.validate(AssetCreate())
    fields = {f.field for f in failures}
    assert {"assetCodePrefix", "assetName", "category", "serialNumber"} <= fields


def test_max_length_uses_camel_case_field_names():
    failures = asset_create_rules.validate(_valid_asset(job_title="x" * 101))
    assert failures == [ValidationFailure("jobTitle", "Job title cannot exceed 100 characters")]


def test_date_rules_only_apply_when_both_dates_present():
    assert asset_create_rules.validate(_valid_asset(warranty_expiry=date(2020, 1, 1))) == []


def test_warranty_must_be_after_purchase():
    asset = _valid_asset(purchase_date=date(2025, 1, 1), warranty_expiry=date(2025, 1, 1))
    failures = asset_create_rules.validate(asset)
    assert [f.field for f in failures] == ["warrantyExpiry"]


def test_installation_may_be_on_purchase_day():
    asset = _valid_asset(purchase_date=date(2025, 1, 1), installation_date=date(2025, 1, 1))
    assert asset_create_rules.validate(asset) == []
    asset = _valid_asset(purchase_date=date(2025, 1, 2), installation_date=date(2025, 1, 1))
    assert [f.field for f in asset_create_rules.validate(asset)] == ["installationDate"]


@pytest.mark.parametrize("quantity, ok", [(0, False), (1, True), (100, True), (101, False)])
def test_bulk_quantity_range(quantity, ok):
    request = BulkAssetCreate(
        asset_code_prefix="LAP",
        asset_name="Laptop",
        category="Computing",
        serial_number_prefix="BATCH",
        quantity=quantity,
    )
    assert (bulk_asset_create_rules.validate(request) == []) is ok


def test_lease_rules():
    lease = LeaseContractCreate(start_date=date(2025, 1, 1), end_date=date(2025, 1, 1), monthly_rate=Decimal("-1"))
    fields = [f.field for f in lease_contract_rules.validate(lease)]
    assert fields == ["endDate", "monthlyRate"]


def test_ensure_valid_raises_with_failures():
    rules = RuleSet(required("asset_name"), max_length("category", 3))
    with pytest.raises(ValidationFailedError) as exc_info:
        rules.ensure_valid(_valid_asset(asset_name=" "))
    assert [f.to_dict() for f in exc_info.value.failures] == [
        {"field": "assetName", "message": "Asset name is required"},
        {"field": "category", "message": "Category cannot exceed 3 characters"},
    ]
