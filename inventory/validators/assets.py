from inventory.validators.rules import (
    RuleSet,
    date_after,
    date_on_or_after,
    in_range,
    max_length,
    required,
)

MAX_BULK_QUANTITY = 100

_dates = RuleSet(
    date_after("warranty_expiry", "purchase_date", "Warranty expiry must be after purchase date"),
    date_on_or_after("installation_date", "purchase_date", "Installation date cannot be before purchase date"),
)

_optional_fields = RuleSet(
    max_length("alias", 200),
    max_length("owner", 200),
    max_length("building", 200),
    max_length("department", 100),
    max_length("job_title", 100),
    max_length("office_location", 100),
    max_length("brand", 100),
    max_length("model", 200),
)

_prefix = RuleSet(
    required("asset_code_prefix", "Asset code prefix is required"),
    max_length("asset_code_prefix", 20, "Asset code prefix cannot exceed 20 characters"),
)

_identity = RuleSet(
    required("asset_name", "Asset name is required"),
    max_length("asset_name", 200, "Asset name cannot exceed 200 characters"),
    required("category", "Category is required"),
    max_length("category", 100, "Category cannot exceed 100 characters"),
)

_serial = RuleSet(
    required("serial_number", "Serial number is required"),
    max_length("serial_number", 100, "Serial number cannot exceed 100 characters"),
)

asset_create_rules = _prefix + _identity + _serial + _optional_fields + _dates

asset_update_rules = _identity + _serial + _optional_fields + _dates

bulk_asset_create_rules = (
    _prefix
    + _identity
    + RuleSet(
        required("serial_number_prefix", "Serial number prefix is required"),
        max_length("serial_number_prefix", 50, "Serial number prefix cannot exceed 50 characters"),
        required("quantity", "Quantity is required"),
        in_range("quantity", 1, MAX_BULK_QUANTITY, f"Quantity must be between 1 and {MAX_BULK_QUANTITY}"),
    )
    + _optional_fields
    + _dates
)
