from inventory.validators.rules import RuleSet, date_after, date_on_or_after, max_length, required

asset_template_rules = RuleSet(
    required("template_name", "Template name is required"),
    max_length("template_name", 100, "Template name cannot exceed 100 characters"),
    max_length("asset_name", 200),
    required("category", "Category is required"),
    max_length("category", 100, "Category cannot exceed 100 characters"),
    max_length("brand", 100),
    max_length("model", 200),
    max_length("owner", 200),
    max_length("building", 200),
    max_length("department", 100),
    max_length("office_location", 100),
    date_after("warranty_expiry", "purchase_date", "Warranty expiry must be after purchase date"),
    date_on_or_after("installation_date", "purchase_date", "Installation date cannot be before purchase date"),
)
