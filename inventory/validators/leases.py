from inventory.validators.rules import RuleSet, date_after, max_length, non_negative, required

lease_contract_rules = RuleSet(
    required("start_date", "Start date is required"),
    required("end_date", "End date is required"),
    date_after("end_date", "start_date", "End date must be after start date"),
    max_length("vendor", 200, "Vendor cannot exceed 200 characters"),
    max_length("contract_number", 100, "Contract number cannot exceed 100 characters"),
    non_negative("monthly_rate", "Monthly rate cannot be negative"),
    non_negative("total_value", "Total value cannot be negative"),
)
