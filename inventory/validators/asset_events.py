from inventory.validators.rules import RuleSet, max_length, required

asset_event_rules = RuleSet(
    required("event_type", "Event type is required"),
    required("description", "Description is required"),
    max_length("description", 500, "Description cannot exceed 500 characters"),
    max_length("old_value", 500),
    max_length("new_value", 500),
)
