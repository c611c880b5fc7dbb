import re

from inventory.validators.rules import Rule, RuleSet, max_length, required

_TYPE_CODE_RE = re.compile(r"^[A-Z]{2,10}$")

asset_type_create_rules = RuleSet(
    required("code", "Code is required"),
    Rule(
        "code",
        lambda obj: bool(_TYPE_CODE_RE.match(obj.code)),
        "Code must be 2 to 10 uppercase letters",
        when=lambda obj: bool(obj.code and obj.code.strip()),
    ),
    required("name", "Name is required"),
    max_length("name", 100, "Name cannot exceed 100 characters"),
)

asset_type_update_rules = RuleSet(
    Rule("name", lambda obj: bool(obj.name.strip()), "Name is required", when=lambda obj: obj.name is not None),
    max_length("name", 100, "Name cannot exceed 100 characters"),
)
