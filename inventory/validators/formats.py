"""
Format validators for user-supplied identifiers.

Each validator returns ``(is_valid, error_message)``; expected failures never
raise. Callers turn a failure into a 400.
"""
import re
import uuid

PREFIX_MAX_LENGTH = 20
ASSET_CODE_MAX_LENGTH = 50
SERIAL_NUMBER_MAX_LENGTH = 100
DEVICE_ID_MAX_LENGTH = 100
DEFAULT_SEARCH_MAX_LENGTH = 100
UPN_MAX_LENGTH = 256

_PREFIX_RE = re.compile(r"^[A-Z0-9]+$")
_ASSET_CODE_RE = re.compile(r"^(?:DUM-)?[A-Z]{2,10}-\d{2}-[A-Z0-9]{1,4}-\d{5}$", re.IGNORECASE)
_SERIAL_FORBIDDEN = set("<>'\"")
_SEARCH_FORBIDDEN = ("--", ";", "/*", "*/", "xp_", "exec(")
_UPN_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

ValidationResult = tuple[bool, str | None]


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_prefix(prefix: str | None) -> ValidationResult:
    if _is_blank(prefix):
        return False, "Prefix is required"
    if len(prefix) > PREFIX_MAX_LENGTH:
        return False, f"Prefix cannot exceed {PREFIX_MAX_LENGTH} characters"
    if not _PREFIX_RE.match(prefix):
        return False, "Prefix must contain only uppercase letters and numbers"
    return True, None


def validate_asset_code(code: str | None) -> ValidationResult:
    if _is_blank(code):
        return False, "Asset code is required"
    if len(code) > ASSET_CODE_MAX_LENGTH:
        return False, f"Asset code cannot exceed {ASSET_CODE_MAX_LENGTH} characters"
    if not _ASSET_CODE_RE.match(code):
        return False, "Asset code has an invalid format"
    return True, None


def validate_serial_number(serial_number: str | None) -> ValidationResult:
    if _is_blank(serial_number):
        return False, "Serial number is required"
    if len(serial_number) > SERIAL_NUMBER_MAX_LENGTH:
        return False, f"Serial number cannot exceed {SERIAL_NUMBER_MAX_LENGTH} characters"
    if any(ch in _SERIAL_FORBIDDEN for ch in serial_number):
        return False, "Serial number contains invalid characters"
    return True, None


def validate_device_id(device_id: str | None) -> ValidationResult:
    if _is_blank(device_id):
        return False, "Device ID is required"
    if len(device_id) > DEVICE_ID_MAX_LENGTH:
        return False, "Device ID is too long"
    try:
        uuid.UUID(device_id.strip())
    except ValueError:
        return False, "Device ID must be a valid GUID"
    return True, None


def validate_search_term(term: str | None, max_length: int = DEFAULT_SEARCH_MAX_LENGTH) -> ValidationResult:
    if _is_blank(term):
        return False, "Search term is required"
    if len(term) > max_length:
        return False, f"Search term cannot exceed {max_length} characters"
    lowered = term.lower()
    if any(token in lowered for token in _SEARCH_FORBIDDEN):
        return False, "Search term contains invalid characters"
    return True, None


def validate_user_id(user_id: str | None) -> ValidationResult:
    if _is_blank(user_id):
        return False, "User ID is required"
    try:
        uuid.UUID(user_id.strip())
    except ValueError:
        return False, "User ID must be a valid GUID"
    return True, None


def validate_user_principal_name(upn: str | None) -> ValidationResult:
    if _is_blank(upn):
        return False, "User Principal Name is required"
    if len(upn) > UPN_MAX_LENGTH:
        return False, f"User Principal Name cannot exceed {UPN_MAX_LENGTH} characters"
    if not _UPN_RE.match(upn.strip()):
        return False, "User Principal Name must look like an email address"
    return True, None
