"""Entra ID user lookups through Microsoft Graph, used to pick asset owners."""
import logging

from inventory.core.exceptions import BadRequestError, NotFoundError
from inventory.core.odata import create_equality_filter, create_starts_with_filter
from inventory.schemas.user import DirectoryUser
from inventory.services.graph_client import ensure_filter_value, graph_get
from inventory.validators.formats import validate_search_term, validate_user_id, validate_user_principal_name

logger = logging.getLogger(__name__)

USER_FIELDS = [
    "id", "displayName", "userPrincipalName", "mail", "department",
    "officeLocation", "jobTitle", "mobilePhone", "businessPhones", "companyName",
]
SEARCH_MIN_LENGTH = 2
SEARCH_MAX_LENGTH = 100
DEFAULT_SEARCH_TOP = 10
MAX_SEARCH_TOP = 50


def _ensure(result: tuple[bool, str | None]) -> None:
    ok, message = result
    if not ok:
        raise BadRequestError(message)


def _users(payload: dict | None) -> list[DirectoryUser]:
    if not payload:
        return []
    return [DirectoryUser.model_validate(item) for item in payload.get("value", [])]


async def search_users(query: str, top: int = DEFAULT_SEARCH_TOP) -> list[DirectoryUser]:
    """Users whose display name, UPN or mail starts with ``query``."""
    _ensure(validate_search_term(query, SEARCH_MAX_LENGTH))
    query = query.strip()
    if len(query) < SEARCH_MIN_LENGTH:
        raise BadRequestError(f"Search query must be at least {SEARCH_MIN_LENGTH} characters")
    if top < 1 or top > MAX_SEARCH_TOP:
        raise BadRequestError(f"Top parameter must be between 1 and {MAX_SEARCH_TOP}")
    ensure_filter_value(query, "Search query")

    flt = " or ".join(
        create_starts_with_filter(field, query) for field in ("displayName", "userPrincipalName", "mail")
    )
    payload = await graph_get("users", {"$filter": flt, "$top": str(top), "$select": ",".join(USER_FIELDS)})
    users = sorted(_users(payload), key=lambda user: (user.display_name or "").lower())
    logger.info("Found %d users matching %r", len(users), query)
    return users


async def get_user(user_id: str) -> DirectoryUser:
    _ensure(validate_user_id(user_id))
    payload = await graph_get(f"users/{user_id.strip()}", {"$select": ",".join(USER_FIELDS)})
    if payload is None:
        raise NotFoundError(f"User with ID '{user_id}' not found")
    return DirectoryUser.model_validate(payload)


async def get_user_by_upn(upn: str) -> DirectoryUser:
    _ensure(validate_user_principal_name(upn))
    ensure_filter_value(upn, "User Principal Name")

    payload = await graph_get(
        "users",
        {"$filter": create_equality_filter("userPrincipalName", upn.strip()), "$select": ",".join(USER_FIELDS)},
    )
    users = _users(payload)
    if not users:
        raise NotFoundError(f"User with UPN '{upn}' not found")
    return users[0]


async def get_user_manager(user_id: str) -> DirectoryUser:
    _ensure(validate_user_id(user_id))
    payload = await graph_get(f"users/{user_id.strip()}/manager", {"$select": ",".join(USER_FIELDS)})
    # A manager can also be an org contact, which has no user profile
    odata_type = (payload or {}).get("@odata.type", "#microsoft.graph.user")
    if payload is None or odata_type != "#microsoft.graph.user":
        logger.warning("No manager found for user %s", user_id)
        raise NotFoundError(f"No manager found for user with ID '{user_id}'")
    return DirectoryUser.model_validate(payload)
