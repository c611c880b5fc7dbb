from inventory.schemas.common import CamelModel


class CurrentUserResponse(CamelModel):
    oid: str
    name: str | None = None
    email: str | None = None
    roles: list[str]
    is_admin: bool


class DirectoryUser(CamelModel):
    """An Entra ID user as returned by Microsoft Graph ``/users``."""

    id: str
    display_name: str | None = None
    user_principal_name: str | None = None
    mail: str | None = None
    department: str | None = None
    office_location: str | None = None
    job_title: str | None = None
    mobile_phone: str | None = None
    business_phones: list[str] | None = None
    company_name: str | None = None
