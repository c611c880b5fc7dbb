"""Shapes of Microsoft Graph managedDevice resources as exposed by the API."""
from datetime import datetime

from inventory.schemas.common import CamelModel


class ManagedDevice(CamelModel):
    id: str
    device_name: str | None = None
    serial_number: str | None = None
    operating_system: str | None = None
    os_version: str | None = None
    compliance_state: str | None = None
    management_agent: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    user_principal_name: str | None = None
    enrolled_date_time: datetime | None = None
    last_sync_date_time: datetime | None = None


class DeviceCompliance(CamelModel):
    device_id: str
    compliance_state: str | None = None
    is_compliant: bool
    checked_at: datetime


class OperatingSystemCount(CamelModel):
    operating_system: str | None = None
    count: int


class ComplianceStateCount(CamelModel):
    compliance_state: str
    count: int


class DeviceSync(CamelModel):
    device_id: str
    device_name: str | None = None
    last_sync_date_time: datetime | None = None


class DeviceStatistics(CamelModel):
    total_devices: int
    by_operating_system: list[OperatingSystemCount]
    by_compliance_state: list[ComplianceStateCount]
    last_synced_devices: list[DeviceSync]
    generated_at: datetime
