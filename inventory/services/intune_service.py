"""Read-only Intune device lookups through Microsoft Graph."""
import logging
from collections import Counter

from inventory.core.exceptions import BadRequestError, NotFoundError
from inventory.core.odata import create_equality_filter, create_starts_with_filter
from inventory.db.base import utcnow
from inventory.schemas.intune import (
    ComplianceStateCount,
    DeviceCompliance,
    DeviceStatistics,
    DeviceSync,
    ManagedDevice,
    OperatingSystemCount,
)
from inventory.services.graph_client import ensure_filter_value, graph_get
from inventory.validators.formats import validate_device_id, validate_search_term, validate_serial_number

logger = logging.getLogger(__name__)

DEVICE_FIELDS = [
    "id", "deviceName", "serialNumber", "manufacturer", "model",
    "operatingSystem", "osVersion", "complianceState", "lastSyncDateTime",
    "enrolledDateTime", "userPrincipalName", "managementAgent",
]
PAGE_SIZE = 999
NAME_MAX_LENGTH = 100
OS_MAX_LENGTH = 50


def _devices(payload: dict | None) -> list[ManagedDevice]:
    if not payload:
        return []
    return [ManagedDevice.model_validate(item) for item in payload.get("value", [])]


async def get_managed_devices() -> list[ManagedDevice]:
    payload = await graph_get(
        "deviceManagement/managedDevices",
        {"$top": str(PAGE_SIZE), "$select": ",".join(DEVICE_FIELDS)},
    )
    devices = _devices(payload)
    logger.info("Retrieved %d managed devices from Intune", len(devices))
    return devices


async def get_device_by_id(device_id: str) -> ManagedDevice:
    ok, message = validate_device_id(device_id)
    if not ok:
        raise BadRequestError(message)

    payload = await graph_get(
        f"deviceManagement/managedDevices/{device_id.strip()}",
        {"$select": ",".join(DEVICE_FIELDS)},
    )
    if payload is None:
        raise NotFoundError(f"Device with ID {device_id} not found in Intune")
    return ManagedDevice.model_validate(payload)


async def get_device_by_serial(serial_number: str) -> ManagedDevice:
    ok, message = validate_serial_number(serial_number)
    if not ok:
        raise BadRequestError(message)
    ensure_filter_value(serial_number, "Serial number")

    payload = await graph_get(
        "deviceManagement/managedDevices",
        {"$filter": create_equality_filter("serialNumber", serial_number), "$select": ",".join(DEVICE_FIELDS)},
    )
    devices = _devices(payload)
    if not devices:
        raise NotFoundError(f"Device with serial number {serial_number} not found in Intune")
    return devices[0]


async def search_devices_by_name(name: str) -> list[ManagedDevice]:
    ok, message = validate_search_term(name, NAME_MAX_LENGTH)
    if not ok:
        raise BadRequestError(message)
    ensure_filter_value(name, "Search term")

    payload = await graph_get(
        "deviceManagement/managedDevices",
        {"$filter": create_starts_with_filter("deviceName", name), "$select": ",".join(DEVICE_FIELDS)},
    )
    return _devices(payload)


async def get_devices_by_os(operating_system: str) -> list[ManagedDevice]:
    ok, message = validate_search_term(operating_system, OS_MAX_LENGTH)
    if not ok:
        raise BadRequestError(message.replace("Search term", "Operating system"))
    ensure_filter_value(operating_system, "Operating system")

    payload = await graph_get(
        "deviceManagement/managedDevices",
        {"$filter": create_equality_filter("operatingSystem", operating_system), "$select": ",".join(DEVICE_FIELDS)},
    )
    return _devices(payload)


async def get_device_compliance(device_id: str) -> DeviceCompliance:
    ok, message = validate_device_id(device_id)
    if not ok:
        raise BadRequestError(message)

    payload = await graph_get(
        f"deviceManagement/managedDevices/{device_id.strip()}",
        {"$select": "id,complianceState"},
    )
    if payload is None:
        raise NotFoundError(f"Device with ID {device_id} not found in Intune")

    state = payload.get("complianceState")
    return DeviceCompliance(
        device_id=device_id.strip(),
        compliance_state=state,
        is_compliant=(state or "").lower() == "compliant",
        checked_at=utcnow(),
    )


async def get_device_statistics() -> DeviceStatistics:
    devices = await get_managed_devices()

    by_os = Counter(device.operating_system for device in devices)
    by_state = Counter(device.compliance_state or "Unknown" for device in devices)
    synced = sorted(
        (device for device in devices if device.last_sync_date_time),
        key=lambda device: device.last_sync_date_time,
        reverse=True,
    )[:10]

    return DeviceStatistics(
        total_devices=len(devices),
        by_operating_system=[OperatingSystemCount(operating_system=os, count=n) for os, n in by_os.most_common()],
        by_compliance_state=[ComplianceStateCount(compliance_state=s, count=n) for s, n in by_state.items()],
        last_synced_devices=[
            DeviceSync(
                device_id=device.id,
                device_name=device.device_name,
                last_sync_date_time=device.last_sync_date_time,
            )
            for device in synced
        ],
        generated_at=utcnow(),
    )
