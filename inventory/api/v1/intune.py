"""
Intune device lookups (Microsoft Graph). Runs under the external rate-limit policy.
"""
from fastapi import APIRouter, Depends, Query

from inventory.core.dependencies import CurrentUser, get_current_user
from inventory.core.rate_limit import rate_limit
from inventory.schemas.intune import DeviceCompliance, DeviceStatistics, ManagedDevice
from inventory.services import intune_service

router = APIRouter(
    prefix="/intune",
    tags=["intune"],
    dependencies=[Depends(rate_limit("external"))],
)


@router.get("/devices", response_model=list[ManagedDevice])
async def list_devices(_: CurrentUser = Depends(get_current_user)):
    return await intune_service.get_managed_devices()


@router.get("/devices/search", response_model=list[ManagedDevice])
async def search_devices(
    name: str = Query(""),
    _: CurrentUser = Depends(get_current_user),
):
    return await intune_service.search_devices_by_name(name)


@router.get("/devices/serial/{serial_number}", response_model=ManagedDevice)
async def get_device_by_serial(serial_number: str, _: CurrentUser = Depends(get_current_user)):
    return await intune_service.get_device_by_serial(serial_number)


@router.get("/devices/os/{os}", response_model=list[ManagedDevice])
async def get_devices_by_os(os: str, _: CurrentUser = Depends(get_current_user)):
    return await intune_service.get_devices_by_os(os)


@router.get("/devices/{device_id}", response_model=ManagedDevice)
async def get_device(device_id: str, _: CurrentUser = Depends(get_current_user)):
    return await intune_service.get_device_by_id(device_id)


@router.get("/devices/{device_id}/compliance", response_model=DeviceCompliance)
async def get_device_compliance(device_id: str, _: CurrentUser = Depends(get_current_user)):
    return await intune_service.get_device_compliance(device_id)


@router.get("/statistics", response_model=DeviceStatistics)
async def get_device_statistics(_: CurrentUser = Depends(get_current_user)):
    return await intune_service.get_device_statistics()
