# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Validated edits that return a new rack snapshot.

The input rack is never modified; every placement change goes through the
placement validator with the edited device excluded from the overlap check.
"""

from __future__ import annotations

from typing import Any

from models import Device, Rack
from services.errors import DeviceNotFoundError, DuplicateDeviceError
from services.placement import ensure_placeable


def _require(rack: Rack, device_id: str) -> Device:
    device = rack.get_device(device_id)
    if device is None:
        raise DeviceNotFoundError(rack.id, device_id)
    return device


def _replace(rack: Rack, updated: Device) -> Rack:
    devices = tuple(updated if d.id == updated.id else d for d in rack.devices)
    return rack.model_copy(update={"devices": devices})


def add_device(rack: Rack, device: Device) -> Rack:
    if rack.get_device(device.id) is not None:
        raise DuplicateDeviceError(rack.id, device.id)
    ensure_placeable(rack, device)
    return rack.model_copy(update={"devices": rack.devices + (device,)})


def update_device(rack: Rack, device_id: str, **changes: Any) -> Rack:
    """Apply field changes to one device, re-running model validation and placement."""
    current = _require(rack, device_id)
    if "id" in changes and changes["id"] != device_id:
        raise ValueError("device id cannot be changed by an update")
    updated = Device.model_validate({**current.model_dump(), **changes})
    if updated.units != current.units:
        ensure_placeable(rack, updated, excluding_device_id=device_id)
    return _replace(rack, updated)


def move_device(rack: Rack, device_id: str, start_unit: int) -> Rack:
    return update_device(rack, device_id, start_unit=start_unit)


def resize_device(rack: Rack, device_id: str, unit_span: int) -> Rack:
    return update_device(rack, device_id, unit_span=unit_span)


def remove_device(rack: Rack, device_id: str) -> Rack:
    _require(rack, device_id)
    return rack.model_copy(
        update={"devices": tuple(d for d in rack.devices if d.id != device_id)}
    )
