# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Placement validation for candidate devices before an edit is accepted."""

from __future__ import annotations

from dataclasses import dataclass, field

from models import Device, Rack
from services.errors import OutOfBoundsError, OverlapError, RackLayoutError
from services.occupancy import in_bounds_units, out_of_bounds_spans

# Typical maximum span per device type; exceeding it only produces a warning.
TYPICAL_MAX_SPAN = {
    "server": 4,
    "switch": 2,
    "router": 2,
    "storage": 6,
    "ups": 4,
    "pdu": 2,
    "firewall": 2,
    "monitor": 1,
    "other": 8,
}


@dataclass
class PlacementResult:
    ok: bool
    conflicts: list[int] = field(default_factory=list)
    conflicting_devices: list[Device] = field(default_factory=list)
    out_of_bounds: list[tuple[int, int]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    error: RackLayoutError | None = None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def typical_max_span(device_type: str) -> int:
    return TYPICAL_MAX_SPAN.get(device_type, TYPICAL_MAX_SPAN["other"])


def span_warnings(device: Device) -> list[str]:
    limit = typical_max_span(device.type)
    if device.unit_span > limit:
        return [f"{device.type} devices typically don't exceed {limit}U"]
    return []


def can_place(
    rack: Rack, candidate: Device, excluding_device_id: str | None = None
) -> PlacementResult:
    """Check that ``candidate`` fits inside ``rack`` without overlapping other devices.

    ``excluding_device_id`` names the device being edited so that its current
    placement does not conflict with its new one.
    """
    height = rack.height_units
    out_of_bounds = out_of_bounds_spans(candidate, height)

    wanted = set(in_bounds_units(candidate, height))
    claimed_by: dict[int, Device] = {}
    for other in rack.devices:
        if other.id == excluding_device_id:
            continue
        for unit in in_bounds_units(other, height):
            if unit in wanted:
                claimed_by.setdefault(unit, other)
    conflicts = sorted(claimed_by)
    conflicting_devices: list[Device] = []
    for unit in conflicts:
        if claimed_by[unit] not in conflicting_devices:
            conflicting_devices.append(claimed_by[unit])

    error: RackLayoutError | None = None
    if out_of_bounds:
        error = OutOfBoundsError(candidate.id, out_of_bounds, height)
    elif conflicts:
        error = OverlapError(candidate.id, conflicts, [d.name for d in conflicting_devices])

    return PlacementResult(
        ok=error is None,
        conflicts=conflicts,
        conflicting_devices=conflicting_devices,
        out_of_bounds=out_of_bounds,
        warnings=span_warnings(candidate),
        error=error,
    )


def ensure_placeable(
    rack: Rack, candidate: Device, excluding_device_id: str | None = None
) -> PlacementResult:
    result = can_place(rack, candidate, excluding_device_id)
    result.raise_for_error()
    return result


def validate_rack(rack: Rack) -> list[str]:
    """Run every device through the validator against the devices listed before it.

    Raises the first ``OutOfBoundsError`` or ``OverlapError`` found and returns the
    collected span warnings otherwise.
    """
    warnings: list[str] = []
    for idx, device in enumerate(rack.devices):
        preceding = rack.model_copy(update={"devices": rack.devices[:idx]})
        result = ensure_placeable(preceding, device)
        warnings.extend(f"{device.id}: {w}" for w in result.warnings)
    return warnings
