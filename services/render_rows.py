# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Render view builder: turns the occupancy map into one visual row per unit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from models import Device, Rack
from services.occupancy import OccupancyMap, in_bounds_units, resolve_occupancy


@dataclass(frozen=True)
class EmptyRow:
    unit: int
    kind: str = "empty"


@dataclass(frozen=True)
class DeviceBlock:
    device: Device
    unit: int
    span_units: int
    kind: str = "device"

    @property
    def top_unit(self) -> int:
        return self.unit + self.span_units - 1


@dataclass(frozen=True)
class ContinuationRow:
    unit: int
    device_id: str
    kind: str = "continuation"


Row = Union[EmptyRow, DeviceBlock, ContinuationRow]


def build_render_rows(rack: Rack, occupancy: OccupancyMap | None = None) -> list[Row]:
    """Rows ordered from U1 upward, the direction in which device spans grow.

    Each device block sits at its anchor unit and is followed by
    ``span_units - 1`` continuation rows that the renderer folds into it.
    """
    if occupancy is None:
        occupancy = resolve_occupancy(rack)
    rows: list[Row] = []
    for unit in range(1, rack.height_units + 1):
        entry = occupancy[unit]
        if entry is None:
            rows.append(EmptyRow(unit))
        elif entry.is_first_unit:
            span = len(in_bounds_units(entry.device, rack.height_units))
            rows.append(DeviceBlock(entry.device, unit, span))
        else:
            rows.append(ContinuationRow(unit, entry.device.id))
    return rows


def rack_unit_labels(height_units: int) -> list[int]:
    """Unit numbers top-down, as printed on the rack rail."""
    return list(range(height_units, 0, -1))
