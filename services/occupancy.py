# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Unit occupancy resolver: maps every rack unit to the device holding it."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from hashlib import sha256

from models import Device, Rack

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OccupancyEntry:
    device: Device
    unit: int
    is_first_unit: bool
    is_last_unit: bool
    position_within_span: int
    total_span: int


@dataclass(frozen=True)
class RejectedDevice:
    """A device refused by the resolver because an earlier device holds its units."""

    device: Device
    conflicts: list[int]
    conflicting_device_ids: list[str]


@dataclass
class OccupancyMap:
    height_units: int
    units: dict[int, OccupancyEntry | None]
    rejected: list[RejectedDevice] = field(default_factory=list)
    clamped: dict[str, list[tuple[int, int]]] = field(default_factory=dict)

    def __getitem__(self, unit: int) -> OccupancyEntry | None:
        if unit not in self.units:
            raise KeyError(f"U{unit} is outside U1-U{self.height_units}")
        return self.units[unit]

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self) -> Iterator[int]:
        return iter(self.units)

    def is_empty(self, unit: int) -> bool:
        return self[unit] is None

    def occupied_units(self) -> list[int]:
        return [u for u, entry in self.units.items() if entry is not None]

    def device_units(self, device_id: str) -> list[int]:
        return [
            u
            for u, entry in self.units.items()
            if entry is not None and entry.device.id == device_id
        ]

    def free_ranges(self) -> list[tuple[int, int]]:
        """Maximal runs of empty units as inclusive ``(low, high)`` pairs."""
        ranges: list[tuple[int, int]] = []
        run_start: int | None = None
        for unit in range(1, self.height_units + 1):
            if self.units[unit] is None:
                if run_start is None:
                    run_start = unit
            elif run_start is not None:
                ranges.append((run_start, unit - 1))
                run_start = None
        if run_start is not None:
            ranges.append((run_start, self.height_units))
        return ranges

    def find_free_start(self, unit_span: int) -> int | None:
        for low, high in self.free_ranges():
            if high - low + 1 >= unit_span:
                return low
        return None


def in_bounds_units(device: Device, height_units: int) -> range:
    return range(max(device.start_unit, 1), min(device.end_unit, height_units) + 1)


def out_of_bounds_spans(device: Device, height_units: int) -> list[tuple[int, int]]:
    """Declared units outside ``U1..height_units`` as inclusive ``(low, high)`` pairs."""
    spans: list[tuple[int, int]] = []
    if device.start_unit < 1:
        spans.append((device.start_unit, min(device.end_unit, 0)))
    if device.end_unit > height_units:
        spans.append((max(device.start_unit, height_units + 1), device.end_unit))
    return spans


def span_length(spans: list[tuple[int, int]]) -> int:
    return sum(high - low + 1 for low, high in spans)


def resolve_occupancy(rack: Rack) -> OccupancyMap:
    height = rack.height_units
    units: dict[int, OccupancyEntry | None] = {u: None for u in range(1, height + 1)}
    occupancy = OccupancyMap(height_units=height, units=units)

    for device in rack.devices:
        placed = in_bounds_units(device, height)
        dropped = out_of_bounds_spans(device, height)
        if dropped:
            occupancy.clamped[device.id] = dropped
            logger.warning(
                "Rack %s: device %s declares U%d-U%d, dropping %d unit(s) outside U1-U%d",
                rack.id,
                device.id,
                device.start_unit,
                device.end_unit,
                span_length(dropped),
                height,
            )

        conflicts = [u for u in placed if units[u] is not None]
        if conflicts:
            holders = sorted({units[u].device.id for u in conflicts})  # type: ignore[union-attr]
            occupancy.rejected.append(RejectedDevice(device, conflicts, holders))
            logger.warning(
                "Rack %s: device %s refused, units %s already held by %s",
                rack.id,
                device.id,
                conflicts,
                ", ".join(holders),
            )
            continue

        for idx, unit in enumerate(placed):
            units[unit] = OccupancyEntry(
                device=device,
                unit=unit,
                is_first_unit=idx == 0,
                is_last_unit=idx == len(placed) - 1,
                position_within_span=unit - device.start_unit,
                total_span=device.unit_span,
            )

    return occupancy


def rack_fingerprint(rack: Rack) -> str:
    """Structural hash of ``(height_units, devices)`` for caller-side memoization."""
    payload = {
        "height_units": rack.height_units,
        "devices": [device.model_dump() for device in rack.devices],
    }
    return sha256(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()
