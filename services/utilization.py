# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Rack utilization metrics and per-status summaries."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from math import floor

from models import DEVICE_STATUSES, Device, Rack, UtilizationThresholds
from services.occupancy import OccupancyMap, resolve_occupancy


@dataclass(frozen=True)
class Utilization:
    occupied_units: int
    total_units: int
    available_units: int
    percent: int
    level: str
    by_status: dict[str, int]
    by_type: dict[str, int]


@dataclass(frozen=True)
class PowerSummary:
    total: float
    average: float
    device_count: int


def round_half_up(value: float) -> int:
    return floor(value + 0.5)


def utilization_level(percent: int, thresholds: UtilizationThresholds | None = None) -> str:
    t = thresholds or UtilizationThresholds()
    if percent >= t.critical:
        return "critical"
    if percent >= t.warning:
        return "warning"
    if percent >= t.moderate:
        return "moderate"
    return "low"


def status_counts(devices: Iterable[Device]) -> dict[str, int]:
    counts = Counter(device.status for device in devices)
    return {status: counts.get(status, 0) for status in DEVICE_STATUSES}


def utilization(
    rack: Rack,
    thresholds: UtilizationThresholds | None = None,
    occupancy: OccupancyMap | None = None,
) -> Utilization:
    if occupancy is None:
        occupancy = resolve_occupancy(rack)
    occupied = len(occupancy.occupied_units())
    total = rack.height_units
    percent = round_half_up(occupied / total * 100)
    return Utilization(
        occupied_units=occupied,
        total_units=total,
        available_units=total - occupied,
        percent=percent,
        level=utilization_level(percent, thresholds),
        by_status=status_counts(rack.devices),
        by_type=dict(sorted(Counter(device.type for device in rack.devices).items())),
    )


def power_summary(devices: Iterable[Device]) -> PowerSummary:
    devices = list(devices)
    total = sum(device.power_consumption or 0.0 for device in devices)
    average = total / len(devices) if devices else 0.0
    return PowerSummary(
        total=round(total, 2), average=round(average, 2), device_count=len(devices)
    )
