# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Error kinds raised by the rack layout engine.

Malformed rack or device fields surface as ``pydantic.ValidationError`` at
model construction. The errors below are raised by explicit placement checks
and edit operations only.
"""

from __future__ import annotations

from collections.abc import Sequence


class RackLayoutError(Exception):
    """Base class for placement and edit failures."""


class OutOfBoundsError(RackLayoutError):
    """Raised when a device span does not fit inside the rack."""

    def __init__(
        self, device_id: str, spans: Sequence[tuple[int, int]], height_units: int
    ):
        self.device_id = device_id
        self.spans = list(spans)
        self.height_units = height_units
        super().__init__(
            f"Device {device_id}: units {_format_spans(self.spans)} "
            f"fall outside U1-U{height_units}"
        )


class OverlapError(RackLayoutError):
    """Raised when a device claims units already held by another device."""

    def __init__(self, device_id: str, units: Sequence[int], device_names: Sequence[str]):
        self.device_id = device_id
        self.units = list(units)
        self.device_names = list(device_names)
        super().__init__(
            f"Device {device_id}: units {_format_units(self.units)} "
            f"already occupied by {', '.join(self.device_names)}"
        )


class DeviceNotFoundError(RackLayoutError, KeyError):
    def __init__(self, rack_id: str, device_id: str):
        self.rack_id = rack_id
        self.device_id = device_id
        super().__init__(f"Rack {rack_id}: no device with id {device_id!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class DuplicateDeviceError(RackLayoutError):
    def __init__(self, rack_id: str, device_id: str):
        self.rack_id = rack_id
        self.device_id = device_id
        super().__init__(f"Rack {rack_id}: device id {device_id!r} already exists")


def _format_units(units: Sequence[int]) -> str:
    return ", ".join(f"U{u}" for u in units)


def _format_spans(spans: Sequence[tuple[int, int]]) -> str:
    return ", ".join(f"U{low}" if low == high else f"U{low}-U{high}" for low, high in spans)
