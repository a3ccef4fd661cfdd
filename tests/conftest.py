# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from models import Device, Rack


def _device(device_id: str, start_unit: int, unit_span: int = 1, **fields: Any) -> Device:
    payload: dict[str, Any] = {
        "id": device_id,
        "name": fields.pop("name", device_id),
        "start_unit": start_unit,
        "unit_span": unit_span,
    }
    payload.update(fields)
    return Device.model_validate(payload)


def _rack(*devices: Device, height_units: int = 42, rack_id: str = "R01") -> Rack:
    return Rack(id=rack_id, name=f"Rack {rack_id}", height_units=height_units, devices=devices)


@pytest.fixture
def make_device() -> Callable[..., Device]:
    return _device


@pytest.fixture
def make_rack() -> Callable[..., Rack]:
    return _rack


@pytest.fixture
def mixed_rack() -> Rack:
    """A 12U rack with a 2U server, a switch, a 4U storage shelf and a retired UPS."""
    return _rack(
        _device("srv1", 1, 2, type="server", status="active", power_consumption=500),
        _device("sw1", 4, 1, type="switch", status="maintenance", power_consumption=60),
        _device("sto1", 6, 4, type="storage", status="active", power_consumption=300),
        _device("ups1", 11, 2, type="ups", status="retired"),
        height_units=12,
    )
