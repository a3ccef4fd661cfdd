# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Input models and validation for rackview rack files."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator

DeviceType = Literal[
    "server",
    "switch",
    "router",
    "storage",
    "ups",
    "pdu",
    "firewall",
    "monitor",
    "patch-panel",
    "other",
]
DeviceStatus = Literal["active", "inactive", "maintenance", "retired"]

DEVICE_STATUSES: tuple[str, ...] = ("active", "inactive", "maintenance", "retired")
DEFAULT_RACK_HEIGHT = 42


class Device(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    type: DeviceType = "other"
    model: str = ""
    manufacturer: str = ""
    serial_number: str = ""
    start_unit: StrictInt
    unit_span: StrictInt = Field(default=1, ge=1)
    status: DeviceStatus = "active"
    power_consumption: float | None = Field(default=None, ge=0)
    notes: str = ""

    @property
    def end_unit(self) -> int:
        return self.start_unit + self.unit_span - 1

    @property
    def units(self) -> range:
        """Declared units, lowest first. Not clamped to any rack."""
        return range(self.start_unit, self.end_unit + 1)


class Rack(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    name: str
    height_units: StrictInt = Field(default=DEFAULT_RACK_HEIGHT, ge=1)
    devices: tuple[Device, ...] = ()

    @model_validator(mode="after")
    def validate_device_ids(self) -> "Rack":
        device_ids = [device.id for device in self.devices]
        if len(set(device_ids)) != len(device_ids):
            raise ValueError(f"device ids must be unique within rack {self.id}")
        return self

    def get_device(self, device_id: str) -> Device | None:
        return next((d for d in self.devices if d.id == device_id), None)


class UtilizationThresholds(BaseModel):
    model_config = ConfigDict(extra="forbid")

    moderate: int = Field(default=50, ge=0, le=100)
    warning: int = Field(default=75, ge=0, le=100)
    critical: int = Field(default=90, ge=0, le=100)

    @model_validator(mode="after")
    def validate_order(self) -> "UtilizationThresholds":
        if not self.moderate < self.warning < self.critical:
            raise ValueError(
                "utilization thresholds must satisfy moderate < warning < critical; "
                f"got {self.moderate}/{self.warning}/{self.critical}"
            )
        return self


class RenderSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    unit_height_px: int = Field(default=20, gt=0)
    rack_width_px: int = Field(default=260, gt=0)


class SettingsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    thresholds: UtilizationThresholds = Field(default_factory=UtilizationThresholds)
    render: RenderSettings = Field(default_factory=RenderSettings)


class RackFile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: int = 1
    racks: list[Rack]
    settings: SettingsModel = Field(default_factory=SettingsModel)

    @model_validator(mode="after")
    def validate_rack_ids(self) -> "RackFile":
        rack_ids = [rack.id for rack in self.racks]
        if len(set(rack_ids)) != len(rack_ids):
            raise ValueError("rack ids must be unique")
        return self

    def get_rack(self, rack_id: str) -> Rack | None:
        return next((r for r in self.racks if r.id == rack_id), None)
