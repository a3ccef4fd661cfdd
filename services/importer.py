# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Bulk import of rack files and device lists through the placement validator."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

import yaml
from pydantic import ValidationError

from models import Device, Rack, RackFile
from services.edits import add_device
from services.errors import RackLayoutError
from services.placement import validate_rack

logger = logging.getLogger(__name__)


@dataclass
class RejectedImport:
    device_id: str
    reason: str


@dataclass
class ImportReport:
    rack: Rack
    accepted: list[str] = field(default_factory=list)
    rejected: list[RejectedImport] = field(default_factory=list)


def parse_rack_file(raw: str) -> RackFile:
    """Parse YAML (or JSON, which YAML accepts) into a validated ``RackFile``.

    Raises ``yaml.YAMLError`` on syntax errors and ``pydantic.ValidationError``
    on malformed fields.
    """
    data = yaml.safe_load(raw)
    return RackFile.model_validate(data)


def load_rack_file(raw: str) -> RackFile:
    """Parse a rack file and reject it if any rack has overlapping or out-of-bounds devices."""
    rack_file = parse_rack_file(raw)
    for rack in rack_file.racks:
        for warning in validate_rack(rack):
            logger.info("Rack %s: %s", rack.id, warning)
    return rack_file


def import_devices(rack: Rack, devices: Iterable[Device | dict[str, Any]]) -> ImportReport:
    """Add devices one by one, keeping the ones the validator accepts.

    Malformed entries and placements that overlap or leave the rack are
    reported in ``rejected``; the input rack is left untouched.
    """
    report = ImportReport(rack=rack)
    for raw in devices:
        if isinstance(raw, Device):
            device = raw
        else:
            try:
                device = Device.model_validate(raw)
            except ValidationError as exc:
                device_id = str(raw.get("id", "?")) if isinstance(raw, dict) else "?"
                logger.info("Rack %s: malformed imported device %s", rack.id, device_id)
                report.rejected.append(
                    RejectedImport(device_id, f"validation error: {exc.errors()[0]['msg']}")
                )
                continue
        try:
            report.rack = add_device(report.rack, device)
        except RackLayoutError as exc:
            logger.info("Rack %s: rejected imported device %s: %s", rack.id, device.id, exc)
            report.rejected.append(RejectedImport(device.id, str(exc)))
            continue
        report.accepted.append(device.id)
    return report
