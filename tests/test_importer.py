# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Tests for rack file parsing and bulk device import."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from yaml import YAMLError

from services.errors import OutOfBoundsError, OverlapError
from services.importer import import_devices, load_rack_file, parse_rack_file

RACK_FILE = """
version: 1
racks:
  - id: R01
    name: Core Rack
    height_units: 12
    devices:
      - {id: fw1, name: edge-fw, type: firewall, start_unit: 12, unit_span: 1}
      - {id: srv1, name: db-01, type: server, start_unit: 1, unit_span: 2, status: maintenance}
  - id: R02
    name: Empty Rack
settings:
  thresholds: {moderate: 40, warning: 60, critical: 80}
"""


def test_load_rack_file() -> None:
    rack_file = load_rack_file(RACK_FILE)
    assert [r.id for r in rack_file.racks] == ["R01", "R02"]
    core = rack_file.get_rack("R01")
    assert core is not None
    assert core.height_units == 12
    assert [d.id for d in core.devices] == ["fw1", "srv1"]
    assert rack_file.get_rack("R02").height_units == 42  # type: ignore[union-attr]
    assert rack_file.settings.thresholds.critical == 80


def test_load_rack_file_rejects_overlaps() -> None:
    raw = """
racks:
  - id: R01
    name: R01
    devices:
      - {id: a, name: a, start_unit: 3, unit_span: 2}
      - {id: b, name: b, start_unit: 4, unit_span: 1}
"""
    assert parse_rack_file(raw).racks[0].devices[1].id == "b"
    with pytest.raises(OverlapError):
        load_rack_file(raw)


def test_load_rack_file_rejects_out_of_bounds() -> None:
    raw = """
racks:
  - id: R01
    name: R01
    height_units: 10
    devices:
      - {id: a, name: a, start_unit: 8, unit_span: 5}
"""
    with pytest.raises(OutOfBoundsError):
        load_rack_file(raw)


def test_load_rack_file_validation_and_syntax_errors() -> None:
    with pytest.raises(ValidationError):
        load_rack_file("racks: [{id: R01, name: R01, height_units: 0}]")
    with pytest.raises(YAMLError):
        load_rack_file("racks: [unclosed")


def test_import_devices_keeps_valid_and_reports_rejected(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2), height_units=10)
    report = import_devices(
        rack,
        [
            {"id": "B", "name": "B", "start_unit": 3, "unit_span": 2},
            {"id": "C", "name": "C", "start_unit": 4, "unit_span": 1},
            make_device("D", 9, 3),
            make_device("E", 10, 1),
        ],
    )

    assert report.accepted == ["B", "E"]
    assert [r.device_id for r in report.rejected] == ["C", "D"]
    assert "already occupied" in report.rejected[0].reason
    assert "outside" in report.rejected[1].reason
    assert [d.id for d in report.rack.devices] == ["A", "B", "E"]
    assert [d.id for d in rack.devices] == ["A"]


def test_import_devices_rejects_malformed_entries(make_rack) -> None:
    report = import_devices(
        make_rack(),
        [
            {"id": "bad", "name": "bad", "start_unit": 1, "unit_span": 0},
            {"id": "ok", "name": "ok", "start_unit": 1, "unit_span": 1},
        ],
    )
    assert report.accepted == ["ok"]
    assert report.rejected[0].device_id == "bad"
    assert report.rejected[0].reason.startswith("validation error")


def test_import_devices_rejects_non_mapping_entries(make_rack) -> None:
    report = import_devices(make_rack(height_units=4), ["not-a-device", 7])
    assert report.accepted == []
    assert [r.device_id for r in report.rejected] == ["?", "?"]
    assert all(r.reason.startswith("validation error") for r in report.rejected)
