# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Tests for validated add/move/resize/delete edits."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from services.edits import (
    add_device,
    move_device,
    remove_device,
    resize_device,
    update_device,
)
from services.errors import DeviceNotFoundError, DuplicateDeviceError, OutOfBoundsError, OverlapError
from services.occupancy import resolve_occupancy


def test_add_device_returns_new_rack(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2))
    updated = add_device(rack, make_device("B", 3, 1))

    assert [d.id for d in updated.devices] == ["A", "B"]
    assert [d.id for d in rack.devices] == ["A"]
    assert resolve_occupancy(updated).device_units("B") == [3]


def test_add_overlapping_device_is_refused(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2))
    with pytest.raises(OverlapError):
        add_device(rack, make_device("B", 2, 1))


def test_add_duplicate_id_is_refused(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2))
    with pytest.raises(DuplicateDeviceError):
        add_device(rack, make_device("A", 10, 1))


def test_move_device_into_own_span(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 5, 3))
    moved = move_device(rack, "A", 6)
    assert resolve_occupancy(moved).device_units("A") == [6, 7, 8]


def test_move_device_onto_neighbour_is_refused(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2), make_device("B", 5, 1))
    with pytest.raises(OverlapError, match="U5"):
        move_device(rack, "A", 4)


def test_move_past_rack_top_is_refused(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2), height_units=10)
    with pytest.raises(OutOfBoundsError):
        move_device(rack, "A", 10)


def test_resize_device(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 1), make_device("B", 4, 1))
    grown = resize_device(rack, "A", 3)
    assert resolve_occupancy(grown).device_units("A") == [1, 2, 3]
    with pytest.raises(OverlapError):
        resize_device(rack, "A", 4)


def test_resize_to_zero_is_a_validation_error(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2))
    with pytest.raises(ValidationError):
        resize_device(rack, "A", 0)


def test_update_non_placement_fields_keeps_position(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2))
    updated = update_device(rack, "A", status="maintenance", notes="fan swap")
    device = updated.get_device("A")
    assert device is not None
    assert device.status == "maintenance"
    assert device.start_unit == 1


def test_update_cannot_change_id(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2))
    with pytest.raises(ValueError, match="device id cannot be changed"):
        update_device(rack, "A", id="Z")


def test_remove_device_frees_units(make_rack, make_device) -> None:
    rack = make_rack(make_device("A", 1, 2), make_device("B", 3, 1))
    trimmed = remove_device(rack, "A")
    assert [d.id for d in trimmed.devices] == ["B"]
    assert resolve_occupancy(trimmed).is_empty(1)


def test_unknown_device_raises(make_rack) -> None:
    rack = make_rack()
    with pytest.raises(DeviceNotFoundError, match="no device with id 'missing'"):
        remove_device(rack, "missing")
    with pytest.raises(KeyError):
        move_device(rack, "missing", 3)
