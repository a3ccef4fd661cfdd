# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Export helpers for occupancy CSV, layout JSON, and rack file YAML."""

from __future__ import annotations

import csv
import io
import json
from dataclasses import asdict
from typing import Any

import yaml

from models import Rack, RackFile, SettingsModel
from services.occupancy import rack_fingerprint, resolve_occupancy
from services.render_rows import DeviceBlock, build_render_rows
from services.utilization import power_summary, utilization

OCCUPANCY_COLUMNS = [
    "rack_id",
    "unit",
    "device_id",
    "device_name",
    "device_type",
    "status",
    "position_within_span",
    "total_span",
    "is_first_unit",
]


def occupancy_csv(rack: Rack) -> str:
    occupancy = resolve_occupancy(rack)
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=OCCUPANCY_COLUMNS, lineterminator="\n")
    writer.writeheader()
    for unit in range(rack.height_units, 0, -1):
        entry = occupancy[unit]
        row: dict[str, Any] = {"rack_id": rack.id, "unit": unit}
        if entry is not None:
            row.update(
                {
                    "device_id": entry.device.id,
                    "device_name": entry.device.name,
                    "device_type": entry.device.type,
                    "status": entry.device.status,
                    "position_within_span": entry.position_within_span,
                    "total_span": entry.total_span,
                    "is_first_unit": int(entry.is_first_unit),
                }
            )
        writer.writerow(row)
    return buf.getvalue()


def layout_dict(rack: Rack) -> dict[str, Any]:
    occupancy = resolve_occupancy(rack)
    rows: list[dict[str, Any]] = []
    for row in build_render_rows(rack, occupancy):
        if isinstance(row, DeviceBlock):
            rows.append(
                {
                    "kind": row.kind,
                    "unit": row.unit,
                    "span_units": row.span_units,
                    "device": row.device.model_dump(),
                }
            )
        else:
            rows.append(asdict(row))
    return {
        "rack": {"id": rack.id, "name": rack.name, "height_units": rack.height_units},
        "fingerprint": rack_fingerprint(rack),
        "rows": rows,
        "utilization": asdict(utilization(rack, occupancy=occupancy)),
        "power": asdict(power_summary(rack.devices)),
        "rejected": [
            {
                "device_id": r.device.id,
                "conflicts": r.conflicts,
                "conflicting_device_ids": r.conflicting_device_ids,
            }
            for r in occupancy.rejected
        ],
        "clamped": occupancy.clamped,
    }


def layout_json(rack: Rack) -> str:
    return json.dumps(layout_dict(rack), indent=2, sort_keys=True)


def rack_file_yaml(racks: list[Rack], settings: SettingsModel | None = None) -> str:
    rack_file = RackFile(racks=racks, settings=settings or SettingsModel())
    return yaml.safe_dump(rack_file.model_dump(mode="json"), sort_keys=False)
