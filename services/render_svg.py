# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""SVG rendering of rack elevations and utilization summaries."""

from __future__ import annotations

from html import escape

from models import Device, Rack, RenderSettings
from services.render_rows import DeviceBlock, EmptyRow, build_render_rows
from services.utilization import Utilization

DEVICE_TYPE_LABELS = {
    "server": "Server",
    "switch": "Switch",
    "router": "Router",
    "storage": "Storage",
    "ups": "UPS",
    "pdu": "PDU",
    "firewall": "Firewall",
    "monitor": "Monitor",
    "patch-panel": "Patch Panel",
    "other": "Other",
}


DEVICE_TYPE_COLORS = {
    "ups": "#dc2626",
    "pdu": "#ea580c",
    "switch": "#2563eb",
    "router": "#1d4ed8",
    "server": "#059669",
    "storage": "#ca8a04",
    "firewall": "#b91c1c",
    "monitor": "#0891b2",
    "patch-panel": "#65a30d",
    "other": "#6b7280",
}

STATUS_STROKES = {
    "active": "#16a34a",
    "inactive": "#dc2626",
    "maintenance": "#eab308",
    "retired": "#6b7280",
}

EMPTY_FILL = "#f3f4f6"
LABEL_GUTTER = 40


def _device_fill_color(device: Device) -> str:
    if device.status == "retired":
        return "#9ca3af"
    return DEVICE_TYPE_COLORS.get(device.type, DEVICE_TYPE_COLORS["other"])


def _block_label(device: Device, span_units: int) -> str:
    label = device.name
    if span_units > 1:
        label = f"{label} ({span_units}U)"
    return label


def device_tooltip(device: Device) -> str:
    units = f"U{device.start_unit}"
    if device.unit_span > 1:
        units = f"{units}-U{device.end_unit}"
    parts = [
        f"{device.name} ({DEVICE_TYPE_LABELS.get(device.type, device.type)})",
        f"Units: {units}",
    ]
    if device.manufacturer or device.model:
        parts.append(" ".join(p for p in (device.manufacturer, device.model) if p))
    if device.serial_number:
        parts.append(f"S/N: {device.serial_number}")
    if device.power_consumption:
        parts.append(f"Power: {device.power_consumption:g}W")
    parts.append(f"Status: {device.status}")
    return "\n".join(parts)


def render_rack_svg(rack: Rack, settings: RenderSettings | None = None) -> str:
    """Draw the rack elevation with U1 at the bottom and U{height} at the top."""
    settings = settings or RenderSettings()
    unit_h = settings.unit_height_px
    rack_w = settings.rack_width_px
    top = 30
    height = rack.height_units

    def y_of(unit: int) -> int:
        return top + (height - unit) * unit_h

    lines = [
        f'<text x="10" y="18" font-size="14">Rack {escape(rack.name)} ({height}U)</text>'
    ]
    for unit in range(height, 0, -1):
        lines.append(
            f'<text x="10" y="{y_of(unit) + unit_h - 6}" font-size="10">U{unit}</text>'
        )

    for row in build_render_rows(rack):
        if isinstance(row, EmptyRow):
            lines.append(
                f'<rect x="{LABEL_GUTTER}" y="{y_of(row.unit)}" width="{rack_w}" height="{unit_h}" '
                f'fill="{EMPTY_FILL}" stroke="#d1d5db" data-unit="{row.unit}"/>'
            )
        elif isinstance(row, DeviceBlock):
            device = row.device
            block_y = y_of(row.top_unit)
            block_h = row.span_units * unit_h
            tooltip = escape(device_tooltip(device))
            lines.append(
                f'<rect x="{LABEL_GUTTER}" y="{block_y}" width="{rack_w}" height="{block_h}" '
                f'fill="{_device_fill_color(device)}" stroke="{STATUS_STROKES[device.status]}" '
                f'stroke-width="2" data-device-id="{escape(device.id)}">'
                f"<title>{tooltip}</title></rect>"
            )
            text_y = block_y + block_h // 2 + 4
            lines.append(
                f'<text x="{LABEL_GUTTER + 6}" y="{text_y}" font-size="11" fill="#fff">'
                f"{escape(_block_label(device, row.span_units))}</text>"
            )
        # continuation rows are covered by the preceding device block

    svg_h = top + height * unit_h + 20
    svg_w = LABEL_GUTTER + rack_w + 20
    return f'<svg xmlns="http://www.w3.org/2000/svg" width="{svg_w}" height="{svg_h}">{"".join(lines)}</svg>'


def render_utilization_svg(usage: Utilization) -> str:
    bar_w = 300
    filled = int(bar_w * usage.percent / 100)
    colors = {"low": "#16a34a", "moderate": "#2563eb", "warning": "#eab308", "critical": "#dc2626"}
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{bar_w + 20}" height="50">'
        f'<text x="10" y="15" font-size="12">Utilization {usage.occupied_units}/{usage.total_units}U '
        f"({usage.percent}%, {usage.level})</text>"
        f'<rect x="10" y="24" width="{bar_w}" height="14" fill="{EMPTY_FILL}" stroke="#d1d5db"/>'
        f'<rect x="10" y="24" width="{filled}" height="14" fill="{colors[usage.level]}"/>'
        "</svg>"
    )
