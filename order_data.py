"""Convert incoming order payloads into frozen domain objects."""

from __future__ import annotations

import math
from typing import Any, Mapping

from nameplate_errors import ValidationError
from nameplate_types import LabelDesign, OrderRequest, TextLine

__all__ = [
    "DEFAULTS",
    "CORNER_STYLES",
    "parse_order",
    "parse_design",
    "parse_text_line",
]

# Every fallback used by the renderers lives here and is applied once, while
# parsing. Downstream code can rely on fully populated designs.
DEFAULTS: dict[str, Any] = {
    "label_color": "#000000",
    "text_color": "#FFFFFF",
    "width": 7.0,
    "height": 2.0,
    "font": "Helvetica",
    "corners": "squared",
    "quantity": 1,
    "sticky_back": False,
    "font_size": 12.0,
    "x": 50.0,
    "y": 50.0,
}

CORNER_STYLES = ("squared", "rounded")

_TRUE_STRINGS = {"1", "true", "yes", "on", "y"}


def parse_order(payload: Any) -> OrderRequest:
    """Validate ``payload`` and build an :class:`OrderRequest`.

    Only the order envelope is validated strictly: ``refId`` must be a
    non-empty string and ``labels`` a non-empty list. Individual designs are
    normalized with :data:`DEFAULTS` instead of being rejected.
    """

    if not isinstance(payload, Mapping):
        raise ValidationError("Order payload must be a JSON object.")

    ref_id = _as_str(payload.get("refId"))
    if not ref_id:
        raise ValidationError("refId is required.")

    labels_raw = payload.get("labels")
    if not isinstance(labels_raw, list) or not labels_raw:
        raise ValidationError("labels must be a non-empty list.")

    designs = tuple(
        parse_design(raw, index)
        for index, raw in enumerate(labels_raw, start=1)
    )

    return OrderRequest(
        ref_id=ref_id,
        labels=designs,
        contact_name=_as_str(payload.get("contactName")),
        contact_email=_as_str(payload.get("contactEmail")),
        notes=_as_str(payload.get("notes")),
    )


def parse_design(raw: Any, fallback_id: int) -> LabelDesign:
    """Build a :class:`LabelDesign`, substituting defaults for bad fields."""

    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    corners = _as_str(data.get("corners")).lower()
    if corners not in CORNER_STYLES:
        corners = DEFAULTS["corners"]

    lines_raw = data.get("textLines")
    lines = tuple(
        parse_text_line(line)
        for line in (lines_raw if isinstance(lines_raw, list) else [])
    )

    return LabelDesign(
        id=_as_int(data.get("id"), fallback_id),
        width=_as_positive_float(data.get("width"), DEFAULTS["width"]),
        height=_as_positive_float(data.get("height"), DEFAULTS["height"]),
        font=_as_str(data.get("font")) or DEFAULTS["font"],
        label_color=_as_str(data.get("labelColor")) or DEFAULTS["label_color"],
        text_color=_as_str(data.get("textColor")) or DEFAULTS["text_color"],
        corners=corners,
        sticky_back=_as_bool(data.get("stickyBack")),
        quantity=max(1, _as_int(data.get("quantity"), DEFAULTS["quantity"])),
        text_lines=lines,
    )


def parse_text_line(raw: Any) -> TextLine:
    data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    return TextLine(
        text=_as_str(data.get("text"), strip=False),
        font_size=_as_positive_float(data.get("fontSize"), DEFAULTS["font_size"]),
        x=_as_percent(data.get("x"), DEFAULTS["x"]),
        y=_as_percent(data.get("y"), DEFAULTS["y"]),
    )


def _as_str(value: Any, *, strip: bool = True) -> str:
    if value is None:
        return ""
    text = str(value)
    return text.strip() if strip else text


def _as_int(value: Any, default: int) -> int:
    if isinstance(value, bool) or value is None:
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _as_positive_float(value: Any, default: float) -> float:
    number = _as_float(value)
    if number is None or number <= 0:
        return float(default)
    return number


def _as_percent(value: Any, default: float) -> float:
    number = _as_float(value)
    if number is None:
        return float(default)
    return min(max(number, 0.0), 100.0)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(DEFAULTS["sticky_back"])
