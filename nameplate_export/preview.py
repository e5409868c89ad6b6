"""HTML preview: one summary block per design, no pagination."""

from __future__ import annotations

from jinja2 import Environment, PackageLoader, select_autoescape

from nameplate_types import LabelDesign, OrderRequest
from order_data import DEFAULTS

from .base import OrderExporter
from .colors import resolve_color_name, resolve_hex
from .geometry import truncate
from .lines import non_empty, primary_text
from .rows import corner_label, format_dimension

PREVIEW_TEXT_BUDGET = 32
PLACEHOLDER = "—"

_ENV = Environment(
    loader=PackageLoader("nameplate_export", "templates"),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


def design_summary(design: LabelDesign) -> dict[str, object]:
    primary = primary_text(design.text_lines, PLACEHOLDER)
    return {
        "id": design.id,
        "primary_text": truncate(primary, PREVIEW_TEXT_BUDGET),
        "lines": [line.text for line in non_empty(design.text_lines)],
        "width": format_dimension(design.width),
        "height": format_dimension(design.height),
        "label_color": resolve_color_name(design.label_color),
        "label_swatch": resolve_hex(design.label_color, DEFAULTS["label_color"]),
        "text_color": resolve_color_name(design.text_color),
        "text_swatch": resolve_hex(design.text_color, DEFAULTS["text_color"]),
        "font": design.font,
        "corners": corner_label(design.corners),
        "sticky_back": design.sticky_back,
        "quantity": design.quantity,
    }


def build_preview(order: OrderRequest) -> str:
    template = _ENV.get_template("preview.html")
    return template.render(
        order=order,
        designs=[design_summary(design) for design in order.labels],
        total_labels=order.total_labels,
    )


class Exporter(OrderExporter):
    kind = "preview"
    extension = "html"
    content_type = "text/html; charset=utf-8"

    def render_bytes(self, order: OrderRequest) -> bytes:
        return build_preview(order).encode("utf-8")
