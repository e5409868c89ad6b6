"""ReportLab backend for the paginated proof sheet."""

from __future__ import annotations

from io import BytesIO

from reportlab.lib.colors import HexColor
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from fonts import resolve_font_name
from nameplate_types import OrderRequest

from .base import OrderExporter
from .paginated import DrawingSurface, PageLayout, PaginatedRenderer, RenderSummary


class PdfSurface(DrawingSurface):
    """Draws on a ReportLab canvas, flipping y so callers work top-down."""

    def __init__(self, page_size: tuple[float, float], title: str = "") -> None:
        self._buffer = BytesIO()
        self._page_height = page_size[1]
        self._canvas = canvas.Canvas(self._buffer, pagesize=page_size)
        if title:
            self._canvas.setTitle(title)
        self._finished = False

    def draw_box(
        self,
        x: float,
        y: float,
        width: float,
        height: float,
        *,
        fill: str,
        stroke: str | None = None,
        radius: float = 0.0,
    ) -> None:
        c = self._canvas
        c.saveState()
        c.setFillColor(HexColor(fill))
        if stroke:
            c.setStrokeColor(HexColor(stroke))
            c.setLineWidth(0.75)
        bottom = self._page_height - y - height
        if radius > 0:
            c.roundRect(x, bottom, width, height, radius, stroke=1 if stroke else 0, fill=1)
        else:
            c.rect(x, bottom, width, height, stroke=1 if stroke else 0, fill=1)
        c.restoreState()

    def draw_text(
        self,
        x: float,
        y: float,
        text: str,
        *,
        font: str,
        size: float,
        color: str,
        align: str = "left",
        bold: bool = False,
    ) -> None:
        c = self._canvas
        c.saveState()
        c.setFont(resolve_font_name(font, bold), size)
        c.setFillColor(HexColor(color))
        baseline = self._page_height - y
        if align == "center":
            c.drawCentredString(x, baseline, text)
        elif align == "right":
            c.drawRightString(x, baseline, text)
        else:
            c.drawString(x, baseline, text)
        c.restoreState()

    def text_width(
        self,
        text: str,
        font: str,
        size: float,
        bold: bool = False,
    ) -> float:
        return stringWidth(text, resolve_font_name(font, bold), size)

    def break_page(self) -> None:
        self._canvas.showPage()

    def finish(self) -> None:
        if self._finished:
            return
        self._canvas.showPage()
        self._canvas.save()
        self._finished = True

    def getvalue(self) -> bytes:
        return self._buffer.getvalue()


def render_pdf(
    order: OrderRequest,
    layout: PageLayout | None = None,
) -> tuple[bytes, RenderSummary]:
    """Render the proof sheet for ``order``; return the PDF and its layout."""

    layout = layout or PageLayout()
    surface = PdfSurface(layout.page_size, title=f"Nameplate order {order.ref_id}")
    summary = PaginatedRenderer(surface, layout).render(order)
    return surface.getvalue(), summary


class Exporter(OrderExporter):
    kind = "pdf"
    extension = "pdf"
    content_type = "application/pdf"

    def render_bytes(self, order: OrderRequest) -> bytes:
        pdf_bytes, _ = render_pdf(order)
        return pdf_bytes
