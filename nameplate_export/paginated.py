"""Paginated proof-sheet layout.

The layout runs as a small state machine over an abstract drawing surface:
one card per design, placed top to bottom, with a page break whenever the
next block would run past the usable height of the page. Coordinates handed
to the surface grow rightwards and downwards from the page's top-left corner.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum

from reportlab.lib.pagesizes import letter
from reportlab.lib.units import inch

from nameplate_types import LabelDesign, OrderRequest, PageCursor, RenderedBox
from order_data import DEFAULTS

from .colors import resolve_color_name, resolve_hex
from .geometry import fit_box, scale_font, text_position, truncate, wrap_text
from .lines import non_empty
from .rows import corner_label, format_dimension

# Character budgets for text drawn on the proof sheet.
CARD_TEXT_BUDGET = 40
DETAIL_TEXT_BUDGET = 28
NOTES_MAX_LINES = 20

DETAIL_FONT = "Helvetica"
DETAIL_FONT_SIZE = 9.0
DETAIL_TITLE_SIZE = 11.0
DETAIL_LINE_HEIGHT = 13.0
BADGE_FONT_SIZE = 8.0
BADGE_HEIGHT = 14.0
BADGE_PADDING = 4.0
BADGE_GAP = 6.0
BLOCK_LINE_HEIGHT = 14.0
# title + three detail lines + badge row
DETAILS_HEIGHT = 4 * DETAIL_LINE_HEIGHT + BADGE_GAP + BADGE_HEIGHT
HEADER_FONT_SIZE = 9.0

OUTLINE_COLOR = "#9CA3AF"
INK_COLOR = "#111827"
QUANTITY_BADGE_COLOR = "#1F2937"
STICKY_BADGE_COLOR = "#F97316"

# Baseline offset that visually centers glyphs on a text anchor.
TEXT_CENTER_RATIO = 0.35
ROUNDED_CORNER_RATIO = 0.12


class PlacementState(Enum):
    AT_TOP = "at_top"
    PLACING_CARD = "placing_card"
    PAGE_FULL = "page_full"


@dataclass(frozen=True)
class PageLayout:
    """Page geometry for the proof sheet, in points."""

    page_width: float = letter[0]
    page_height: float = letter[1]
    margin_top: float = 0.5 * inch
    margin_bottom: float = 0.5 * inch
    margin_left: float = 0.5 * inch
    margin_right: float = 0.5 * inch
    max_box_width: float = 4.25 * inch
    max_box_height: float = 2.25 * inch
    details_gap: float = 0.25 * inch
    card_padding: float = 8.0
    card_spacing: float = 0.2 * inch

    @property
    def page_size(self) -> tuple[float, float]:
        return (self.page_width, self.page_height)

    @property
    def usable_height(self) -> float:
        return self.page_height - self.margin_top - self.margin_bottom

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def details_left(self) -> float:
        return self.margin_left + self.max_box_width + self.details_gap


class DrawingSurface(ABC):
    """Minimal drawing capability the proof layout needs from a backend."""

    @abstractmethod
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
        """Draw a rectangle whose top-left corner is at ``x, y``."""

    @abstractmethod
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
        """Draw ``text`` with its baseline at ``y``."""

    @abstractmethod
    def text_width(
        self,
        text: str,
        font: str,
        size: float,
        bold: bool = False,
    ) -> float:
        """Return the rendered width of ``text``."""

    @abstractmethod
    def break_page(self) -> None:
        """Start a new page."""

    @abstractmethod
    def finish(self) -> None:
        """Flush the document; no drawing happens afterwards."""


@dataclass(frozen=True)
class PlacedCard:
    design_id: int
    page_index: int
    top: float
    height: float
    box: RenderedBox


@dataclass
class RenderSummary:
    pages: int = 1
    cards: list[PlacedCard] = field(default_factory=list[PlacedCard])

    def cards_on_page(self, page_index: int) -> list[PlacedCard]:
        return [card for card in self.cards if card.page_index == page_index]


class PaginatedRenderer:
    """Lay out one proof card per design onto a :class:`DrawingSurface`."""

    def __init__(self, surface: DrawingSurface, layout: PageLayout | None = None) -> None:
        self.surface = surface
        self.layout = layout or PageLayout()

    def box_for(self, design: LabelDesign) -> RenderedBox:
        return fit_box(
            design.width,
            design.height,
            self.layout.max_box_width,
            self.layout.max_box_height,
        )

    def slot_height(self, design: LabelDesign) -> float:
        """Return the vertical space a card for ``design`` consumes."""

        box = self.box_for(design)
        body = max(box.render_height, DETAILS_HEIGHT)
        return body + 2 * self.layout.card_padding + self.layout.card_spacing

    def render(self, order: OrderRequest) -> RenderSummary:
        run = _RenderPass(self, order)
        return run.execute()

    def contact_lines(self, order: OrderRequest) -> list[str]:
        lines: list[str] = []
        if order.contact_name:
            lines.append(f"Contact: {order.contact_name}")
        if order.contact_email:
            lines.append(f"Email: {order.contact_email}")
        return lines

    def notes_lines(self, order: OrderRequest) -> list[str]:
        if not order.notes:
            return []
        wrapped = wrap_text(
            order.notes,
            self.layout.content_width,
            lambda text: self.surface.text_width(text, DETAIL_FONT, DETAIL_FONT_SIZE),
        )
        if len(wrapped) > NOTES_MAX_LINES:
            wrapped = wrapped[:NOTES_MAX_LINES]
            wrapped[-1] = truncate(wrapped[-1], max(len(wrapped[-1]) - 1, 0))
        return wrapped

    def block_height(self, line_count: int) -> float:
        """Height of a titled text block with ``line_count`` body lines."""

        return (line_count + 1) * BLOCK_LINE_HEIGHT + self.layout.card_spacing


class _RenderPass:
    """State for a single render of one order. Discarded afterwards."""

    def __init__(self, renderer: PaginatedRenderer, order: OrderRequest) -> None:
        self.renderer = renderer
        self.surface = renderer.surface
        self.layout = renderer.layout
        self.order = order
        self.cursor = PageCursor(y_position=self.layout.margin_top, page_index=0)
        self.state = PlacementState.AT_TOP
        self.summary = RenderSummary()

    def execute(self) -> RenderSummary:
        self._draw_page_header()

        contact = self.renderer.contact_lines(self.order)
        if contact:
            self._place_block("Customer", contact)

        for design in self.order.labels:
            self._place_card(design)

        notes = self.renderer.notes_lines(self.order)
        if notes:
            self._place_block("Notes", notes)

        self.surface.finish()
        self.summary.pages = self.cursor.page_index + 1
        return self.summary

    def _reserve(self, height: float) -> None:
        """Break the page first if ``height`` does not fit below the cursor.

        A block is never split. On a fresh page it is placed even if it is
        taller than the usable height.
        """

        offset = self.cursor.y_position - self.layout.margin_top
        overflows = offset + height > self.layout.usable_height + 1e-6
        if overflows and self.state is not PlacementState.AT_TOP:
            self.state = PlacementState.PAGE_FULL
            self.surface.break_page()
            self.cursor.page_index += 1
            self.cursor.y_position = self.layout.margin_top
            self.state = PlacementState.AT_TOP
            self._draw_page_header()

    def _place_card(self, design: LabelDesign) -> None:
        slot = self.renderer.slot_height(design)
        self._reserve(slot)
        self.state = PlacementState.PLACING_CARD

        top = self.cursor.y_position
        box = self.renderer.box_for(design)
        self._draw_label_box(design, box, top + self.layout.card_padding)
        self._draw_details(design, top + self.layout.card_padding)

        self.summary.cards.append(
            PlacedCard(
                design_id=design.id,
                page_index=self.cursor.page_index,
                top=top,
                height=slot,
                box=box,
            )
        )
        self.cursor.y_position += slot

    def _place_block(self, title: str, lines: list[str]) -> None:
        height = self.renderer.block_height(len(lines))
        self._reserve(height)
        self.state = PlacementState.PLACING_CARD

        left = self.layout.margin_left
        baseline = self.cursor.y_position + BLOCK_LINE_HEIGHT - 3
        self.surface.draw_text(
            left, baseline, title,
            font=DETAIL_FONT, size=DETAIL_TITLE_SIZE, color=INK_COLOR, bold=True,
        )
        for line in lines:
            baseline += BLOCK_LINE_HEIGHT
            self.surface.draw_text(
                left, baseline, line,
                font=DETAIL_FONT, size=DETAIL_FONT_SIZE, color=INK_COLOR,
            )
        self.cursor.y_position += height

    def _draw_page_header(self) -> None:
        baseline = self.layout.margin_top - 12
        self.surface.draw_text(
            self.layout.margin_left, baseline, f"Nameplate order {self.order.ref_id}",
            font=DETAIL_FONT, size=HEADER_FONT_SIZE, color=INK_COLOR, bold=True,
        )
        self.surface.draw_text(
            self.layout.page_width - self.layout.margin_right, baseline,
            f"Page {self.cursor.page_index + 1}",
            font=DETAIL_FONT, size=HEADER_FONT_SIZE, color=INK_COLOR, align="right",
        )

    def _draw_label_box(self, design: LabelDesign, box: RenderedBox, top: float) -> None:
        left = self.layout.margin_left
        radius = 0.0
        if design.corners == "rounded":
            radius = min(box.render_width, box.render_height) * ROUNDED_CORNER_RATIO
        self.surface.draw_box(
            left, top, box.render_width, box.render_height,
            fill=resolve_hex(design.label_color, DEFAULTS["label_color"]),
            stroke=OUTLINE_COLOR,
            radius=radius,
        )

        text_color = resolve_hex(design.text_color, DEFAULTS["text_color"])
        for line in non_empty(design.text_lines):
            x, y = text_position(left, top, box, line)
            size = scale_font(line.font_size, box.scale)
            self.surface.draw_text(
                x, y + size * TEXT_CENTER_RATIO,
                truncate(line.text, CARD_TEXT_BUDGET),
                font=design.font, size=size, color=text_color, align="center",
            )

    def _draw_details(self, design: LabelDesign, top: float) -> None:
        left = self.layout.details_left
        baseline = top + DETAIL_TITLE_SIZE
        self.surface.draw_text(
            left, baseline, f"Design #{design.id}",
            font=DETAIL_FONT, size=DETAIL_TITLE_SIZE, color=INK_COLOR, bold=True,
        )

        details = [
            f"{format_dimension(design.width)} x {format_dimension(design.height)} in",
            f"{resolve_color_name(design.label_color)} / "
            f"{resolve_color_name(design.text_color)} text",
            f"{truncate(design.font, DETAIL_TEXT_BUDGET)}, "
            f"{corner_label(design.corners)} corners",
        ]
        for detail in details:
            baseline += DETAIL_LINE_HEIGHT
            self.surface.draw_text(
                left, baseline, detail,
                font=DETAIL_FONT, size=DETAIL_FONT_SIZE, color=INK_COLOR,
            )

        badge_top = baseline + BADGE_GAP
        badge_left = self._draw_badge(
            left, badge_top, f"QTY {design.quantity}", QUANTITY_BADGE_COLOR
        )
        if design.sticky_back:
            self._draw_badge(
                badge_left + BADGE_GAP, badge_top, "STICKY BACK", STICKY_BADGE_COLOR
            )

    def _draw_badge(self, left: float, top: float, text: str, fill: str) -> float:
        """Draw a filled pill with white text; return its right edge."""

        width = self.surface.text_width(text, DETAIL_FONT, BADGE_FONT_SIZE, bold=True)
        width += 2 * BADGE_PADDING
        self.surface.draw_box(
            left, top, width, BADGE_HEIGHT, fill=fill, radius=BADGE_HEIGHT / 2
        )
        self.surface.draw_text(
            left + width / 2, top + BADGE_HEIGHT / 2 + BADGE_FONT_SIZE * TEXT_CENTER_RATIO,
            text,
            font=DETAIL_FONT, size=BADGE_FONT_SIZE, color="#FFFFFF",
            align="center", bold=True,
        )
        return left + width
