from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TextLine:
    """One line of engraved text, positioned in percent of the label box."""

    text: str
    font_size: float
    x: float = 50.0
    y: float = 50.0


@dataclass(frozen=True)
class LabelDesign:
    """A single nameplate template and how many copies of it to make."""

    id: int
    width: float
    height: float
    font: str
    label_color: str
    text_color: str
    corners: str
    sticky_back: bool
    quantity: int
    text_lines: tuple[TextLine, ...] = ()


@dataclass(frozen=True)
class OrderRequest:
    ref_id: str
    labels: tuple[LabelDesign, ...]
    contact_name: str = ""
    contact_email: str = ""
    notes: str = ""

    @property
    def total_labels(self) -> int:
        return sum(max(1, design.quantity) for design in self.labels)


@dataclass(frozen=True)
class RenderedBox:
    render_width: float
    render_height: float
    scale: float


@dataclass
class PageCursor:
    """Vertical position on the current page, measured down from the top edge."""

    y_position: float
    page_index: int = 0


@dataclass(frozen=True)
class Artifact:
    """A generated document ready to be stored."""

    kind: str
    extension: str
    content_type: str
    data: bytes


@dataclass(frozen=True)
class ExportResult:
    ref_id: str
    total_labels: int
    urls: dict[str, str] = field(default_factory=dict[str, str])

    def to_dict(self) -> dict[str, object]:
        return {
            "refId": self.ref_id,
            "files": dict(self.urls),
            "totalLabels": self.total_labels,
        }
