"""Abstract base class for order exporters."""

from __future__ import annotations

from abc import ABC, abstractmethod

from nameplate_types import Artifact, OrderRequest


class OrderExporter(ABC):
    """Turns a validated order into one output document.

    Exporters are stateless; ``render`` may be called for any number of
    orders, concurrently or not.
    """

    kind: str = ""
    extension: str = ""
    content_type: str = "application/octet-stream"

    @abstractmethod
    def render_bytes(self, order: OrderRequest) -> bytes:
        """Return the encoded document for ``order``."""

    def render(self, order: OrderRequest) -> Artifact:
        return Artifact(
            kind=self.kind,
            extension=self.extension,
            content_type=self.content_type,
            data=self.render_bytes(order),
        )
