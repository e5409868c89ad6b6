"""Export pipeline: validate, render, upload, notify."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from nameplate_config import Settings
from nameplate_errors import NotificationError, UploadError, ValidationError
from nameplate_export import SECONDARY_FORMATS, get_exporter
from nameplate_export.colors import resolve_color_name
from nameplate_export.lines import non_empty
from nameplate_export.rows import corner_label
from nameplate_types import Artifact, ExportResult, OrderRequest
from notifications import WebhookNotifier
from order_data import parse_order
from storage import StorageBackend, build_key, get_storage

logger = logging.getLogger(__name__)

__all__ = [
    "ExportContext",
    "build_context",
    "build_notification",
    "process_order",
    "render_artifacts",
]


@dataclass(frozen=True)
class ExportContext:
    """External collaborators of one export run."""

    settings: Settings
    storage: StorageBackend
    notifier: WebhookNotifier


def build_context(settings: Settings) -> ExportContext:
    return ExportContext(
        settings=settings,
        storage=get_storage(settings),
        notifier=WebhookNotifier(settings.webhook_url, settings.webhook_timeout),
    )


def render_artifacts(order: OrderRequest, secondary_format: str) -> list[Artifact]:
    """Render the spreadsheet plus the requested secondary document."""

    key = (secondary_format or "").strip().lower()
    if key not in SECONDARY_FORMATS:
        raise ValidationError(
            f"Unknown output format '{secondary_format}'. "
            f"Expected one of: {', '.join(SECONDARY_FORMATS)}"
        )
    return [
        get_exporter("spreadsheet").render(order),
        get_exporter(key).render(order),
    ]


def build_notification(order: OrderRequest, urls: dict[str, str]) -> dict[str, Any]:
    """Return the JSON-serializable webhook payload for ``order``."""

    return {
        "refId": order.ref_id,
        "contactName": order.contact_name,
        "contactEmail": order.contact_email,
        "notes": order.notes,
        "totalLabels": order.total_labels,
        "files": dict(urls),
        "labels": [
            {
                "id": design.id,
                "width": design.width,
                "height": design.height,
                "labelColor": resolve_color_name(design.label_color),
                "textColor": resolve_color_name(design.text_color),
                "font": design.font,
                "corners": corner_label(design.corners),
                "stickyBack": design.sticky_back,
                "quantity": design.quantity,
                "lines": [line.text for line in non_empty(design.text_lines)],
            }
            for design in order.labels
        ],
    }


def process_order(
    payload: Any,
    context: ExportContext,
    secondary_format: str | None = None,
    now: datetime | None = None,
) -> ExportResult:
    """Run one export end to end.

    Validation errors surface before anything is rendered. An upload failure
    aborts before the webhook is called. A webhook failure is logged and does
    not affect the result.
    """

    order = parse_order(payload)
    fmt = secondary_format or context.settings.secondary_format
    artifacts = render_artifacts(order, fmt)
    logger.info(
        f"[Export] Rendered {len(artifacts)} artifacts for {order.ref_id} "
        f"({order.total_labels} labels, {len(order.labels)} designs)"
    )

    moment = now or datetime.now(timezone.utc)
    urls: dict[str, str] = {}
    for artifact in artifacts:
        key = build_key(context.settings.key_prefix, order.ref_id, artifact.extension, moment)
        try:
            context.storage.put_bytes(key, artifact.data, artifact.content_type)
            urls[artifact.kind] = context.storage.get_url(key)
        except UploadError:
            logger.error(f"[Export] Upload of {key} failed for {order.ref_id}")
            raise

    try:
        context.notifier.notify(build_notification(order, urls))
    except NotificationError as exc:
        logger.warning(f"[Export] Notification for {order.ref_id} failed: {exc}")

    return ExportResult(
        ref_id=order.ref_id,
        total_labels=order.total_labels,
        urls=urls,
    )
