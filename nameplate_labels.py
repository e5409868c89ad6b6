#!/usr/bin/env python3
"""Render nameplate order files into a spreadsheet plus a proof or preview."""

import argparse
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Sequence

from dotenv import load_dotenv

from nameplate_config import load_settings
from nameplate_errors import ConfigurationError, UploadError, ValidationError
from nameplate_export import SECONDARY_FORMATS
from nameplate_service import build_context, process_order, render_artifacts
from order_data import parse_order


def _load_payload(path: str) -> Any:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            return json.load(handle)
    except OSError as exc:
        raise SystemExit(f"Cannot read order file '{path}': {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Order file '{path}' is not valid JSON: {exc}") from exc


def write_local(payload: Any, secondary_format: str, output_dir: str) -> str:
    """Render ``payload`` and write the artifacts into ``output_dir``."""

    try:
        order = parse_order(payload)
        artifacts = render_artifacts(order, secondary_format)
    except ValidationError as exc:
        raise SystemExit(f"Invalid order: {exc}") from exc

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[str] = []
    for artifact in artifacts:
        target = out_dir / f"{order.ref_id.replace('/', '-')}.{artifact.extension}"
        target.write_bytes(artifact.data)
        written.append(str(target))

    return (
        f"Wrote {', '.join(written)} "
        f"({order.total_labels} labels, {len(order.labels)} designs)"
    )


def upload(payload: Any, secondary_format: str) -> str:
    """Run the full export with storage and webhook settings from the env."""

    try:
        context = build_context(load_settings())
        result = process_order(payload, context, secondary_format)
    except ConfigurationError as exc:
        raise SystemExit(f"Configuration error: {exc}") from exc
    except ValidationError as exc:
        raise SystemExit(f"Invalid order: {exc}") from exc
    except UploadError as exc:
        raise SystemExit(f"Upload failed: {exc}") from exc

    return json.dumps(result.to_dict(), indent=2)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for nameplate order exports."""

    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Nameplate order JSON -> spreadsheet + PDF proof / HTML preview"
    )
    parser.add_argument(
        "order",
        nargs="?",
        help="Path to the order JSON file.",
    )
    parser.add_argument(
        "-f", "--format",
        choices=SECONDARY_FORMATS,
        default=os.getenv("NAMEPLATE_SECONDARY_FORMAT", "pdf"),
        help="Secondary artifact to render next to the spreadsheet (default: pdf).",
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=".",
        help="Directory for locally written artifacts (default: current directory).",
    )
    parser.add_argument(
        "--upload",
        action="store_true",
        help="Upload artifacts and send the webhook using NAMEPLATE_* settings.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    parser.add_argument(
        "--web",
        action="store_true",
        help="Start the HTTP export service instead of processing a file.",
    )
    parser.add_argument(
        "--web-host",
        default="127.0.0.1",
        help="Host/IP for the HTTP service (default: 127.0.0.1).",
    )
    parser.add_argument(
        "--web-port",
        type=int,
        default=5000,
        help="Port for the HTTP service (default: 5000).",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.web:
        from nameplate_web import run_web_app

        run_web_app(host=args.web_host, port=args.web_port)
        return 0

    if not args.order:
        parser.error("an order file is required unless --web is given")

    payload = _load_payload(args.order)
    if args.upload:
        message = upload(payload, args.format)
    else:
        message = write_local(payload, args.format, args.output_dir)

    print(message)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
