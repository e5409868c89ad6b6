"""Environment-driven settings for the export service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from nameplate_errors import ConfigurationError

STORAGE_BACKENDS = ("s3", "local")
DEFAULT_KEY_PREFIX = "nameplates"
DEFAULT_REGION = "us-east-1"
DEFAULT_LOCAL_DIR = "output"
DEFAULT_WEBHOOK_TIMEOUT = 10.0
DEFAULT_SECONDARY_FORMAT = "pdf"


@dataclass(frozen=True)
class Settings:
    storage_backend: str = "s3"
    s3_bucket: str = ""
    aws_region: str = DEFAULT_REGION
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    key_prefix: str = DEFAULT_KEY_PREFIX
    public_base_url: str = ""
    local_dir: str = DEFAULT_LOCAL_DIR
    webhook_url: str = ""
    webhook_timeout: float = DEFAULT_WEBHOOK_TIMEOUT
    secondary_format: str = DEFAULT_SECONDARY_FORMAT


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``environ`` (defaults to ``os.environ``).

    Raises :class:`ConfigurationError` when the selected storage backend is
    missing what it needs. The webhook is optional.
    """

    env = os.environ if environ is None else environ

    def get(name: str, default: str = "") -> str:
        return (env.get(name) or default).strip()

    backend = get("NAMEPLATE_STORAGE_BACKEND", "s3").lower()
    if backend not in STORAGE_BACKENDS:
        raise ConfigurationError(
            f"Unknown NAMEPLATE_STORAGE_BACKEND '{backend}'. "
            f"Expected one of: {', '.join(STORAGE_BACKENDS)}"
        )

    secondary = get("NAMEPLATE_SECONDARY_FORMAT", DEFAULT_SECONDARY_FORMAT).lower()
    if secondary not in ("pdf", "preview"):
        raise ConfigurationError(
            f"Invalid NAMEPLATE_SECONDARY_FORMAT '{secondary}'. Expected pdf or preview."
        )

    timeout_raw = get("NAMEPLATE_WEBHOOK_TIMEOUT", str(DEFAULT_WEBHOOK_TIMEOUT))
    try:
        webhook_timeout = float(timeout_raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"Invalid NAMEPLATE_WEBHOOK_TIMEOUT '{timeout_raw}': {exc}"
        ) from exc

    settings = Settings(
        storage_backend=backend,
        s3_bucket=get("NAMEPLATE_S3_BUCKET"),
        aws_region=get("AWS_REGION", DEFAULT_REGION),
        aws_access_key_id=get("AWS_ACCESS_KEY_ID"),
        aws_secret_access_key=get("AWS_SECRET_ACCESS_KEY"),
        key_prefix=get("NAMEPLATE_KEY_PREFIX", DEFAULT_KEY_PREFIX).strip("/"),
        public_base_url=get("NAMEPLATE_PUBLIC_BASE_URL").rstrip("/"),
        local_dir=get("NAMEPLATE_LOCAL_DIR", DEFAULT_LOCAL_DIR),
        webhook_url=get("NAMEPLATE_WEBHOOK_URL"),
        webhook_timeout=webhook_timeout,
        secondary_format=secondary,
    )

    if backend == "s3":
        missing = [
            name
            for name, value in (
                ("NAMEPLATE_S3_BUCKET", settings.s3_bucket),
                ("AWS_ACCESS_KEY_ID", settings.aws_access_key_id),
                ("AWS_SECRET_ACCESS_KEY", settings.aws_secret_access_key),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"S3 storage requires: {', '.join(missing)}"
            )

    return settings


__all__ = ["STORAGE_BACKENDS", "Settings", "load_settings"]
