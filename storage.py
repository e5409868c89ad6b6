"""Object storage for generated artifacts."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from nameplate_config import Settings
from nameplate_errors import UploadError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y%m%dT%H%M%SZ"
PRESIGNED_URL_EXPIRY = 7 * 24 * 3600


def build_key(prefix: str, ref_id: str, extension: str, now: datetime | None = None) -> str:
    """Return ``{prefix}/{ref_id}-{timestamp}.{extension}``."""

    moment = now or datetime.now(timezone.utc)
    stamp = moment.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
    safe_ref = ref_id.replace("/", "-").strip()
    name = f"{safe_ref}-{stamp}.{extension}"
    prefix = (prefix or "").strip("/")
    return f"{prefix}/{name}" if prefix else name


class StorageBackend(ABC):
    @abstractmethod
    def put_bytes(self, key: str, data: bytes, content_type: str) -> str:
        """Store ``data`` under ``key``; raise :class:`UploadError` on failure."""

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Return a URL the artifact can be downloaded from."""


class LocalStorage(StorageBackend):
    """Writes artifacts below a directory; handy for development and the CLI."""

    def __init__(self, base_dir: str, base_url: str = "") -> None:
        self.base_dir = base_dir
        self.base_url = base_url.rstrip("/")

    def _abs_path(self, key: str) -> str:
        parts = [part for part in key.split("/") if part not in ("", ".", "..")]
        return os.path.join(self.base_dir, *parts)

    def put_bytes(self, key: str, data: bytes, content_type: str) -> str:
        path = self._abs_path(key)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "wb") as handle:
                handle.write(data)
        except OSError as exc:
            raise UploadError(f"Could not write {path}: {exc}") from exc
        logger.info(f"[Storage] Wrote {len(data)} bytes to {path} ({content_type})")
        return key

    def get_url(self, key: str) -> str:
        if self.base_url:
            return f"{self.base_url}/{key}"
        return os.path.abspath(self._abs_path(key))


class S3Storage(StorageBackend):
    def __init__(
        self,
        bucket_name: str,
        region: str,
        access_key: str,
        secret_key: str,
        public_base_url: str = "",
        client=None,
    ) -> None:
        self.s3 = client or boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
        )
        self.bucket = bucket_name
        self.public_base_url = public_base_url.rstrip("/")

    def put_bytes(self, key: str, data: bytes, content_type: str) -> str:
        try:
            self.s3.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (BotoCoreError, ClientError) as exc:
            raise UploadError(f"Upload of s3://{self.bucket}/{key} failed: {exc}") from exc
        logger.info(f"[Storage] Uploaded s3://{self.bucket}/{key} ({content_type})")
        return key

    def get_url(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{key}"
        try:
            return self.s3.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": key},
                ExpiresIn=PRESIGNED_URL_EXPIRY,
            )
        except (BotoCoreError, ClientError) as exc:
            raise UploadError(f"Could not sign URL for {key}: {exc}") from exc


def get_storage(settings: Settings) -> StorageBackend:
    """Return the backend selected by ``settings``."""

    if settings.storage_backend == "s3":
        return S3Storage(
            settings.s3_bucket,
            settings.aws_region,
            settings.aws_access_key_id,
            settings.aws_secret_access_key,
            public_base_url=settings.public_base_url,
        )
    return LocalStorage(settings.local_dir, settings.public_base_url)
