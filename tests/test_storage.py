import os
import tempfile
import unittest
from datetime import datetime, timezone
from unittest.mock import Mock

from botocore.exceptions import ClientError

from nameplate_config import Settings
from nameplate_errors import UploadError
from storage import LocalStorage, S3Storage, build_key, get_storage

_NOW = datetime(2026, 10, 18, 12, 30, 5, tzinfo=timezone.utc)


class BuildKeyTests(unittest.TestCase):
    def test_key_layout(self) -> None:
        self.assertEqual(
            build_key("nameplates", "R1", "xlsx", _NOW),
            "nameplates/R1-20261018T123005Z.xlsx",
        )

    def test_slashes_in_ref_and_prefix(self) -> None:
        self.assertEqual(
            build_key("/a/b/", "PO/7", "pdf", _NOW), "a/b/PO-7-20261018T123005Z.pdf"
        )
        self.assertEqual(build_key("", "R1", "html", _NOW), "R1-20261018T123005Z.html")


class LocalStorageTests(unittest.TestCase):
    def test_put_and_url(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            storage = LocalStorage(tmp)
            storage.put_bytes("nameplates/R1.pdf", b"%PDF", "application/pdf")
            path = os.path.join(tmp, "nameplates", "R1.pdf")
            with open(path, "rb") as handle:
                self.assertEqual(handle.read(), b"%PDF")
            self.assertEqual(storage.get_url("nameplates/R1.pdf"), os.path.abspath(path))

    def test_base_url(self) -> None:
        storage = LocalStorage("unused", "http://files.local/")
        self.assertEqual(storage.get_url("a/b.xlsx"), "http://files.local/a/b.xlsx")

    def test_write_failure_is_upload_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = os.path.join(tmp, "file")
            with open(blocker, "wb") as handle:
                handle.write(b"x")
            storage = LocalStorage(blocker)
            with self.assertRaises(UploadError):
                storage.put_bytes("nested/R1.pdf", b"data", "application/pdf")


class S3StorageTests(unittest.TestCase):
    def test_put_object_arguments(self) -> None:
        client = Mock()
        storage = S3Storage("plates", "us-east-1", "k", "s", client=client)
        storage.put_bytes("nameplates/R1.xlsx", b"PK", "application/x")
        client.put_object.assert_called_once_with(
            Bucket="plates", Key="nameplates/R1.xlsx", Body=b"PK", ContentType="application/x"
        )

    def test_client_error_is_upload_error(self) -> None:
        client = Mock()
        client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )
        storage = S3Storage("plates", "us-east-1", "k", "s", client=client)
        with self.assertRaises(UploadError):
            storage.put_bytes("nameplates/R1.xlsx", b"PK", "application/x")

    def test_presigned_url(self) -> None:
        client = Mock()
        client.generate_presigned_url.return_value = "https://signed"
        storage = S3Storage("plates", "us-east-1", "k", "s", client=client)
        self.assertEqual(storage.get_url("nameplates/R1.pdf"), "https://signed")
        client.generate_presigned_url.assert_called_once_with(
            "get_object",
            Params={"Bucket": "plates", "Key": "nameplates/R1.pdf"},
            ExpiresIn=7 * 24 * 3600,
        )

    def test_public_base_url_skips_signing(self) -> None:
        client = Mock()
        storage = S3Storage(
            "plates", "us-east-1", "k", "s", public_base_url="https://cdn.example/", client=client
        )
        self.assertEqual(storage.get_url("a.pdf"), "https://cdn.example/a.pdf")
        client.generate_presigned_url.assert_not_called()


class GetStorageTests(unittest.TestCase):
    def test_local_backend(self) -> None:
        storage = get_storage(Settings(storage_backend="local", local_dir="out"))
        self.assertIsInstance(storage, LocalStorage)


if __name__ == "__main__":
    unittest.main()
