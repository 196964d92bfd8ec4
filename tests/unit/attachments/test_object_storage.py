"""Unit tests for the bucket/path object storage facade."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from django.core.files.base import ContentFile
from django.core.files.storage import FileSystemStorage

from modules.attachments.exceptions import UploadError
from modules.attachments.storage import ObjectStorage, order_path

pytestmark = pytest.mark.unit


@pytest.fixture()
def storage(tmp_path):
    return ObjectStorage(FileSystemStorage(location=tmp_path, base_url="/media/"))


def _file(name="logo.PNG", content=b"\x89PNG"):
    return ContentFile(content, name=name)


class TestUpload:
    def test_returns_public_url_under_bucket_and_path(self, storage, tmp_path):
        url = storage.upload(_file(), "mockups", order_path("SP-2024-0001"))

        assert url.startswith("/media/mockups/orders/SP-2024-0001/")
        assert url.endswith(".png")
        stored = list((tmp_path / "mockups" / "orders" / "SP-2024-0001").iterdir())
        assert len(stored) == 1

    def test_each_upload_gets_a_fresh_name(self, storage):
        first = storage.upload(_file(), "attachments", "orders/X")
        second = storage.upload(_file(), "attachments", "orders/X")
        assert first != second

    def test_unknown_bucket_is_rejected(self, storage):
        with pytest.raises(UploadError):
            storage.upload(_file(), "invoices", "orders/X")

    def test_backend_failure_raises_upload_error(self):
        backend = MagicMock()
        backend.save.side_effect = OSError("disk full")
        with pytest.raises(UploadError):
            ObjectStorage(backend).upload(_file(), "mockups", "orders/X")


class TestUploadBatch:
    def test_failed_files_are_left_out(self):
        backend = MagicMock()
        backend.save.side_effect = ["mockups/orders/X/a.png", OSError("boom"), "mockups/orders/X/c.png"]
        backend.url.side_effect = lambda name: f"/media/{name}"

        urls = ObjectStorage(backend).upload_batch(
            [_file("a.png"), _file("b.png"), _file("c.png")], "mockups", "orders/X"
        )

        assert urls == ["/media/mockups/orders/X/a.png", "/media/mockups/orders/X/c.png"]

    def test_empty_batch(self, storage):
        assert storage.upload_batch([], "mockups", "orders/X") == []


class TestDelete:
    def test_delete_existing_file(self, storage, tmp_path):
        url = storage.upload(_file(), "attachments", "orders/X")
        name = url.rsplit("/", 1)[1]

        assert storage.delete("attachments", f"orders/X/{name}") is True
        assert not (tmp_path / "attachments" / "orders" / "X" / name).exists()

    def test_delete_missing_file(self, storage):
        assert storage.delete("attachments", "orders/X/nothing.pdf") is False
