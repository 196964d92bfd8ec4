"""Object storage for order mockups and attachments.

Wraps a Django ``Storage`` backend so files are addressed the way the
order desk thinks about them: a bucket (``mockups`` or ``attachments``)
and a path inside it (``orders/<order code>``).  Every upload gets a
random file name that keeps the original extension.
"""

from __future__ import annotations

import posixpath
import secrets
from typing import Iterable, List, Optional

import structlog
from django.core.files import File
from django.core.files.storage import Storage, default_storage

from modules.attachments.exceptions import UploadError

logger = structlog.get_logger(__name__)

MOCKUPS_BUCKET = "mockups"
ATTACHMENTS_BUCKET = "attachments"
BUCKETS = (MOCKUPS_BUCKET, ATTACHMENTS_BUCKET)


def order_path(order_code: str) -> str:
    return f"orders/{order_code}"


class ObjectStorage:
    """Bucket/path facade over a Django storage backend."""

    def __init__(self, storage: Optional[Storage] = None) -> None:
        self._storage = storage or default_storage

    def upload(self, file: File, bucket: str, path: str) -> str:
        """Store ``file`` under ``<bucket>/<path>/`` and return its public URL.

        Raises:
            UploadError: unknown bucket or the backend failed.
        """
        if bucket not in BUCKETS:
            raise UploadError(f"Unknown bucket '{bucket}'.")
        extension = posixpath.splitext(file.name or "")[1].lower()
        name = posixpath.join(bucket, path.strip("/"), f"{secrets.token_hex(8)}{extension}")
        try:
            stored = self._storage.save(name, file)
            url = self._storage.url(stored)
        except Exception as exc:
            raise UploadError(f"Failed to upload {file.name}.") from exc
        logger.info("attachment.uploaded", bucket=bucket, name=stored)
        return url

    def delete(self, bucket: str, path: str) -> bool:
        name = posixpath.join(bucket, path.lstrip("/"))
        try:
            if not self._storage.exists(name):
                return False
            self._storage.delete(name)
        except OSError:
            logger.exception("attachment.delete_failed", bucket=bucket, path=path)
            return False
        logger.info("attachment.deleted", bucket=bucket, path=path)
        return True

    def upload_batch(self, files: Iterable[File], bucket: str, path: str) -> List[str]:
        """Upload files one at a time, in order.

        A file that fails is logged and left out; the rest still upload.
        """
        urls = []
        for file in files:
            try:
                urls.append(self.upload(file, bucket, path))
            except UploadError:
                logger.warning(
                    "attachment.upload_skipped",
                    bucket=bucket,
                    path=path,
                    filename=file.name,
                    exc_info=True,
                )
        return urls
