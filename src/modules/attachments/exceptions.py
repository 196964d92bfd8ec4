"""Attachment exceptions."""

from __future__ import annotations


class UploadError(Exception):
    """A single file could not be stored.

    Batch uploads catch this per file and leave the file out of the
    resulting URL list.
    """
