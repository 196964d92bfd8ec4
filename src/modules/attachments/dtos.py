"""File tree DTOs."""

from __future__ import annotations

from typing import List, Optional

from django.db import models
from pydantic import BaseModel, ConfigDict


class NodeType(models.TextChoices):
    FOLDER = "folder", "Folder"
    FILE = "file", "File"


class FileNodeDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: NodeType
    children: List[FileNodeDTO] = []
    url: Optional[str] = None
    upload_date: Optional[str] = None
