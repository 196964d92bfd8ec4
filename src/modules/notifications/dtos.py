"""Notification DTOs.

``NotificationDraft`` is what callers hand to ``notify``/``broadcast``;
``Notification`` is the queued toast with its generated id, timestamp
and expiry.  Both are JSON-serialisable so a draft can travel over the
``notifications`` channel unchanged.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from django.db import models
from pydantic import BaseModel, ConfigDict, Field, field_validator


class NotificationType(models.TextChoices):
    SUCCESS = "success", "Success"
    ERROR = "error", "Error"
    INFO = "info", "Info"
    WARNING = "warning", "Warning"


class SoundCue(models.TextChoices):
    DING = "ding", "Ding"
    NOTIFICATION = "notification", "Notification"
    CLAP = "clap", "Clap"
    ERROR = "error", "Error"
    NONE = "none", "None"


class NotificationDraft(BaseModel):
    """A toast request.

    ``duration`` is in milliseconds; ``None`` or ``0`` means the
    configured default.
    """

    model_config = ConfigDict(frozen=True)

    type: NotificationType
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(default="", max_length=2000)
    sound: Optional[SoundCue] = None
    duration: Optional[int] = Field(default=None, ge=0)

    @field_validator("title")
    @classmethod
    def title_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title must not be blank.")
        return v


class Notification(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: UUID
    type: NotificationType
    title: str
    message: str
    sound: Optional[SoundCue]
    duration: int
    timestamp: datetime
    expires_at: datetime

    @classmethod
    def from_draft(
        cls, draft: NotificationDraft, now: datetime, default_duration: int
    ) -> Notification:
        duration = draft.duration or default_duration
        return cls(
            id=uuid4(),
            type=draft.type,
            title=draft.title,
            message=draft.message,
            sound=draft.sound,
            duration=duration,
            timestamp=now,
            expires_at=now + timedelta(milliseconds=duration),
        )

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
