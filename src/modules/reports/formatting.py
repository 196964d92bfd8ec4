"""Display formatting shared by the activity feed, reports and exports.

Month names are spelled out here instead of relying on ``strftime("%b")``
so output does not depend on the process locale.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Union

from django.utils import timezone

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def _local(value: datetime) -> datetime:
    return timezone.localtime(value) if timezone.is_aware(value) else value


def format_date(value: Union[date, datetime]) -> str:
    """``05-Mar-24``."""
    if isinstance(value, datetime):
        value = _local(value)
    return f"{value.day:02d}-{MONTH_ABBREVIATIONS[value.month - 1]}-{value.year % 100:02d}"


def format_datetime(value: datetime) -> str:
    """``05-Mar-24, 02:07 PM``."""
    value = _local(value)
    hour = value.hour % 12 or 12
    meridiem = "PM" if value.hour >= 12 else "AM"
    return f"{format_date(value)}, {hour:02d}:{value.minute:02d} {meridiem}"


def month_label(year: int, month: int) -> str:
    """``Mar 24``."""
    return f"{MONTH_ABBREVIATIONS[month - 1]} {year % 100:02d}"


def time_ago(value: datetime, now: datetime) -> str:
    hours = int((now - value).total_seconds() // 3600)
    if hours < 1:
        return "Just now"
    if hours < 24:
        return f"{hours} hours ago"
    days = hours // 24
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"
