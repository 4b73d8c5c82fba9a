from datetime import datetime, timezone
from typing import Optional


def format_relative_time(value: datetime, now: Optional[datetime] = None) -> str:
    """把时间格式化为相对时间，如 "2h ago"、"3d ago"，一周以上显示日期"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    diff = int((now - value).total_seconds())

    if diff < 60:
        return "just now"
    if diff < 3600:
        return f"{diff // 60}m ago"
    if diff < 86400:
        return f"{diff // 3600}h ago"
    if diff < 604800:
        return f"{diff // 86400}d ago"

    return f"{value.strftime('%b')} {value.day}, {value.year}"
