"""时区工具方法：支持根据配置动态获取当前时区。"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from zoneinfo import ZoneInfo

from app.packages.membership.core.config import get_settings


def get_timezone() -> ZoneInfo:
    """返回配置指定的时区信息。"""
    return get_settings().timezone_info


def now() -> datetime:
    """返回当前时区的时间。"""
    return datetime.now(get_timezone())


def to_local(value: Optional[datetime]) -> Optional[datetime]:
    """将 ``datetime`` 转换为配置时区，无时区对象按 UTC 解释（SQLite 读回的值不带时区）。"""
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(get_timezone())


def to_utc(value: Optional[datetime]) -> Optional[datetime]:
    """统一转换为 UTC，便于跨数据库比较与作为主键存储。"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """将时间格式化为 ISO-8601 字符串。"""
    localized = to_local(value)
    if localized is None:
        return None
    return localized.isoformat()
