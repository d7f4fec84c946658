"""通用响应封装模型。"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """系统统一的响应外层结构。"""

    msg: str
    data: Optional[T] = None
    code: int
    meta: Optional[Dict[str, Any]] = None


class PagedPayload(BaseModel, Generic[T]):
    """分页列表的数据部分。"""

    total: int
    page: int
    size: int
    list: List[T]


def normalize_optional_text(value: Optional[str]) -> Optional[str]:
    """去除首尾空白，空串视为未填写。"""
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None
