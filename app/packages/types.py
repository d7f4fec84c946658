"""业务包描述：主应用通过该结构装配路由、日志与数据库初始化。"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import Logger
from typing import Any, Awaitable, Callable, Mapping

from fastapi import APIRouter


@dataclass(frozen=True)
class AppPackage:
    """一个可被主应用挂载的业务包。

    ``exception_handlers`` 以异常类型为键，主应用启动时逐一注册。
    """

    name: str
    description: str
    api_router: APIRouter
    get_settings: Callable[[], Any]
    setup_logging: Callable[[], None]
    logger: Logger
    init_db: Callable[[], None]
    create_response: Callable[..., dict]
    exception_handlers: Mapping[type, Callable[..., Awaitable[Any]]] = field(default_factory=dict)
