"""日志配置：控制台彩色输出、按天轮转的文件日志，以及贯穿请求的 request_id。"""

import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, Optional

from .config import get_settings

_request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)

_MODULE = __name__
_TEXT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s"


class _TZFormatter(logging.Formatter):
    """时间戳按配置时区输出；未指定 datefmt 时使用毫秒精度的 ISO 格式。"""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:  # noqa: N802
        dt = datetime.fromtimestamp(record.created, get_settings().timezone_info)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.isoformat(sep=" ", timespec="milliseconds")


class ColorFormatter(_TZFormatter):
    """按日志级别为整行着色，非终端输出时自动关闭颜色。"""

    RESET = "\033[0m"
    COLORS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[41m",
    }

    def __init__(self, fmt: Optional[str] = None, datefmt: Optional[str] = None, use_colors: Optional[bool] = None):
        super().__init__(fmt=fmt or _TEXT_FORMAT, datefmt=datefmt)
        self.use_colors = sys.stderr.isatty() if use_colors is None else use_colors

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelno) if self.use_colors else None
        return f"{color}{message}{self.RESET}" if color else message


class JsonFormatter(_TZFormatter):
    """每条记录输出一行 JSON，便于日志平台采集。"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "location": f"{record.module}:{record.lineno}",
            "request_id": getattr(record, "request_id", None),
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


class RequestIdFilter(logging.Filter):
    """把当前请求的 request_id 写入每条日志记录。"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id_ctx.get() or "-"
        return True


def setup_logging() -> None:
    """应用 dictConfig：app 与 uvicorn 日志共用控制台和文件两个输出。"""
    settings = get_settings()
    settings.log_directory.mkdir(parents=True, exist_ok=True)
    level = settings.log_level
    console_formatter = "json" if settings.log_json else "console"
    file_formatter = "json" if settings.log_json else "text"
    handlers = ["console", "file"]

    def _logger(propagate: bool = False) -> Dict[str, Any]:
        return {"handlers": handlers, "level": level, "propagate": propagate}

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"()": f"{_MODULE}.ColorFormatter"},
                "text": {"()": f"{_MODULE}._TZFormatter", "fmt": _TEXT_FORMAT},
                "json": {"()": f"{_MODULE}.JsonFormatter"},
            },
            "filters": {"request_id": {"()": f"{_MODULE}.RequestIdFilter"}},
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": console_formatter,
                    "filters": ["request_id"],
                },
                "file": {
                    "class": "logging.handlers.TimedRotatingFileHandler",
                    "level": level,
                    "formatter": file_formatter,
                    "filters": ["request_id"],
                    "filename": str(settings.log_file_path),
                    "when": "midnight",
                    "backupCount": 14,
                    "encoding": "utf-8",
                    "delay": True,
                },
            },
            "loggers": {
                "app": _logger(),
                "uvicorn": _logger(),
                "uvicorn.error": _logger(),
                "uvicorn.access": _logger(),
                "sqlalchemy.engine": {"level": "INFO" if settings.database_echo else "WARNING"},
            },
            "root": {"handlers": handlers, "level": level},
        }
    )


logger = logging.getLogger("app")


def set_request_id(request_id: Optional[str]) -> None:
    _request_id_ctx.set(request_id)


def get_request_id() -> Optional[str]:
    return _request_id_ctx.get()
