"""配置模块：从环境变量与 ``.env`` 文件加载设置，并以单例形式提供。"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# app/packages/membership/core/config.py -> 项目根目录
BASE_DIR = Path(__file__).resolve().parents[4]

_TRUTHY = {"1", "true", "yes", "on"}


def _env_files() -> Iterator[Path]:
    """按优先级从低到高给出需要加载的环境文件。

    ``ENV_FILE`` 指定时只加载该文件；否则先加载 ``.env``，再叠加
    ``.env.<ENVIRONMENT>``（开启 DEBUG 且未指定环境时视为 development）。
    """
    override = os.getenv("ENV_FILE")
    if override:
        yield BASE_DIR / override
        return

    yield BASE_DIR / ".env"
    environment = os.getenv("ENVIRONMENT")
    if environment is None and (os.getenv("DEBUG") or "").strip().lower() in _TRUTHY:
        environment = "development"
    if environment:
        yield BASE_DIR / (environment if environment.startswith(".env") else f".env.{environment}")


def _load_environment() -> None:
    for index, path in enumerate(_env_files()):
        if path.exists():
            # 基础 .env 不覆盖进程环境，其余文件覆盖
            load_dotenv(path, override=index > 0 or bool(os.getenv("ENV_FILE")), encoding="utf-8")


_load_environment()


class Settings(BaseSettings):
    """应用设置，每个字段都可通过同名的大写环境变量覆盖。

    ``DATABASE_URL`` 优先于分项的 PostgreSQL 连接参数，测试中借此切换到 SQLite。
    """

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    project_name: str = Field(default="Membership Manager API", alias="PROJECT_NAME")
    api_v1_str: str = Field(default="/api/v1", alias="API_V1_STR")
    debug: bool = Field(default=False, alias="DEBUG")
    app_port: int = Field(default=8000, alias="APP_PORT")

    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")
    database_host: str = Field(default="localhost", alias="DATABASE_HOST")
    database_port: int = Field(default=5432, alias="DATABASE_PORT")
    database_user: str = Field(default="postgres", alias="DATABASE_USER")
    database_password: str = Field(default="postgres", alias="DATABASE_PASSWORD")
    database_name: str = Field(default="membership", alias="DATABASE_NAME")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="log", alias="LOG_DIR")
    log_file_name: str = Field(default="membership.log", alias="LOG_FILE_NAME")
    log_json: bool = Field(default=False, alias="LOG_JSON")

    # 对外输出时间使用的时区，数据库内统一存储 UTC
    timezone: str = Field(default="UTC", alias="TIMEZONE")
    root_workgroup_name: str = Field(default="Root group", alias="ROOT_WORKGROUP_NAME")

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper() or "INFO"

    @property
    def sql_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def log_directory(self) -> Path:
        path = Path(self.log_dir)
        return path if path.is_absolute() else BASE_DIR / path

    @property
    def log_file_path(self) -> Path:
        return self.log_directory / self.log_file_name

    @property
    def timezone_info(self) -> ZoneInfo:
        """无法识别的时区名称回退到 UTC。"""
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError):
            return ZoneInfo("UTC")


@lru_cache
def get_settings() -> Settings:
    return Settings()
