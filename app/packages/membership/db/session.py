"""数据库引擎与会话工厂。"""

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker

from app.packages.membership.core.config import get_settings

settings = get_settings()


def _connect_args(url: str) -> dict:
    # SQLite 连接默认只允许创建它的线程使用，FastAPI 的同步路由运行在线程池中
    if make_url(url).get_backend_name() == "sqlite":
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.sql_database_url,
    pool_pre_ping=True,
    echo=settings.database_echo,
    connect_args=_connect_args(settings.sql_database_url),
)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
