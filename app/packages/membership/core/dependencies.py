"""FastAPI 依赖：每个请求独占一个数据库会话。"""

from collections.abc import Iterator

from sqlalchemy.orm import Session

from app.packages.membership.db import session as db_session


def get_db() -> Iterator[Session]:
    # 通过模块属性访问，测试可以整体替换会话工厂
    db = db_session.SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
