"""pytest 夹具：使用临时 SQLite 文件库运行整套接口测试。"""

import os
import shutil
import tempfile
from typing import Iterator

# 引擎在导入应用时创建，必须先指向临时数据库
_TMP_DIR = tempfile.mkdtemp(prefix="membership-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["TIMEZONE"] = "UTC"
os.environ["LOG_DIR"] = os.path.join(_TMP_DIR, "log")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from app.main import app  # noqa: E402
from app.packages.membership.db import session as db_session  # noqa: E402
from app.packages.membership.db.init_db import init_db  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def test_database() -> Iterator[None]:
    """建表并写入根工作组，测试结束后删除临时目录。"""
    init_db()
    yield
    db_session.engine.dispose()
    shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture()
def db_session_fixture() -> Iterator[Session]:
    """直接操作数据库的会话，用于构造接口层无法写入的数据。"""
    session = db_session.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client() -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client
