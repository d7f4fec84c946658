"""成员管理业务包：工作组层级、成员、成员关系、会议、出勤与日志条目。"""

from app.packages.types import AppPackage

from .api.v1 import api_router
from .core.config import get_settings
from .core.exceptions import EXCEPTION_HANDLERS
from .core.logger import logger, setup_logging
from .core.responses import create_response
from .db.init_db import init_db

package = AppPackage(
    name="membership",
    description="工作组、成员与会议管理",
    api_router=api_router,
    get_settings=get_settings,
    setup_logging=setup_logging,
    logger=logger,
    init_db=init_db,
    create_response=create_response,
    exception_handlers=EXCEPTION_HANDLERS,
)

__all__ = ["package", "api_router", "get_settings"]
