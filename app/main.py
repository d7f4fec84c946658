"""应用入口：根据启用的业务包装配 FastAPI 实例。"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.middleware.request_id import RequestIdMiddleware
from app.packages import get_active_package

package = get_active_package()
package.setup_logging()
settings = package.get_settings()
logger = package.logger
create_response = package.create_response


app = FastAPI(title=settings.project_name, description=package.description, debug=settings.debug)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestIdMiddleware)

for exc_class, handler in package.exception_handlers.items():
    app.add_exception_handler(exc_class, handler)


@app.on_event("startup")
async def startup_event() -> None:
    """建表并补齐根工作组，随后输出服务地址。"""
    package.init_db()
    logger.info("SUCCESS - %s running at http://127.0.0.1:%s", package.name, settings.app_port)


@app.get("/health")
async def health_check() -> dict:
    """健康检查，供编排器探活。"""
    return create_response("OK", {"status": "healthy", "package": package.name})


app.include_router(package.api_router, prefix=settings.api_v1_str)
