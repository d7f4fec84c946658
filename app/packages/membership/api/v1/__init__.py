"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from app.packages.membership.api.v1.endpoints import logbook_entries, meetings, members, memberships, workgroups

api_router = APIRouter()
api_router.include_router(workgroups.router)
api_router.include_router(members.router)
api_router.include_router(memberships.router)
api_router.include_router(meetings.router)
api_router.include_router(meetings.attendance_router)
api_router.include_router(logbook_entries.router)
