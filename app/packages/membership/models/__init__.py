"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from app.packages.membership.models.logbook import LogbookEntry
from app.packages.membership.models.meeting import Attendance, Meeting
from app.packages.membership.models.member import Member
from app.packages.membership.models.membership import Membership
from app.packages.membership.models.workgroup import Workgroup

__all__ = [
    "Attendance",
    "LogbookEntry",
    "Meeting",
    "Member",
    "Membership",
    "Workgroup",
]
