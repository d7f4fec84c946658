"""枚举定义：约束工作组、成员、会议与日志条目的可选值。"""

from enum import Enum


class WorkgroupStatusEnum(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class MemberStatusEnum(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class MembershipRoleEnum(str, Enum):
    """成员在工作组内担任的角色。"""

    PRESIDENT = "PRESIDENT"
    SECRETARY = "SECRETARY"
    ASSISTANT = "ASSISTANT"
    GUEST = "GUEST"


class MeetingTypeEnum(str, Enum):
    PRESENTIAL = "PRESENTIAL"
    ONLINE = "ONLINE"


class LogbookEntryTypeEnum(str, Enum):
    """日志条目的业务分类。"""

    ATTENDEES = "ATTENDEES"
    AGENDA = "AGENDA"
    DOCUMENTATION = "DOCUMENTATION"
    MINUTES = "MINUTES"


class LogbookEntryStatusEnum(str, Enum):
    ACTIVE = "ACTIVE"
    RESOLVED = "RESOLVED"
