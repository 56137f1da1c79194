from .job_title import JobTitle
from .permission import Permission
from .role import Role
from .user import User

__all__ = [
    "JobTitle",
    "Permission",
    "Role",
    "User",
]
