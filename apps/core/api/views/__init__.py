from .job_title import JobTitleViewSet
from .user import UserViewSet

__all__ = ["JobTitleViewSet", "UserViewSet"]
