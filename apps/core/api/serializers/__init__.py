from .job_title import JobTitleSerializer
from .user import UserSerializer

__all__ = ["JobTitleSerializer", "UserSerializer"]
