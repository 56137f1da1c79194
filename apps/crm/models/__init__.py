from .client import Client
from .project import Project, ProjectRenewal
from .task import Task
from .transaction import Transaction

__all__ = [
    "Client",
    "Project",
    "ProjectRenewal",
    "Task",
    "Transaction",
]
