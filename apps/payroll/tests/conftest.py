"""Shared pytest fixtures for payroll tests."""

import random
import string
from datetime import datetime
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.core.models import JobTitle
from apps.crm.constants import TaskStatus, TaskType, TransactionType
from apps.crm.models import Client, Task, Transaction

User = get_user_model()

MONTH = "2025-03"


def random_code(prefix: str = "", length: int = 6):
    """Generate a random code."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=length))
    return f"{prefix}{suffix}"


def aware(year, month, day, hour=12):
    return timezone.make_aware(datetime(year, month, day, hour))


@pytest.fixture
def month():
    return MONTH


@pytest.fixture
def job_title(db):
    """Create a test job title."""
    return JobTitle.objects.create(name=random_code("Designer "))


@pytest.fixture
def user(db, job_title):
    """Create an employee holding ``job_title``."""
    username = random_code("employee_")
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="testpass123",
        first_name="Test",
        last_name="Employee",
        job_title=job_title,
    )


@pytest.fixture
def other_user(db, job_title):
    username = random_code("colleague_")
    return User.objects.create_user(
        username=username, email=f"{username}@example.com", password="testpass123", job_title=job_title
    )


@pytest.fixture
def crm_client(db, user):
    """Create a client managed by ``user``."""
    return Client.objects.create(name="Acme", manager=user)


@pytest.fixture
def make_task(db, user):
    """Factory creating tasks assigned to ``user`` by default."""

    def _make_task(
        task_type=TaskType.CONTENT_POST, status=TaskStatus.DONE, completed_at=None, assignee=None, title="Task"
    ):
        return Task.objects.create(
            title=title,
            task_type=task_type,
            status=status,
            assignee=assignee or user,
            completed_at=completed_at if completed_at is not None else aware(2025, 3, 10),
        )

    return _make_task


@pytest.fixture
def make_sale(db, crm_client):
    """Factory creating verified income transactions for ``crm_client``."""

    def _make_sale(amount, date=None, is_verified=True, type=TransactionType.INCOME, client=None):
        return Transaction.objects.create(
            client=client or crm_client,
            amount=Decimal(str(amount)),
            date=date or aware(2025, 3, 12),
            type=type,
            is_verified=is_verified,
        )

    return _make_sale
