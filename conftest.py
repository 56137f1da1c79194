"""
Global pytest configuration.

The test database is reused between runs (``--reuse-db`` in pyproject addopts).
Pass ``--recreate-db`` or set ``PYTEST_RECREATE_DB=1`` after changing migrations.
"""

import os
import secrets
from unittest.mock import MagicMock

import pytest

INTEGRATION_MODULES = ("test_payroll_api", "test_affiliate_api", "test_permissions")


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--recreate-db",
        action="store_true",
        default=bool(os.getenv("PYTEST_RECREATE_DB")),
        help="Drop and re-create the test database instead of reusing it.",
    )


def pytest_configure(config: pytest.Config) -> None:
    if config.getoption("--recreate-db"):
        config.option.reuse_db = False
        config.option.create_db = True


@pytest.fixture(autouse=True)
def mock_celery_tasks(monkeypatch, settings):
    """
    Keep task dispatch away from the broker.

    Payroll recalculation signals call ``.delay()`` on commit. With
    CELERY_TASK_ALWAYS_EAGER the task runs in-process, otherwise dispatch is a no-op.
    Tests asserting on dispatch patch the task's ``delay`` directly.
    """

    def dispatch(task, args, kwargs):
        if getattr(settings, "CELERY_TASK_ALWAYS_EAGER", False):
            return task.apply(args=args, kwargs=kwargs)
        return MagicMock()

    monkeypatch.setattr("celery.app.task.Task.delay", lambda self, *args, **kwargs: dispatch(self, args, kwargs))
    monkeypatch.setattr(
        "celery.app.task.Task.apply_async",
        lambda self, args=None, kwargs=None, **options: dispatch(self, args or (), kwargs or {}),
    )


@pytest.fixture
def superuser(db):
    from apps.core.models import User

    return User.objects.create_superuser(
        username="payroll_admin",
        email="payroll_admin@example.com",
        password=secrets.token_urlsafe(16),
    )


@pytest.fixture
def api_client(request, superuser):
    """
    APIClient authenticated as a superuser, which bypasses RoleBasedPermission.

    Mark a test with ``@pytest.mark.rbp`` to get an anonymous client instead.
    """
    from rest_framework.test import APIClient

    client = APIClient()
    if request.node.get_closest_marker("rbp") is None:
        client.force_authenticate(user=superuser)
    return client


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Tag tests as unit or integration, and scheduling tests as slow."""
    for item in items:
        marker_names = {marker.name for marker in item.iter_markers()}

        if "slow" not in marker_names and ("resync" in item.nodeid or "periodic_task" in item.nodeid):
            item.add_marker(pytest.mark.slow)

        if "integration" in marker_names or "unit" in marker_names:
            continue

        if any(module in item.nodeid for module in INTEGRATION_MODULES) or "API" in str(item.cls):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
