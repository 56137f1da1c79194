from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from apps.core.querysets import UserManager
from libs.models import BaseModel


class User(BaseModel, AbstractBaseUser, PermissionsMixin):
    username = models.CharField(max_length=100, unique=True, verbose_name=_("Username"))
    email = models.EmailField(unique=True, verbose_name=_("Email"))
    first_name = models.CharField(max_length=30, blank=True, verbose_name=_("First name"))
    last_name = models.CharField(max_length=30, blank=True, verbose_name=_("Last name"))

    is_active = models.BooleanField(default=True, verbose_name=_("Active"))
    is_staff = models.BooleanField(default=False, verbose_name=_("Staff"))
    date_joined = models.DateTimeField(default=timezone.now, verbose_name=_("Date joined"))

    job_title = models.ForeignKey(
        "JobTitle",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
        verbose_name=_("Job title"),
    )

    # Running ledger balance. Mutated only through apps.payroll.services.payroll_ledger.
    balance = models.DecimalField(max_digits=20, decimal_places=2, default=0, verbose_name=_("Balance"))

    role = models.ForeignKey(
        "Role",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="users",
        verbose_name=_("Role"),
    )

    objects = UserManager()

    USERNAME_FIELD = "username"
    REQUIRED_FIELDS = ["email"]

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        db_table = "core_user"

    def __str__(self):
        return f"{self.username} - {self.get_full_name()}"

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def get_short_name(self):
        return self.first_name

    def has_permission(self, permission_code: str) -> bool:
        """Check if user has a specific permission through their role"""
        if self.is_superuser:
            return True

        if self.role is None:
            return False

        return self.role.permissions.filter(code=permission_code).exists()
