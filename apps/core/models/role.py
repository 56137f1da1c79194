from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel


class Role(BaseModel):
    """Named group of permissions assigned to users"""

    code = models.CharField(max_length=50, unique=True, verbose_name=_("Role code"))
    name = models.CharField(max_length=100, unique=True, verbose_name=_("Role name"))
    description = models.CharField(max_length=255, blank=True, verbose_name=_("Description"))
    permissions = models.ManyToManyField(
        "Permission",
        related_name="roles",
        verbose_name=_("Permissions"),
        blank=True,
    )  # type: ignore

    class Meta:
        verbose_name = _("Role")
        verbose_name_plural = _("Roles")
        db_table = "core_role"
        ordering = ["code"]

    def __str__(self):
        return f"{self.code} - {self.name}"
