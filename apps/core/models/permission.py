from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel


class Permission(BaseModel):
    """Permission code collected from the viewsets (``<prefix>.<action>``)"""

    code = models.CharField(max_length=100, unique=True, verbose_name=_("Permission code"))
    name = models.CharField(max_length=255, blank=True, verbose_name=_("Permission name"))
    description = models.CharField(max_length=255, blank=True, verbose_name=_("Description"))
    module = models.CharField(max_length=100, blank=True, verbose_name=_("Module"))
    submodule = models.CharField(max_length=100, blank=True, verbose_name=_("Submodule"))

    class Meta:
        verbose_name = _("Permission")
        verbose_name_plural = _("Permissions")
        db_table = "core_permission"
        ordering = ["code"]

    def __str__(self):
        return f"{self.code} - {self.name}" if self.name else self.code
