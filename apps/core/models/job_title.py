from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel


class JobTitle(BaseModel):
    """Job title shared by several users.

    Bonus rules and salary schemes can be owned by a job title, in which case
    they apply to every user holding it unless the user has their own.
    """

    name = models.CharField(max_length=100, unique=True, verbose_name=_("Name"))
    description = models.CharField(max_length=255, blank=True, verbose_name=_("Description"))

    class Meta:
        verbose_name = _("Job title")
        verbose_name_plural = _("Job titles")
        db_table = "core_job_title"
        ordering = ["name"]

    def __str__(self):
        return self.name
