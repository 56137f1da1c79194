from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel


class Project(BaseModel):
    client = models.ForeignKey(
        "Client", on_delete=models.CASCADE, related_name="projects", verbose_name=_("Client")
    )
    name = models.CharField(max_length=255, verbose_name=_("Name"))
    team = models.ManyToManyField(
        settings.AUTH_USER_MODEL, related_name="projects", blank=True, verbose_name=_("Team")
    )
    start_date = models.DateField(null=True, blank=True, verbose_name=_("Start date"))
    end_date = models.DateField(null=True, blank=True, db_index=True, verbose_name=_("End date"))

    class Meta:
        verbose_name = _("Project")
        verbose_name_plural = _("Projects")
        db_table = "crm_project"
        ordering = ["-end_date"]

    def __str__(self):
        return self.name


class ProjectRenewal(BaseModel):
    """A project extended by the client for another term."""

    project = models.ForeignKey(
        "Project", on_delete=models.CASCADE, related_name="renewals", verbose_name=_("Project")
    )
    renewal_date = models.DateField(db_index=True, verbose_name=_("Renewal date"))
    renewed_amount = models.DecimalField(
        max_digits=20, decimal_places=2, default=0, verbose_name=_("Renewed amount")
    )

    class Meta:
        verbose_name = _("Project renewal")
        verbose_name_plural = _("Project renewals")
        db_table = "crm_project_renewal"
        ordering = ["-renewal_date"]

    def __str__(self):
        return f"{self.project} renewed {self.renewal_date}"
