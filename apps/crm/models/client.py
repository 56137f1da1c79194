from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _

from libs.models import BaseModel


class Client(BaseModel):
    name = models.CharField(max_length=255, verbose_name=_("Name"))
    manager = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="managed_clients",
        verbose_name=_("Manager"),
    )
    is_active = models.BooleanField(default=True, verbose_name=_("Active"))

    class Meta:
        verbose_name = _("Client")
        verbose_name_plural = _("Clients")
        db_table = "crm_client"
        ordering = ["name"]

    def __str__(self):
        return self.name
