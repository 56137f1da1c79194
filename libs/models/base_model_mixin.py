from django.db import models
from django.utils.translation import gettext_lazy as _


class BaseModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
        ordering = ["created_at"]


class VersionedConfigModel(BaseModel):
    """Base model for JSON configuration documents that are versioned, never edited in place.

    Every save of a new row takes the next version number; the row with the
    highest version is the active configuration.

    Attributes:
        config: JSON document holding the configuration values
        version: Auto-incrementing version number for tracking changes
    """

    config = models.JSONField(verbose_name=_("Configuration"))
    version = models.PositiveIntegerField(default=1, verbose_name=_("Version"))

    class Meta:
        abstract = True
        ordering = ["-version"]

    def __str__(self):
        return f"{self.__class__.__name__} v{self.version}"

    def save(self, *args, **kwargs):
        """Override save to auto-increment version if not specified."""
        if not self.pk:
            latest = self.__class__.objects.order_by("-version").first()
            if latest:
                self.version = latest.version + 1
        super().save(*args, **kwargs)

    @classmethod
    def get_active(cls):
        return cls.objects.order_by("-version").first()
