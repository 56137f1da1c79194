from django.apps import AppConfig


class CrmConfig(AppConfig):
    """Clients, projects, tasks and money transactions produced by the CRM surfaces"""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.crm"
    verbose_name = "CRM"
