from django.apps import AppConfig


class CoreConfig(AppConfig):
    """Users, job titles and role-based permissions"""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.core"
    verbose_name = "Core"
