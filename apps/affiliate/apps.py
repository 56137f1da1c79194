from django.apps import AppConfig


class AffiliateAppConfig(AppConfig):
    """Configuration for Affiliate application"""

    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.affiliate"
    verbose_name = "Affiliate Program"
