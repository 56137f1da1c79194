from datetime import timedelta

from .base import config

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [
        "rest_framework_simplejwt.authentication.JWTAuthentication",
        "rest_framework.authentication.SessionAuthentication",
    ],
    "DEFAULT_PERMISSION_CLASSES": [
        "rest_framework.permissions.IsAuthenticated",
        "apps.core.api.permissions.RoleBasedPermission",
    ],
    "DEFAULT_THROTTLE_CLASSES": [
        "rest_framework.throttling.AnonRateThrottle",
        "rest_framework.throttling.UserRateThrottle",
    ],
    "DEFAULT_THROTTLE_RATES": {
        "anon": "100/minute",
        "user": "1000/minute",
    },
    "DEFAULT_FILTER_BACKENDS": [
        "django_filters.rest_framework.DjangoFilterBackend",
        "rest_framework.filters.OrderingFilter",
    ],
    "DEFAULT_PAGINATION_CLASS": "libs.drf.pagination.PageNumberWithSizePagination",
    "PAGE_SIZE": 25,
    "DEFAULT_SCHEMA_CLASS": "drf_spectacular.openapi.AutoSchema",
    "EXCEPTION_HANDLER": "libs.drf.custom_exception_handler.exception_handler",
    "COERCE_DECIMAL_TO_STRING": True,
}

# drf-spectacular settings
SPECTACULAR_SETTINGS = {
    "TITLE": "Incentive Compensation API",
    "DESCRIPTION": "Bonus rules, payroll ledger and referral commission ledger",
    "VERSION": config("API_DOC_VERSION", default="1.0.0"),
    "SERVE_INCLUDE_SCHEMA": False,
    "COMPONENT_SPLIT_REQUEST": True,
    "SORT_OPERATION_PARAMETERS": lambda parameter: parameter["name"],
    "TAGS": [],
    "SCHEMA_PATH_PREFIX": "/api/",
    "POSTPROCESSING_HOOKS": [
        "libs.drf.spectacular.schema_hooks.wrap_with_envelope",
    ],
}

SIMPLE_JWT = {
    "AUTH_HEADER_TYPES": ("Bearer",),
    "ACCESS_TOKEN_LIFETIME": timedelta(
        seconds=config(
            "ACCESS_TOKEN_LIFETIME",
            default=60 * 60 * 24,  # Default 1 days
            cast=int,
        )
    ),
    "REFRESH_TOKEN_LIFETIME": timedelta(
        seconds=config(
            "REFRESH_TOKEN_LIFETIME",
            default=60 * 60 * 24 * 30,  # Default 30 days
            cast=int,
        )
    ),
}
