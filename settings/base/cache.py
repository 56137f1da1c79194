from .base import config

CACHE_URL = config("CACHE_URL", default="redis://127.0.0.1:6379/1")
CACHE_PREFIX = config("CACHE_PREFIX", default="")

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": CACHE_URL,
        "KEY_PREFIX": CACHE_PREFIX + "default",
    },
}
