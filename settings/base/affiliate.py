from .base import config

# Fallbacks used when no AffiliateConfig row exists yet
AFFILIATE_MATURATION_DAYS = config("AFFILIATE_MATURATION_DAYS", default=14, cast=int)
AFFILIATE_MIN_PAYOUT = config("AFFILIATE_MIN_PAYOUT", default=5000, cast=int)
