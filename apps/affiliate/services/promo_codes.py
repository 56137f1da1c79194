import logging

from django.core.exceptions import ValidationError

from ..models import PromoCode, normalize_promo_code

logger = logging.getLogger(__name__)


def create_promo_code(organization, user, code: str) -> PromoCode:
    """Create a promo code; codes are stored lower-case without whitespace.

    Raises:
        ValidationError: Empty code or code already taken
    """
    normalized = normalize_promo_code(code)
    if not normalized:
        raise ValidationError({"code": ["Promo code cannot be empty"]})
    if PromoCode.objects.filter(code=normalized).exists():
        raise ValidationError({"code": ["Promo code already exists"]})

    promo = PromoCode.objects.create(organization=organization, user=user, code=normalized)
    logger.info("Created promo code %s for organization %s", normalized, organization.pk)
    return promo


def delete_promo_code(promo: PromoCode):
    logger.info("Deleting promo code %s", promo.code)
    promo.delete()


def list_promo_codes(organization=None, user=None):
    queryset = PromoCode.objects.select_related("organization")
    if organization is not None:
        queryset = queryset.filter(organization=organization)
    if user is not None:
        queryset = queryset.filter(user=user)
    return queryset


def validate_promo_code(code: str):
    """Return the active promo code matching ``code`` or None."""
    return PromoCode.objects.filter(code=normalize_promo_code(code), is_active=True).first()
