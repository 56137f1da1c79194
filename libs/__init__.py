from .drf.base_viewset import BaseGenericViewSet, BaseModelViewSet, BaseReadOnlyModelViewSet
from .drf.pagination import PageNumberWithSizePagination
from .drf.spectacular import wrap_with_envelope
from .models import BaseModel

__all__ = [
    "BaseModel",
    "BaseGenericViewSet",
    "BaseModelViewSet",
    "BaseReadOnlyModelViewSet",
    "PageNumberWithSizePagination",
    "wrap_with_envelope",
]
