from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.filters import OrderingFilter, SearchFilter

from apps.core.api.serializers import UserSerializer
from apps.core.models import User
from libs import BaseReadOnlyModelViewSet


@extend_schema_view(
    list=extend_schema(summary="List users with balances", tags=["1.2: Users"]),
    retrieve=extend_schema(summary="Get user with balance", tags=["1.2: Users"]),
)
class UserViewSet(BaseReadOnlyModelViewSet):
    queryset = User.objects.select_related("job_title").order_by("username")
    serializer_class = UserSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = {"job_title": ["exact"], "is_active": ["exact"]}
    search_fields = ["username", "email", "first_name", "last_name"]
    ordering_fields = ["username", "balance"]

    module = "Core"
    submodule = "Users"
    permission_prefix = "user"
