from django.db.models import Count
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework.filters import OrderingFilter, SearchFilter

from apps.core.api.serializers import JobTitleSerializer
from apps.core.models import JobTitle
from libs import BaseModelViewSet


@extend_schema_view(
    list=extend_schema(summary="List job titles", tags=["1.1: Job Titles"]),
    retrieve=extend_schema(summary="Get job title details", tags=["1.1: Job Titles"]),
    create=extend_schema(summary="Create job title", tags=["1.1: Job Titles"]),
    update=extend_schema(summary="Update job title", tags=["1.1: Job Titles"]),
    partial_update=extend_schema(summary="Partially update job title", tags=["1.1: Job Titles"]),
    destroy=extend_schema(summary="Delete job title", tags=["1.1: Job Titles"]),
)
class JobTitleViewSet(BaseModelViewSet):
    """CRUD for job titles, the shared owner of bonus rules and salary schemes."""

    queryset = JobTitle.objects.annotate(users_count=Count("users")).order_by("name")
    serializer_class = JobTitleSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    search_fields = ["name"]
    ordering_fields = ["name", "created_at"]

    module = "Core"
    submodule = "Job Titles"
    permission_prefix = "job_title"
