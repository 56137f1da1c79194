from rest_framework import serializers

from apps.core.models import User


class UserSerializer(serializers.ModelSerializer):
    """Read-only user representation including the running ledger balance"""

    full_name = serializers.CharField(source="get_full_name", read_only=True)
    job_title_name = serializers.CharField(source="job_title.name", read_only=True, default=None)

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "full_name",
            "job_title",
            "job_title_name",
            "balance",
            "is_active",
        ]
        read_only_fields = fields
