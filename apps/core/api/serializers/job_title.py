from rest_framework import serializers

from apps.core.models import JobTitle


class JobTitleSerializer(serializers.ModelSerializer):
    users_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = JobTitle
        fields = ["id", "name", "description", "users_count", "created_at", "updated_at"]
        read_only_fields = ["id", "created_at", "updated_at"]
