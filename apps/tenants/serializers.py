"""
apps.tenants.serializers
~~~~~~~~~~~~~~~~~~~~~~~~
I/O-only serializers for the Tenants API.
"""
from rest_framework import serializers

from .models import Tenant


class TenantSerializer(serializers.ModelSerializer):
    """Read serializer for a full Tenant object."""

    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Tenant
        fields = ["id", "name", "slug", "createdAt", "updatedAt"]
        read_only_fields = ["id", "slug"]


class TenantCreateSerializer(serializers.Serializer):
    """Validates POST /tenants/ request body."""

    name = serializers.CharField(max_length=255)
