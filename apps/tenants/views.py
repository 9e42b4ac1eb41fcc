"""
apps.tenants.views
~~~~~~~~~~~~~~~~~~
Thin DRF API views for the Tenants application.
All business logic is delegated to
:mod:`apps.tenants.services.tenant_service`.

Endpoints
---------
POST   /tenants/               – Create tenant
GET    /tenants/{id}/          – Fetch tenant
DELETE /tenants/{id}/          – Delete tenant and cascade its mobile apps
"""
from __future__ import annotations

import uuid

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.tenants.services import tenant_service
from .serializers import TenantCreateSerializer, TenantSerializer


class TenantCreateView(APIView):
    """POST /tenants/ – create a new tenant."""

    @extend_schema(
        summary="Create Tenant",
        request=TenantCreateSerializer,
        responses={
            201: TenantSerializer,
            400: OpenApiResponse(description="Validation error – name missing or blank."),
            409: OpenApiResponse(description="A tenant with that name already exists."),
        },
        tags=["Tenants"],
    )
    def post(self, request: Request) -> Response:
        serializer = TenantCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        tenant = tenant_service.create_tenant(name=serializer.validated_data["name"])
        return Response(TenantSerializer(tenant).data, status=status.HTTP_201_CREATED)


class TenantDetailView(APIView):
    """GET / DELETE /tenants/{id}/"""

    @extend_schema(
        summary="Get Tenant",
        responses={200: TenantSerializer, 404: OpenApiResponse(description="Tenant not found.")},
        tags=["Tenants"],
    )
    def get(self, request: Request, tenant_id: uuid.UUID) -> Response:
        tenant = tenant_service.get_tenant(tenant_id)
        return Response(TenantSerializer(tenant).data)

    @extend_schema(
        summary="Delete Tenant",
        description="Deletes the tenant together with all of its mobile apps and bundles.",
        responses={204: None, 404: OpenApiResponse(description="Tenant not found.")},
        tags=["Tenants"],
    )
    def delete(self, request: Request, tenant_id: uuid.UUID) -> Response:
        tenant_service.delete_tenant(tenant_id=tenant_id)
        return Response(status=status.HTTP_204_NO_CONTENT)
