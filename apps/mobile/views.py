"""
apps.mobile.views
~~~~~~~~~~~~~~~~~
Thin DRF API views for mobile apps and bundles.
All business logic is delegated to :mod:`apps.mobile.services`.

Endpoints (all under ``/tenants/{tenant_id}/mobile/``)
------------------------------------------------------
GET    apps/                                   – Page through the tenant's apps
POST   apps/                                   – Save (create, or replace when ``id`` is set)
GET    apps/{id}/                              – Fetch app
DELETE apps/{id}/                              – Delete app
POST   bundles/                                – Save bundle
GET    bundles/{id}/                           – Fetch bundle
DELETE bundles/{id}/                           – Delete bundle
GET    bundles/{id}/android/qr-code-config/    – Android QR-code config view
GET    bundles/{id}/ios/qr-code-config/        – iOS QR-code config view
GET    bundles/{id}/assetlinks.json            – Android Digital Asset Links
GET    bundles/{id}/apple-app-site-association – iOS app-site association
"""
from __future__ import annotations

import uuid

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.mobile import services
from common.pagination import PageLinkSerializer, page_data_response
from .serializers import (
    AndroidQrCodeConfigResponseSerializer,
    IosQrCodeConfigResponseSerializer,
    MobileAppBundleSaveSerializer,
    MobileAppBundleSerializer,
    MobileAppSaveSerializer,
    MobileAppSerializer,
    QrCodeConfigField,
)

_NOT_FOUND = OpenApiResponse(description="Tenant or resource not found.")

_PAGE_PARAMETERS = [
    OpenApiParameter("pageSize", OpenApiTypes.INT, description="Rows per page."),
    OpenApiParameter("page", OpenApiTypes.INT, description="Zero-based page index."),
    OpenApiParameter("textSearch", OpenApiTypes.STR, description="Substring of pkgName."),
    OpenApiParameter("sortProperty", OpenApiTypes.STR, enum=sorted(services.MOBILE_APP_SORT_FIELDS)),
    OpenApiParameter("sortOrder", OpenApiTypes.STR, enum=["ASC", "DESC"]),
]


def _render_qr_code_config(config) -> dict:
    return QrCodeConfigField().to_representation(config)


# ---------------------------------------------------------------------------
# Mobile apps
# ---------------------------------------------------------------------------

class MobileAppListSaveView(APIView):
    """GET / POST /tenants/{tenant_id}/mobile/apps/"""

    @extend_schema(
        summary="List Mobile Apps",
        parameters=_PAGE_PARAMETERS,
        responses={200: OpenApiTypes.OBJECT, 404: _NOT_FOUND},
        tags=["Mobile Apps"],
    )
    def get(self, request: Request, tenant_id: uuid.UUID) -> Response:
        serializer = PageLinkSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        page_data = services.find_mobile_apps_by_tenant_id(
            tenant_id=tenant_id,
            page_link=serializer.to_page_link(),
        )
        return Response(page_data_response(page_data, MobileAppSerializer))

    @extend_schema(
        summary="Save Mobile App",
        description=(
            "Creates a mobile app, or fully replaces the one named by ``id``. "
            "All rule violations are returned together in one 400 response."
        ),
        request=MobileAppSaveSerializer,
        responses={
            200: MobileAppSerializer,
            201: MobileAppSerializer,
            400: OpenApiResponse(description="Validation error."),
            404: _NOT_FOUND,
            409: OpenApiResponse(description="pkgName already used in this tenant."),
        },
        tags=["Mobile Apps"],
    )
    def post(self, request: Request, tenant_id: uuid.UUID) -> Response:
        serializer = MobileAppSaveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        draft = serializer.to_draft()
        mobile_app = services.save_mobile_app(tenant_id=tenant_id, draft=draft)
        return Response(
            MobileAppSerializer(mobile_app).data,
            status=status.HTTP_201_CREATED if draft.id is None else status.HTTP_200_OK,
        )


class MobileAppDetailView(APIView):
    """GET / DELETE /tenants/{tenant_id}/mobile/apps/{mobile_app_id}/"""

    @extend_schema(
        summary="Get Mobile App",
        responses={200: MobileAppSerializer, 404: _NOT_FOUND},
        tags=["Mobile Apps"],
    )
    def get(self, request: Request, tenant_id: uuid.UUID, mobile_app_id: uuid.UUID) -> Response:
        mobile_app = services.find_mobile_app_by_id(tenant_id=tenant_id, mobile_app_id=mobile_app_id)
        return Response(MobileAppSerializer(mobile_app).data)

    @extend_schema(
        summary="Delete Mobile App",
        responses={204: None, 404: _NOT_FOUND},
        tags=["Mobile Apps"],
    )
    def delete(self, request: Request, tenant_id: uuid.UUID, mobile_app_id: uuid.UUID) -> Response:
        services.delete_mobile_app_by_id(tenant_id=tenant_id, mobile_app_id=mobile_app_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------

class MobileAppBundleSaveView(APIView):
    """POST /tenants/{tenant_id}/mobile/bundles/"""

    @extend_schema(
        summary="Save Mobile App Bundle",
        request=MobileAppBundleSaveSerializer,
        responses={200: MobileAppBundleSerializer, 201: MobileAppBundleSerializer, 404: _NOT_FOUND},
        tags=["Mobile App Bundles"],
    )
    def post(self, request: Request, tenant_id: uuid.UUID) -> Response:
        serializer = MobileAppBundleSaveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vd = serializer.validated_data
        bundle = services.save_mobile_app_bundle(
            tenant_id=tenant_id,
            bundle_id=vd["id"],
            title=vd["title"],
            description=vd["description"],
            android_app_id=vd["android_app_id"],
            ios_app_id=vd["ios_app_id"],
        )
        return Response(
            MobileAppBundleSerializer(bundle).data,
            status=status.HTTP_201_CREATED if vd["id"] is None else status.HTTP_200_OK,
        )


class MobileAppBundleDetailView(APIView):
    """GET / DELETE /tenants/{tenant_id}/mobile/bundles/{bundle_id}/"""

    @extend_schema(
        summary="Get Mobile App Bundle",
        responses={200: MobileAppBundleSerializer, 404: _NOT_FOUND},
        tags=["Mobile App Bundles"],
    )
    def get(self, request: Request, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> Response:
        bundle = services.find_mobile_app_bundle_by_id(tenant_id=tenant_id, bundle_id=bundle_id)
        return Response(MobileAppBundleSerializer(bundle).data)

    @extend_schema(
        summary="Delete Mobile App Bundle",
        responses={204: None, 404: _NOT_FOUND},
        tags=["Mobile App Bundles"],
    )
    def delete(self, request: Request, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> Response:
        services.delete_mobile_app_bundle_by_id(tenant_id=tenant_id, bundle_id=bundle_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# QR-code config views and app-link documents
# ---------------------------------------------------------------------------

class AndroidQrCodeConfigView(APIView):
    """GET /tenants/{tenant_id}/mobile/bundles/{bundle_id}/android/qr-code-config/"""

    @extend_schema(
        summary="Get Android QR Code Config",
        responses={200: AndroidQrCodeConfigResponseSerializer, 404: _NOT_FOUND},
        tags=["Mobile App Bundles"],
    )
    def get(self, request: Request, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> Response:
        config = services.find_android_qr_code_config(tenant_id=tenant_id, bundle_id=bundle_id)
        return Response(_render_qr_code_config(config))


class IosQrCodeConfigView(APIView):
    """GET /tenants/{tenant_id}/mobile/bundles/{bundle_id}/ios/qr-code-config/"""

    @extend_schema(
        summary="Get iOS QR Code Config",
        responses={200: IosQrCodeConfigResponseSerializer, 404: _NOT_FOUND},
        tags=["Mobile App Bundles"],
    )
    def get(self, request: Request, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> Response:
        config = services.find_ios_qr_code_config(tenant_id=tenant_id, bundle_id=bundle_id)
        return Response(_render_qr_code_config(config))


class AssetLinksView(APIView):
    """GET /tenants/{tenant_id}/mobile/bundles/{bundle_id}/assetlinks.json"""

    @extend_schema(
        summary="Get Android Asset Links",
        responses={200: OpenApiTypes.OBJECT, 404: _NOT_FOUND},
        tags=["Mobile App Bundles"],
    )
    def get(self, request: Request, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> Response:
        return Response(services.get_asset_links(tenant_id=tenant_id, bundle_id=bundle_id))


class AppleAppSiteAssociationView(APIView):
    """GET /tenants/{tenant_id}/mobile/bundles/{bundle_id}/apple-app-site-association"""

    @extend_schema(
        summary="Get Apple App Site Association",
        responses={200: OpenApiTypes.OBJECT, 404: _NOT_FOUND},
        tags=["Mobile App Bundles"],
    )
    def get(self, request: Request, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> Response:
        return Response(
            services.get_apple_app_site_association(tenant_id=tenant_id, bundle_id=bundle_id)
        )
