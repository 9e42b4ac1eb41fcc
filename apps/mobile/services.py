"""
apps.mobile.services
~~~~~~~~~~~~~~~~~~~~
Business logic for mobile apps and mobile-app bundles.

Views must call only these functions.  Every operation is tenant-scoped: a
record owned by another tenant is reported exactly like a missing one.

Responsibilities
----------------
- Validate (via :class:`~apps.mobile.validators.MobileAppValidator`) and
  persist :class:`~apps.mobile.models.MobileApp` records.
- Lookup, paging and deletion of mobile apps, including the bulk delete used
  on tenant teardown.
- CRUD for :class:`~apps.mobile.models.MobileAppBundle`.
- Read-only per-platform QR-code config views of a bundle, and the app-link
  documents derived from them.
"""
from __future__ import annotations

import uuid

import structlog
from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction

from apps.tenants.services import get_tenant
from common.exceptions import ConflictError, NotFoundError, ValidationError
from common.pagination import PageData, PageLink, paginate
from .models import MobileApp, MobileAppBundle
from .qr_config import (
    AndroidQrCodeConfig,
    IosQrCodeConfig,
    Platform,
    QrCodeConfig,
    build_apple_app_site_association,
    build_asset_links,
)
from .validators import MobileAppDraft, MobileAppValidationError, MobileAppValidator

logger = structlog.get_logger(__name__)

#: ``sortProperty`` values accepted by :func:`find_mobile_apps_by_tenant_id`.
MOBILE_APP_SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "pkgName": "pkg_name",
}


# ---------------------------------------------------------------------------
# Mobile apps
# ---------------------------------------------------------------------------

def save_mobile_app(*, tenant_id: uuid.UUID, draft: MobileAppDraft) -> MobileApp:
    """
    Validate *draft* and, if valid, create or fully replace the record.

    Nothing is written when validation fails.

    Raises:
        common.exceptions.ValidationError: With the aggregated
            ``"Validation error: ..."`` message and the per-field errors.
        common.exceptions.NotFoundError: If the tenant is unknown, or
            ``draft.id`` does not name a record of this tenant.
        common.exceptions.ConflictError: If another record of the tenant
            already uses ``draft.pkg_name``.
    """
    try:
        MobileAppValidator.validate(draft)
    except MobileAppValidationError as exc:
        logger.warning(
            "mobile_app_validation_failed",
            tenant_id=str(tenant_id),
            pkg_name=draft.pkg_name,
            fields=[err["field"] for err in exc.errors],
        )
        raise ValidationError(exc.message, errors=exc.errors) from exc

    tenant = get_tenant(tenant_id)
    try:
        with transaction.atomic():
            if draft.id is None:
                mobile_app = MobileApp(tenant=tenant)
            else:
                mobile_app = _lock_mobile_app(tenant_id=tenant.id, mobile_app_id=draft.id)

            mobile_app.pkg_name = draft.pkg_name
            mobile_app.app_secret = draft.app_secret
            mobile_app.qr_code = draft.qr_code_config
            mobile_app.save(force_update=draft.id is not None)
    except IntegrityError as exc:
        raise ConflictError(
            f"Mobile app with package name '{draft.pkg_name}' already exists."
        ) from exc
    except DatabaseError as exc:
        # Forced update matched no row: deleted after it was read.
        raise NotFoundError(f"Mobile app '{draft.id}' not found.") from exc

    logger.info(
        "mobile_app_saved",
        tenant_id=str(tenant.id),
        mobile_app_id=str(mobile_app.id),
        pkg_name=mobile_app.pkg_name,
        created=draft.id is None,
    )
    return mobile_app


def find_mobile_app_by_id(*, tenant_id: uuid.UUID, mobile_app_id: uuid.UUID) -> MobileApp:
    """Fetch a tenant's mobile app, raise NotFoundError if missing."""
    try:
        return MobileApp.objects.get(pk=mobile_app_id, tenant_id=tenant_id)
    except MobileApp.DoesNotExist:
        raise NotFoundError(f"Mobile app '{mobile_app_id}' not found.")


def _lock_mobile_app(*, tenant_id: uuid.UUID, mobile_app_id: uuid.UUID) -> MobileApp:
    # Caller must hold a transaction.
    try:
        return MobileApp.objects.select_for_update().get(pk=mobile_app_id, tenant_id=tenant_id)
    except MobileApp.DoesNotExist:
        raise NotFoundError(f"Mobile app '{mobile_app_id}' not found.")


def find_mobile_apps_by_tenant_id(*, tenant_id: uuid.UUID, page_link: PageLink) -> PageData:
    """Return one page of the tenant's mobile apps."""
    get_tenant(tenant_id)
    return paginate(
        MobileApp.objects.filter(tenant_id=tenant_id),
        page_link,
        sort_fields=MOBILE_APP_SORT_FIELDS,
        search_field="pkg_name",
    )


def delete_mobile_app_by_id(*, tenant_id: uuid.UUID, mobile_app_id: uuid.UUID) -> None:
    """Delete a tenant's mobile app, raise NotFoundError if missing."""
    mobile_app = find_mobile_app_by_id(tenant_id=tenant_id, mobile_app_id=mobile_app_id)
    mobile_app.delete()
    logger.info(
        "mobile_app_deleted",
        tenant_id=str(tenant_id),
        mobile_app_id=str(mobile_app_id),
    )


def delete_mobile_apps_by_tenant_id(*, tenant_id: uuid.UUID) -> int:
    """Remove every mobile app of a tenant and return how many were deleted."""
    _, per_model = MobileApp.objects.filter(tenant_id=tenant_id).delete()
    deleted = per_model.get(MobileApp._meta.label, 0)
    logger.info("mobile_apps_deleted_for_tenant", tenant_id=str(tenant_id), count=deleted)
    return deleted


# ---------------------------------------------------------------------------
# Bundles
# ---------------------------------------------------------------------------

def save_mobile_app_bundle(
    *,
    tenant_id: uuid.UUID,
    title: str,
    description: str = "",
    android_app_id: uuid.UUID | None = None,
    ios_app_id: uuid.UUID | None = None,
    bundle_id: uuid.UUID | None = None,
) -> MobileAppBundle:
    """
    Create a bundle, or replace the one identified by *bundle_id*.

    Raises:
        common.exceptions.NotFoundError: If the tenant, the bundle being
            replaced, or a referenced app does not exist for the tenant.
    """
    tenant = get_tenant(tenant_id)
    try:
        with transaction.atomic():
            if bundle_id is None:
                bundle = MobileAppBundle(tenant=tenant)
            else:
                bundle = _lock_mobile_app_bundle(tenant_id=tenant.id, bundle_id=bundle_id)

            bundle.title = title
            bundle.description = description
            bundle.android_app = (
                find_mobile_app_by_id(tenant_id=tenant.id, mobile_app_id=android_app_id)
                if android_app_id else None
            )
            bundle.ios_app = (
                find_mobile_app_by_id(tenant_id=tenant.id, mobile_app_id=ios_app_id)
                if ios_app_id else None
            )
            bundle.save(force_update=bundle_id is not None)
    except DatabaseError as exc:
        raise NotFoundError(f"Mobile app bundle '{bundle_id}' not found.") from exc

    logger.info(
        "mobile_app_bundle_saved",
        tenant_id=str(tenant.id),
        bundle_id=str(bundle.id),
        created=bundle_id is None,
    )
    return bundle


def find_mobile_app_bundle_by_id(*, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> MobileAppBundle:
    """Fetch a tenant's bundle (with both apps joined), raise NotFoundError if missing."""
    try:
        return (
            MobileAppBundle.objects
            .select_related("android_app", "ios_app")
            .get(pk=bundle_id, tenant_id=tenant_id)
        )
    except MobileAppBundle.DoesNotExist:
        raise NotFoundError(f"Mobile app bundle '{bundle_id}' not found.")


def _lock_mobile_app_bundle(*, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> MobileAppBundle:
    # Caller must hold a transaction.
    try:
        return MobileAppBundle.objects.select_for_update().get(pk=bundle_id, tenant_id=tenant_id)
    except MobileAppBundle.DoesNotExist:
        raise NotFoundError(f"Mobile app bundle '{bundle_id}' not found.")


def delete_mobile_app_bundle_by_id(*, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> None:
    bundle = find_mobile_app_bundle_by_id(tenant_id=tenant_id, bundle_id=bundle_id)
    bundle.delete()
    logger.info("mobile_app_bundle_deleted", tenant_id=str(tenant_id), bundle_id=str(bundle_id))


# ---------------------------------------------------------------------------
# QR-code config views
# ---------------------------------------------------------------------------

def _find_qr_code_config(
    *,
    tenant_id: uuid.UUID,
    bundle_id: uuid.UUID,
    platform: Platform,
) -> QrCodeConfig:
    bundle = find_mobile_app_bundle_by_id(tenant_id=tenant_id, bundle_id=bundle_id)
    mobile_app = bundle.android_app if platform == Platform.ANDROID else bundle.ios_app
    if mobile_app is None:
        raise NotFoundError(
            f"Mobile app bundle '{bundle_id}' has no {platform.value} app."
        )

    config = mobile_app.qr_code
    if config is None or config.platform != platform:
        raise NotFoundError(
            f"{platform.value} QR code config for bundle '{bundle_id}' not found."
        )
    return config


def find_android_qr_code_config(*, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> AndroidQrCodeConfig:
    """Return the Android QR-code config of the bundle's Android app."""
    return _find_qr_code_config(tenant_id=tenant_id, bundle_id=bundle_id, platform=Platform.ANDROID)


def find_ios_qr_code_config(*, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> IosQrCodeConfig:
    """Return the iOS QR-code config of the bundle's iOS app."""
    return _find_qr_code_config(tenant_id=tenant_id, bundle_id=bundle_id, platform=Platform.IOS)


def get_asset_links(*, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> list[dict]:
    """
    Return the Android asset-links document for the bundle.

    Raises:
        common.exceptions.NotFoundError: If there is no Android config or it
            is disabled.
    """
    config = find_android_qr_code_config(tenant_id=tenant_id, bundle_id=bundle_id)
    if not config.enabled:
        raise NotFoundError(f"Android QR code config for bundle '{bundle_id}' is disabled.")
    return build_asset_links(config)


def get_apple_app_site_association(*, tenant_id: uuid.UUID, bundle_id: uuid.UUID) -> dict:
    """
    Return the iOS apple-app-site-association document for the bundle.

    Raises:
        common.exceptions.NotFoundError: If there is no iOS config or it is
            disabled.
    """
    config = find_ios_qr_code_config(tenant_id=tenant_id, bundle_id=bundle_id)
    if not config.enabled:
        raise NotFoundError(f"iOS QR code config for bundle '{bundle_id}' is disabled.")
    return build_apple_app_site_association(config, settings.MOBILE_DEEP_LINK_PATHS)
