"""
apps.tenants.services.tenant_service
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
All business logic for the Tenants application.

Views must call only these functions.  No business logic lives in views or
serializers.
"""
from __future__ import annotations

import uuid

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction

from apps.tenants.models import Tenant
from common.exceptions import ConflictError, NotFoundError

logger = structlog.get_logger(__name__)


def create_tenant(*, name: str) -> Tenant:
    """
    Create a new :class:`Tenant`.

    Raises:
        common.exceptions.ConflictError: If a tenant with *name* (or the same
            slug) already exists.
    """
    try:
        with transaction.atomic():
            tenant = Tenant.objects.create(name=name)
    except IntegrityError as exc:
        raise ConflictError(f"Tenant '{name}' already exists.") from exc

    logger.info("tenant_created", tenant_id=str(tenant.id), name=tenant.name)
    return tenant


def get_tenant(tenant_id: uuid.UUID | str) -> Tenant:
    """
    Fetch a :class:`Tenant` by id.

    Raises:
        common.exceptions.NotFoundError: If no tenant has that id.
    """
    try:
        return Tenant.objects.get(pk=tenant_id)
    except (Tenant.DoesNotExist, DjangoValidationError):
        raise NotFoundError(f"Tenant '{tenant_id}' not found.")


def delete_tenant(*, tenant_id: uuid.UUID | str) -> None:
    """
    Tear a tenant down: remove its mobile apps, then the tenant row itself
    (bundles go with it through the FK cascade).

    Raises:
        common.exceptions.NotFoundError: If no tenant has that id.
    """
    from apps.mobile.services import delete_mobile_apps_by_tenant_id  # noqa: PLC0415

    tenant = get_tenant(tenant_id)
    with transaction.atomic():
        delete_mobile_apps_by_tenant_id(tenant_id=tenant.id)
        tenant.delete()
    logger.info("tenant_deleted", tenant_id=str(tenant_id))
