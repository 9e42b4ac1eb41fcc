"""
apps.mobile.models
~~~~~~~~~~~~~~~~~~
Models for the Mobile application.

Models
------
MobileApp
    Tenant-scoped registration of one platform app: package name, shared
    secret and an optional QR-code config.

MobileAppBundle
    Pairs an Android app with an iOS app of the same tenant so that both
    platforms can be served from one install/deep-link QR code.
"""
from __future__ import annotations

import uuid

from django.core.exceptions import ValidationError
from django.db import models

from apps.tenants.models import Tenant
from .qr_config import QrCodeConfig, qr_code_config_from_dict, qr_code_config_to_dict
from .validators import (
    APP_SECRET_MAX_LENGTH,
    MobileAppDraft,
    MobileAppValidationError,
    MobileAppValidator,
)


class MobileApp(models.Model):
    """
    A mobile app registered for a tenant.

    ``pkg_name`` is unique within a tenant; the
    ``unique_mobile_app_pkg_name_per_tenant`` constraint is what decides the
    winner when two saves race on the same package name.

    ``qr_code_config`` stores the tagged-union config as JSON
    (``{"type": "ANDROID" | "IOS", ...}``); use :attr:`qr_code` to work with
    the typed variant.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name="mobile_apps",
    )
    pkg_name = models.CharField(max_length=255)
    app_secret = models.CharField(max_length=APP_SECRET_MAX_LENGTH)
    qr_code_config = models.JSONField(
        null=True,
        blank=True,
        help_text="Platform-tagged QR-code configuration.",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name = "Mobile App"
        verbose_name_plural = "Mobile Apps"
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "pkg_name"],
                name="unique_mobile_app_pkg_name_per_tenant",
            ),
        ]

    def __str__(self) -> str:
        return self.pkg_name

    def clean(self) -> None:
        """
        Run :class:`~apps.mobile.validators.MobileAppValidator` so the admin
        enforces the same rules as the API.

        Raises:
            django.core.exceptions.ValidationError: One message per violation.
        """
        try:
            draft = MobileAppDraft(
                pkg_name=self.pkg_name,
                app_secret=self.app_secret,
                qr_code_config=self.qr_code,
            )
        except ValueError as exc:
            raise ValidationError({"qr_code_config": [str(exc)]}) from exc

        try:
            MobileAppValidator.validate(draft)
        except MobileAppValidationError as exc:
            raise ValidationError([err["message"] for err in exc.errors]) from exc

    @property
    def qr_code(self) -> QrCodeConfig | None:
        return qr_code_config_from_dict(self.qr_code_config)

    @qr_code.setter
    def qr_code(self, config: QrCodeConfig | None) -> None:
        self.qr_code_config = qr_code_config_to_dict(config)

    @property
    def platform_type(self) -> str | None:
        """Platform tag of the stored QR config, if any."""
        return (self.qr_code_config or {}).get("type")


class MobileAppBundle(models.Model):
    """
    Groups the Android and iOS registrations of one logical application.

    Either side may be empty.  Deleting a referenced app clears that side
    instead of deleting the bundle.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(
        Tenant,
        on_delete=models.CASCADE,
        related_name="mobile_app_bundles",
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    android_app = models.ForeignKey(
        MobileApp,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="android_bundles",
    )
    ios_app = models.ForeignKey(
        MobileApp,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="ios_bundles",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at", "id"]
        verbose_name = "Mobile App Bundle"
        verbose_name_plural = "Mobile App Bundles"

    def __str__(self) -> str:
        return self.title
