"""
apps.mobile.serializers
~~~~~~~~~~~~~~~~~~~~~~~
I/O serializers for mobile apps and bundles.

Shape validation only.  Required-when-enabled fields and secret length are
deliberately left permissive here: those rules belong to
:class:`~apps.mobile.validators.MobileAppValidator`, which reports every
violation at once in its own message format.

The wire format is camelCase; ``source=`` maps each key onto the model /
dataclass attribute.
"""
from rest_framework import serializers

from .models import MobileApp, MobileAppBundle
from .qr_config import (
    AndroidQrCodeConfig,
    IosQrCodeConfig,
    Platform,
    qr_code_config_to_dict,
)
from .validators import MobileAppDraft


def _optional_text(source: str) -> serializers.CharField:
    return serializers.CharField(
        source=source,
        required=False,
        allow_null=True,
        allow_blank=True,
        default=None,
    )


# ---------------------------------------------------------------------------
# QR-code config (tagged union)
# ---------------------------------------------------------------------------

class AndroidQrCodeConfigSerializer(serializers.Serializer):
    enabled = serializers.BooleanField(default=False)
    appPackage = _optional_text("app_package")
    sha256CertFingerprints = _optional_text("sha256_cert_fingerprints")
    storeLink = _optional_text("store_link")


class IosQrCodeConfigSerializer(serializers.Serializer):
    enabled = serializers.BooleanField(default=False)
    appId = _optional_text("app_id")
    storeLink = _optional_text("store_link")


_VARIANT_SERIALIZERS = {
    Platform.ANDROID.value: (AndroidQrCodeConfigSerializer, AndroidQrCodeConfig),
    Platform.IOS.value: (IosQrCodeConfigSerializer, IosQrCodeConfig),
}


class QrCodeConfigField(serializers.Field):
    """
    Dispatches on the ``type`` key to the matching variant serializer and
    yields an :class:`AndroidQrCodeConfig` or :class:`IosQrCodeConfig`.
    """

    default_error_messages = {
        "invalid": "Expected an object with a \"type\" key.",
        "invalid_type": "\"type\" must be one of {choices}.",
    }

    def to_internal_value(self, data):
        if not isinstance(data, dict):
            self.fail("invalid")
        entry = _VARIANT_SERIALIZERS.get(data.get("type"))
        if entry is None:
            self.fail("invalid_type", choices=sorted(_VARIANT_SERIALIZERS))
        serializer_class, variant = entry
        serializer = serializer_class(data=data)
        if not serializer.is_valid():
            raise serializers.ValidationError(serializer.errors)
        return variant(**serializer.validated_data)

    def to_representation(self, value):
        # Model rows hold the stored JSON already; config views hand us a dataclass.
        if isinstance(value, dict):
            return value
        return qr_code_config_to_dict(value)


# ---------------------------------------------------------------------------
# Mobile app
# ---------------------------------------------------------------------------

class MobileAppSerializer(serializers.ModelSerializer):
    """Read serializer for a full MobileApp object."""

    tenantId = serializers.UUIDField(source="tenant_id", read_only=True)
    pkgName = serializers.CharField(source="pkg_name", read_only=True)
    appSecret = serializers.CharField(source="app_secret", read_only=True)
    platformType = serializers.CharField(source="platform_type", read_only=True, allow_null=True)
    qrCodeConfig = QrCodeConfigField(source="qr_code_config", read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = MobileApp
        fields = [
            "id",
            "tenantId",
            "pkgName",
            "appSecret",
            "platformType",
            "qrCodeConfig",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class MobileAppSaveSerializer(serializers.Serializer):
    """Validates POST /tenants/{id}/mobile/apps/ request body."""

    id = serializers.UUIDField(required=False, allow_null=True, default=None)
    pkgName = serializers.CharField(source="pkg_name", max_length=255)
    appSecret = serializers.CharField(
        source="app_secret",
        required=False,
        allow_null=True,
        allow_blank=True,
        trim_whitespace=False,
        default=None,
    )
    qrCodeConfig = QrCodeConfigField(
        source="qr_code_config",
        required=False,
        allow_null=True,
        default=None,
    )

    def to_draft(self) -> MobileAppDraft:
        return MobileAppDraft(**self.validated_data)


# ---------------------------------------------------------------------------
# Bundle
# ---------------------------------------------------------------------------

class MobileAppBundleSerializer(serializers.ModelSerializer):
    """Read serializer for a MobileAppBundle."""

    tenantId = serializers.UUIDField(source="tenant_id", read_only=True)
    androidAppId = serializers.UUIDField(source="android_app_id", read_only=True, allow_null=True)
    iosAppId = serializers.UUIDField(source="ios_app_id", read_only=True, allow_null=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = MobileAppBundle
        fields = [
            "id",
            "tenantId",
            "title",
            "description",
            "androidAppId",
            "iosAppId",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = fields


class MobileAppBundleSaveSerializer(serializers.Serializer):
    """Validates POST /tenants/{id}/mobile/bundles/ request body."""

    id = serializers.UUIDField(required=False, allow_null=True, default=None)
    title = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, default="")
    androidAppId = serializers.UUIDField(source="android_app_id", required=False, allow_null=True, default=None)
    iosAppId = serializers.UUIDField(source="ios_app_id", required=False, allow_null=True, default=None)


class AndroidQrCodeConfigResponseSerializer(serializers.Serializer):
    """Response shape of GET .../android/qr-code-config/ (OpenAPI only)."""

    type = serializers.CharField()
    enabled = serializers.BooleanField()
    appPackage = serializers.CharField(allow_null=True)
    sha256CertFingerprints = serializers.CharField(allow_null=True)
    storeLink = serializers.CharField(allow_null=True)


class IosQrCodeConfigResponseSerializer(serializers.Serializer):
    """Response shape of GET .../ios/qr-code-config/ (OpenAPI only)."""

    type = serializers.CharField()
    enabled = serializers.BooleanField()
    appId = serializers.CharField(allow_null=True)
    storeLink = serializers.CharField(allow_null=True)
