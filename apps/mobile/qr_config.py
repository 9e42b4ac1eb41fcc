"""
apps.mobile.qr_config
~~~~~~~~~~~~~~~~~~~~~
Per-platform QR-code configuration for mobile apps.

A QR-code config is a tagged union of :class:`AndroidQrCodeConfig` and
:class:`IosQrCodeConfig`.  The ``platform`` tag is carried on every instance
and is written to storage as the ``"type"`` key so that the variant can be
recovered from JSON without guessing.

This module is **pure Python** — it has zero Django imports and can be
exercised in plain ``pytest`` tests.

Public API
----------
Platform                          – platform tag enum
AndroidQrCodeConfig               – Android variant
IosQrCodeConfig                   – iOS variant
QrCodeConfig                      – union alias of the two variants
qr_code_config_from_dict(data)    – JSON dict → variant (or ``None``)
qr_code_config_to_dict(config)    – variant → JSON dict (or ``None``)
build_asset_links(config)         – Android Digital Asset Links document
build_apple_app_site_association(config, paths) – iOS AASA document
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Union


class Platform(str, enum.Enum):
    ANDROID = "ANDROID"
    IOS = "IOS"


@dataclass
class AndroidQrCodeConfig:
    """
    QR-code settings for an Android app.

    Attributes:
        enabled: When ``False`` none of the other fields are required.
        app_package: Android package name (``appPackage`` on the wire).
        sha256_cert_fingerprints: Signing certificate fingerprint
            (``sha256CertFingerprints`` on the wire).
        store_link: Play Store link (``storeLink`` on the wire).
    """

    enabled: bool = False
    app_package: str | None = None
    sha256_cert_fingerprints: str | None = None
    store_link: str | None = None
    platform: Platform = field(default=Platform.ANDROID, init=False)


@dataclass
class IosQrCodeConfig:
    """
    QR-code settings for an iOS app.

    Attributes:
        enabled: When ``False`` none of the other fields are required.
        app_id: App Store / team-prefixed app identifier (``appId``).
        store_link: App Store link (``storeLink`` on the wire).
    """

    enabled: bool = False
    app_id: str | None = None
    store_link: str | None = None
    platform: Platform = field(default=Platform.IOS, init=False)


QrCodeConfig = Union[AndroidQrCodeConfig, IosQrCodeConfig]

#: Wire (camelCase) key → dataclass attribute, per platform, in declaration order.
WIRE_FIELDS: dict[Platform, dict[str, str]] = {
    Platform.ANDROID: {
        "appPackage": "app_package",
        "sha256CertFingerprints": "sha256_cert_fingerprints",
        "storeLink": "store_link",
    },
    Platform.IOS: {
        "appId": "app_id",
        "storeLink": "store_link",
    },
}

_VARIANTS: dict[Platform, type] = {
    Platform.ANDROID: AndroidQrCodeConfig,
    Platform.IOS: IosQrCodeConfig,
}

#: Relation granted to the Android app in ``assetlinks.json``.
ANDROID_HANDLE_ALL_URLS = "delegate_permission/common.handle_all_urls"


# ---------------------------------------------------------------------------
# JSON conversion
# ---------------------------------------------------------------------------

def qr_code_config_from_dict(data: dict | None) -> QrCodeConfig | None:
    """
    Build the matching variant from a stored/wire JSON dict.

    Args:
        data: Dict shaped as ``{"type": "ANDROID" | "IOS", "enabled": ...,
            <camelCase fields>}``, or ``None``.

    Returns:
        The config variant, or ``None`` when *data* is empty.

    Raises:
        ValueError: If ``type`` is missing or not a known platform.
    """
    if not data:
        return None
    try:
        platform = Platform(data.get("type"))
    except ValueError as exc:
        raise ValueError(
            f'qrCodeConfig "type" must be one of {[p.value for p in Platform]}.'
        ) from exc

    kwargs = {
        attr: data.get(wire_key)
        for wire_key, attr in WIRE_FIELDS[platform].items()
    }
    return _VARIANTS[platform](enabled=bool(data.get("enabled", False)), **kwargs)


def qr_code_config_to_dict(config: QrCodeConfig | None) -> dict | None:
    """Inverse of :func:`qr_code_config_from_dict`."""
    if config is None:
        return None
    data: dict = {"type": config.platform.value, "enabled": config.enabled}
    for wire_key, attr in WIRE_FIELDS[config.platform].items():
        data[wire_key] = getattr(config, attr)
    return data


# ---------------------------------------------------------------------------
# App-link documents
# ---------------------------------------------------------------------------

def build_asset_links(config: AndroidQrCodeConfig) -> list[dict]:
    """
    Return the Digital Asset Links statement list served as
    ``/.well-known/assetlinks.json`` so Android opens QR deep links in the app.
    """
    return [
        {
            "relation": [ANDROID_HANDLE_ALL_URLS],
            "target": {
                "namespace": "android_app",
                "package_name": config.app_package,
                "sha256_cert_fingerprints": [config.sha256_cert_fingerprints],
            },
        }
    ]


def build_apple_app_site_association(
    config: IosQrCodeConfig,
    paths: list[str],
) -> dict:
    """Return the ``apple-app-site-association`` document for *config*."""
    return {
        "applinks": {
            "apps": [],
            "details": [
                {"appID": config.app_id, "paths": list(paths)},
            ],
        }
    }
