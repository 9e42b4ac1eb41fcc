"""
apps.mobile.urls
~~~~~~~~~~~~~~~~
URL routing for mobile apps and bundles.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import (
    AndroidQrCodeConfigView,
    AppleAppSiteAssociationView,
    AssetLinksView,
    IosQrCodeConfigView,
    MobileAppBundleDetailView,
    MobileAppBundleSaveView,
    MobileAppDetailView,
    MobileAppListSaveView,
)

_PREFIX = "tenants/<uuid:tenant_id>/mobile/"
_BUNDLE = _PREFIX + "bundles/<uuid:bundle_id>/"

urlpatterns = [
    path(_PREFIX + "apps/", MobileAppListSaveView.as_view(), name="mobile-app-list-save"),
    path(
        _PREFIX + "apps/<uuid:mobile_app_id>/",
        MobileAppDetailView.as_view(),
        name="mobile-app-detail",
    ),
    path(_PREFIX + "bundles/", MobileAppBundleSaveView.as_view(), name="mobile-app-bundle-save"),
    path(_BUNDLE, MobileAppBundleDetailView.as_view(), name="mobile-app-bundle-detail"),
    path(
        _BUNDLE + "android/qr-code-config/",
        AndroidQrCodeConfigView.as_view(),
        name="mobile-app-bundle-android-qr-code-config",
    ),
    path(
        _BUNDLE + "ios/qr-code-config/",
        IosQrCodeConfigView.as_view(),
        name="mobile-app-bundle-ios-qr-code-config",
    ),
    path(_BUNDLE + "assetlinks.json", AssetLinksView.as_view(), name="mobile-app-bundle-asset-links"),
    path(
        _BUNDLE + "apple-app-site-association",
        AppleAppSiteAssociationView.as_view(),
        name="mobile-app-bundle-apple-app-site-association",
    ),
]
