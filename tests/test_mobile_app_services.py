"""
tests.test_mobile_app_services
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
pytest-django tests for the mobile app and tenant services (DB).
"""
from __future__ import annotations

import uuid

import pytest
from django.core.exceptions import ValidationError as DjangoValidationError

from apps.mobile import services
from apps.mobile.models import MobileApp, MobileAppBundle
from apps.mobile.qr_config import AndroidQrCodeConfig, IosQrCodeConfig
from apps.mobile.validators import MobileAppDraft
from apps.tenants.models import Tenant
from apps.tenants.services import create_tenant, delete_tenant, get_tenant
from common.exceptions import ConflictError, NotFoundError, ValidationError
from common.pagination import PageLink

VALID_SECRET = "0123456789abcdef01234567"


@pytest.fixture
def tenant(db) -> Tenant:
    return Tenant.objects.create(name="Acme Corp")


@pytest.fixture
def other_tenant(db) -> Tenant:
    return Tenant.objects.create(name="Globex")


def _draft(pkg_name: str = "my.test.package", **kwargs) -> MobileAppDraft:
    kwargs.setdefault("app_secret", VALID_SECRET)
    return MobileAppDraft(pkg_name=pkg_name, **kwargs)


def _android_config(enabled: bool = True) -> AndroidQrCodeConfig:
    return AndroidQrCodeConfig(
        enabled=enabled,
        app_package="com.example.app",
        sha256_cert_fingerprints="AA:BB:CC",
        store_link="https://play.google.com/store/apps/details?id=com.example.app",
    )


def _ios_config(enabled: bool = True) -> IosQrCodeConfig:
    return IosQrCodeConfig(
        enabled=enabled,
        app_id="TEAMID.com.example.app",
        store_link="https://apps.apple.com/app/id000000",
    )


# ===========================================================================
# Mobile apps
# ===========================================================================

@pytest.mark.django_db
class TestSaveMobileApp:

    def test_save_then_find_returns_equal_record(self, tenant):
        saved = services.save_mobile_app(
            tenant_id=tenant.id,
            draft=_draft(qr_code_config=_android_config()),
        )
        found = services.find_mobile_app_by_id(tenant_id=tenant.id, mobile_app_id=saved.id)
        assert found == saved
        assert found.pkg_name == "my.test.package"
        assert found.app_secret == VALID_SECRET
        assert found.qr_code == _android_config()
        assert found.platform_type == "ANDROID"

    def test_invalid_record_is_not_written(self, tenant):
        with pytest.raises(ValidationError) as exc_info:
            services.save_mobile_app(
                tenant_id=tenant.id,
                draft=_draft(app_secret="short", qr_code_config=AndroidQrCodeConfig(enabled=True)),
            )
        assert exc_info.value.detail == (
            "Validation error: appSecret must be at least 16 and max 2048 characters, "
            "appPackage must not be blank, sha256CertFingerprints must not be blank, "
            "storeLink must not be blank"
        )
        assert [e["field"] for e in exc_info.value.errors] == [
            "appSecret",
            "appPackage",
            "sha256CertFingerprints",
            "storeLink",
        ]
        assert MobileApp.objects.count() == 0

    def test_replace_save_keeps_id(self, tenant):
        saved = services.save_mobile_app(tenant_id=tenant.id, draft=_draft())
        replaced = services.save_mobile_app(
            tenant_id=tenant.id,
            draft=_draft("my.renamed.package", id=saved.id, qr_code_config=_ios_config()),
        )
        assert replaced.id == saved.id
        assert MobileApp.objects.count() == 1
        stored = MobileApp.objects.get(pk=saved.id)
        assert stored.pkg_name == "my.renamed.package"
        assert stored.qr_code == _ios_config()

    def test_replace_unknown_id_raises_not_found(self, tenant):
        with pytest.raises(NotFoundError):
            services.save_mobile_app(tenant_id=tenant.id, draft=_draft(id=uuid.uuid4()))

    def test_replace_of_row_deleted_mid_save_raises_not_found(self, tenant, monkeypatch):
        saved = services.save_mobile_app(tenant_id=tenant.id, draft=_draft())

        def fetch_then_lose_row(*, tenant_id, mobile_app_id):
            stale = MobileApp.objects.get(pk=mobile_app_id, tenant_id=tenant_id)
            MobileApp.objects.filter(pk=mobile_app_id).delete()
            return stale

        monkeypatch.setattr(services, "_lock_mobile_app", fetch_then_lose_row)
        with pytest.raises(NotFoundError):
            services.save_mobile_app(
                tenant_id=tenant.id,
                draft=_draft("my.renamed.package", id=saved.id),
            )
        assert not MobileApp.objects.filter(pkg_name="my.renamed.package").exists()

    def test_unknown_tenant_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            services.save_mobile_app(tenant_id=uuid.uuid4(), draft=_draft())

    def test_duplicate_pkg_name_in_tenant_raises_conflict(self, tenant):
        services.save_mobile_app(tenant_id=tenant.id, draft=_draft("dup.pkg"))
        with pytest.raises(ConflictError):
            services.save_mobile_app(tenant_id=tenant.id, draft=_draft("dup.pkg"))
        assert MobileApp.objects.filter(tenant=tenant).count() == 1

    def test_same_pkg_name_in_other_tenant_is_allowed(self, tenant, other_tenant):
        services.save_mobile_app(tenant_id=tenant.id, draft=_draft("shared.pkg"))
        services.save_mobile_app(tenant_id=other_tenant.id, draft=_draft("shared.pkg"))
        assert MobileApp.objects.filter(pkg_name="shared.pkg").count() == 2


@pytest.mark.django_db
class TestFindAndDeleteMobileApps:

    def test_find_in_other_tenant_raises_not_found(self, tenant, other_tenant):
        saved = services.save_mobile_app(tenant_id=tenant.id, draft=_draft())
        with pytest.raises(NotFoundError):
            services.find_mobile_app_by_id(tenant_id=other_tenant.id, mobile_app_id=saved.id)

    def test_delete_then_find_raises_not_found(self, tenant):
        saved = services.save_mobile_app(tenant_id=tenant.id, draft=_draft())
        services.delete_mobile_app_by_id(tenant_id=tenant.id, mobile_app_id=saved.id)
        with pytest.raises(NotFoundError):
            services.find_mobile_app_by_id(tenant_id=tenant.id, mobile_app_id=saved.id)

    def test_delete_missing_raises_not_found(self, tenant):
        with pytest.raises(NotFoundError):
            services.delete_mobile_app_by_id(tenant_id=tenant.id, mobile_app_id=uuid.uuid4())

    def test_page_of_empty_tenant_is_empty(self, tenant):
        page = services.find_mobile_apps_by_tenant_id(tenant_id=tenant.id, page_link=PageLink(page_size=10))
        assert page.data == []
        assert page.total_elements == 0
        assert page.total_pages == 0
        assert page.has_next is False

    def test_page_after_one_save(self, tenant, other_tenant):
        saved = services.save_mobile_app(tenant_id=tenant.id, draft=_draft())
        services.save_mobile_app(tenant_id=other_tenant.id, draft=_draft("not.mine"))
        page = services.find_mobile_apps_by_tenant_id(tenant_id=tenant.id, page_link=PageLink(page_size=10))
        assert page.data == [saved]
        assert page.total_pages == 1

    def test_paging_sorting_and_search(self, tenant):
        for pkg_name in ("com.b.app", "com.a.app", "com.c.tool"):
            services.save_mobile_app(tenant_id=tenant.id, draft=_draft(pkg_name))

        first = services.find_mobile_apps_by_tenant_id(
            tenant_id=tenant.id,
            page_link=PageLink(page_size=2, sort_property="pkgName"),
        )
        assert [app.pkg_name for app in first.data] == ["com.a.app", "com.b.app"]
        assert (first.total_pages, first.total_elements, first.has_next) == (2, 3, True)

        second = services.find_mobile_apps_by_tenant_id(
            tenant_id=tenant.id,
            page_link=PageLink(page_size=2, page=1, sort_property="pkgName"),
        )
        assert [app.pkg_name for app in second.data] == ["com.c.tool"]
        assert second.has_next is False

        desc = services.find_mobile_apps_by_tenant_id(
            tenant_id=tenant.id,
            page_link=PageLink(page_size=10, sort_property="pkgName", sort_order="DESC"),
        )
        assert [app.pkg_name for app in desc.data] == ["com.c.tool", "com.b.app", "com.a.app"]

        found = services.find_mobile_apps_by_tenant_id(
            tenant_id=tenant.id,
            page_link=PageLink(page_size=10, text_search="APP"),
        )
        assert {app.pkg_name for app in found.data} == {"com.a.app", "com.b.app"}

    def test_unknown_sort_property_raises_validation_error(self, tenant):
        with pytest.raises(ValidationError):
            services.find_mobile_apps_by_tenant_id(
                tenant_id=tenant.id,
                page_link=PageLink(page_size=10, sort_property="appSecret"),
            )

    def test_page_past_the_end_is_empty(self, tenant):
        services.save_mobile_app(tenant_id=tenant.id, draft=_draft())
        page = services.find_mobile_apps_by_tenant_id(
            tenant_id=tenant.id,
            page_link=PageLink(page_size=10, page=5),
        )
        assert page.data == []
        assert (page.total_pages, page.total_elements, page.has_next) == (1, 1, False)

    @pytest.mark.parametrize("kwargs", [
        {"page_size": 0},
        {"page_size": -3},
        {"page_size": 10, "page": -1},
        {"page_size": 10, "sort_order": "SIDEWAYS"},
    ])
    def test_out_of_range_page_link_raises_validation_error(self, kwargs):
        with pytest.raises(ValidationError):
            PageLink(**kwargs)

    def test_delete_by_tenant_removes_only_that_tenant(self, tenant, other_tenant):
        services.save_mobile_app(tenant_id=tenant.id, draft=_draft("one"))
        services.save_mobile_app(tenant_id=tenant.id, draft=_draft("two"))
        services.save_mobile_app(tenant_id=other_tenant.id, draft=_draft("three"))

        assert services.delete_mobile_apps_by_tenant_id(tenant_id=tenant.id) == 2
        assert not MobileApp.objects.filter(tenant=tenant).exists()
        assert MobileApp.objects.filter(tenant=other_tenant).count() == 1


@pytest.mark.django_db
class TestMobileAppModelClean:

    def test_clean_runs_validator(self, tenant):
        app = MobileApp(tenant=tenant, pkg_name="x", app_secret="short")
        with pytest.raises(DjangoValidationError) as exc_info:
            app.clean()
        assert exc_info.value.messages == [
            "appSecret must be at least 16 and max 2048 characters"
        ]

    def test_clean_rejects_unknown_qr_type(self, tenant):
        app = MobileApp(
            tenant=tenant,
            pkg_name="x",
            app_secret="0123456789abcdef",
            qr_code_config={"type": "WEB", "enabled": True},
        )
        with pytest.raises(DjangoValidationError) as exc_info:
            app.clean()
        assert "qr_code_config" in exc_info.value.message_dict


# ===========================================================================
# Bundles and QR-code config views
# ===========================================================================

@pytest.mark.django_db
class TestBundleQrCodeConfig:

    @pytest.fixture
    def android_app(self, tenant) -> MobileApp:
        return services.save_mobile_app(
            tenant_id=tenant.id,
            draft=_draft("com.example.android", qr_code_config=_android_config()),
        )

    @pytest.fixture
    def ios_app(self, tenant) -> MobileApp:
        return services.save_mobile_app(
            tenant_id=tenant.id,
            draft=_draft("com.example.ios", qr_code_config=_ios_config()),
        )

    def test_find_platform_configs(self, tenant, android_app, ios_app):
        bundle = services.save_mobile_app_bundle(
            tenant_id=tenant.id,
            title="Example",
            android_app_id=android_app.id,
            ios_app_id=ios_app.id,
        )
        assert services.find_android_qr_code_config(
            tenant_id=tenant.id, bundle_id=bundle.id
        ) == _android_config()
        assert services.find_ios_qr_code_config(
            tenant_id=tenant.id, bundle_id=bundle.id
        ) == _ios_config()

    def test_missing_bundle_raises_not_found(self, tenant):
        with pytest.raises(NotFoundError):
            services.find_android_qr_code_config(tenant_id=tenant.id, bundle_id=uuid.uuid4())

    def test_bundle_of_other_tenant_raises_not_found(self, tenant, other_tenant, android_app):
        bundle = services.save_mobile_app_bundle(
            tenant_id=tenant.id, title="Example", android_app_id=android_app.id
        )
        with pytest.raises(NotFoundError):
            services.find_android_qr_code_config(tenant_id=other_tenant.id, bundle_id=bundle.id)

    def test_missing_platform_app_raises_not_found(self, tenant, android_app):
        bundle = services.save_mobile_app_bundle(
            tenant_id=tenant.id, title="Android only", android_app_id=android_app.id
        )
        with pytest.raises(NotFoundError):
            services.find_ios_qr_code_config(tenant_id=tenant.id, bundle_id=bundle.id)

    def test_platform_app_with_wrong_config_type_raises_not_found(self, tenant, android_app):
        bundle = services.save_mobile_app_bundle(
            tenant_id=tenant.id, title="Mixed up", ios_app_id=android_app.id
        )
        with pytest.raises(NotFoundError):
            services.find_ios_qr_code_config(tenant_id=tenant.id, bundle_id=bundle.id)

    def test_bundle_referencing_foreign_app_raises_not_found(self, tenant, other_tenant):
        foreign = services.save_mobile_app(tenant_id=other_tenant.id, draft=_draft("foreign"))
        with pytest.raises(NotFoundError):
            services.save_mobile_app_bundle(
                tenant_id=tenant.id, title="Bad", android_app_id=foreign.id
            )

    def test_deleting_app_clears_bundle_side(self, tenant, android_app, ios_app):
        bundle = services.save_mobile_app_bundle(
            tenant_id=tenant.id,
            title="Example",
            android_app_id=android_app.id,
            ios_app_id=ios_app.id,
        )
        services.delete_mobile_app_by_id(tenant_id=tenant.id, mobile_app_id=android_app.id)
        bundle.refresh_from_db()
        assert bundle.android_app_id is None
        assert bundle.ios_app_id == ios_app.id

    def test_disabled_config_has_no_asset_links(self, tenant):
        app = services.save_mobile_app(
            tenant_id=tenant.id,
            draft=_draft("disabled.android", qr_code_config=AndroidQrCodeConfig(enabled=False)),
        )
        bundle = services.save_mobile_app_bundle(tenant_id=tenant.id, title="Off", android_app_id=app.id)
        assert services.find_android_qr_code_config(
            tenant_id=tenant.id, bundle_id=bundle.id
        ).enabled is False
        with pytest.raises(NotFoundError):
            services.get_asset_links(tenant_id=tenant.id, bundle_id=bundle.id)

    def test_apple_app_site_association_uses_configured_paths(self, tenant, ios_app, settings):
        settings.MOBILE_DEEP_LINK_PATHS = ["/qr", "/login"]
        bundle = services.save_mobile_app_bundle(tenant_id=tenant.id, title="iOS", ios_app_id=ios_app.id)
        doc = services.get_apple_app_site_association(tenant_id=tenant.id, bundle_id=bundle.id)
        assert doc["applinks"]["details"] == [
            {"appID": "TEAMID.com.example.app", "paths": ["/qr", "/login"]}
        ]

    def test_replace_bundle(self, tenant, android_app, ios_app):
        bundle = services.save_mobile_app_bundle(
            tenant_id=tenant.id, title="v1", android_app_id=android_app.id
        )
        replaced = services.save_mobile_app_bundle(
            tenant_id=tenant.id, bundle_id=bundle.id, title="v2", ios_app_id=ios_app.id
        )
        assert replaced.id == bundle.id
        stored = MobileAppBundle.objects.get(pk=bundle.id)
        assert (stored.title, stored.android_app_id, stored.ios_app_id) == ("v2", None, ios_app.id)

    def test_replace_of_bundle_deleted_mid_save_raises_not_found(self, tenant, monkeypatch):
        bundle = services.save_mobile_app_bundle(tenant_id=tenant.id, title="v1")

        def fetch_then_lose_row(*, tenant_id, bundle_id):
            stale = MobileAppBundle.objects.get(pk=bundle_id, tenant_id=tenant_id)
            MobileAppBundle.objects.filter(pk=bundle_id).delete()
            return stale

        monkeypatch.setattr(services, "_lock_mobile_app_bundle", fetch_then_lose_row)
        with pytest.raises(NotFoundError):
            services.save_mobile_app_bundle(tenant_id=tenant.id, bundle_id=bundle.id, title="v2")
        assert not MobileAppBundle.objects.filter(title="v2").exists()

    def test_delete_bundle(self, tenant):
        bundle = services.save_mobile_app_bundle(tenant_id=tenant.id, title="Gone")
        services.delete_mobile_app_bundle_by_id(tenant_id=tenant.id, bundle_id=bundle.id)
        with pytest.raises(NotFoundError):
            services.find_mobile_app_bundle_by_id(tenant_id=tenant.id, bundle_id=bundle.id)


# ===========================================================================
# Tenants
# ===========================================================================

@pytest.mark.django_db
class TestTenantService:

    def test_create_and_get(self):
        tenant = create_tenant(name="Initech")
        assert get_tenant(tenant.id) == tenant
        assert tenant.slug == "initech"

    def test_duplicate_name_raises_conflict(self, tenant):
        with pytest.raises(ConflictError):
            create_tenant(name=tenant.name)

    def test_get_missing_raises_not_found(self, db):
        with pytest.raises(NotFoundError):
            get_tenant(uuid.uuid4())

    def test_delete_tenant_cascades_mobile_apps_and_bundles(self, tenant, other_tenant):
        app = services.save_mobile_app(tenant_id=tenant.id, draft=_draft())
        services.save_mobile_app_bundle(tenant_id=tenant.id, title="B", android_app_id=app.id)
        services.save_mobile_app(tenant_id=other_tenant.id, draft=_draft())

        delete_tenant(tenant_id=tenant.id)

        assert not Tenant.objects.filter(pk=tenant.id).exists()
        assert not MobileApp.objects.filter(tenant_id=tenant.id).exists()
        assert not MobileAppBundle.objects.filter(tenant_id=tenant.id).exists()
        assert MobileApp.objects.filter(tenant=other_tenant).count() == 1
