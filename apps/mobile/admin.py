"""
apps.mobile.admin
"""
from django.contrib import admin

from .models import MobileApp, MobileAppBundle


@admin.register(MobileApp)
class MobileAppAdmin(admin.ModelAdmin):
    list_display = ["pkg_name", "tenant", "platform_type", "created_at"]
    list_filter = ["tenant"]
    search_fields = ["pkg_name", "tenant__name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["tenant", "pkg_name"]


@admin.register(MobileAppBundle)
class MobileAppBundleAdmin(admin.ModelAdmin):
    list_display = ["title", "tenant", "android_app", "ios_app", "created_at"]
    list_filter = ["tenant"]
    search_fields = ["title", "tenant__name"]
    readonly_fields = ["id", "created_at", "updated_at"]
    ordering = ["tenant", "title"]
