"""
apps.tenants.urls
~~~~~~~~~~~~~~~~~
URL routing for the Tenants application.
Mounted at /api/v1/ by the root URLconf.
"""
from django.urls import path

from .views import TenantCreateView, TenantDetailView

urlpatterns = [
    # POST /api/v1/tenants/
    path("tenants/", TenantCreateView.as_view(), name="tenant-create"),
    # GET/DELETE /api/v1/tenants/<tenant_id>/
    path("tenants/<uuid:tenant_id>/", TenantDetailView.as_view(), name="tenant-detail"),
]
