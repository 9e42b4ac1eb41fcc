"""
apps.tenants.services package.
"""
from .tenant_service import (  # noqa: F401
    create_tenant,
    delete_tenant,
    get_tenant,
)
