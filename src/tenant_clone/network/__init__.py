"""Tenant lookup and network-wide platform commands."""

from tenant_clone.network.commands import CacheFlusher, PlatformCommand, ReferenceRewriter
from tenant_clone.network.tenants import DatabaseTenantResolver, Tenant, TenantResolver

__all__ = [
    "CacheFlusher",
    "DatabaseTenantResolver",
    "PlatformCommand",
    "ReferenceRewriter",
    "Tenant",
    "TenantResolver",
]
