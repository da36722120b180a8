"""Tenant cloning for multi-tenant platforms."""

from tenant_clone.catalog.assets import AssetMirrorSummary, mirror_assets
from tenant_clone.catalog.clone import CloneResult, TenantCloner, clone_tenant, parse_tenant_ids
from tenant_clone.catalog.metadata import fix_tenant_metadata
from tenant_clone.catalog.ownership import TablePair, classify_table, destination_name, tables_to_clone
from tenant_clone.catalog.tables import TableCatalog

__all__ = [
    "AssetMirrorSummary",
    "CloneResult",
    "TableCatalog",
    "TablePair",
    "TenantCloner",
    "classify_table",
    "clone_tenant",
    "destination_name",
    "fix_tenant_metadata",
    "mirror_assets",
    "parse_tenant_ids",
    "tables_to_clone",
]
