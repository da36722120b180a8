__all__ = [
    "CloneResult",
    "CloneStatus",
    "PlatformConfig",
    "TableOwnership",
    "Tenant",
    "TenantCloner",
    "TenantCloneException",
    "TenantCloneNoTablesError",
    "TenantClonePreconditionError",
    "clone_tenant",
    "load_platform_config",
]

from importlib.metadata import PackageNotFoundError, version

from tenant_clone.catalog.clone import CloneResult, TenantCloner, clone_tenant
from tenant_clone.core import (
    CloneStatus,
    PlatformConfig,
    TableOwnership,
    load_platform_config,
)
from tenant_clone.core.exceptions import (
    TenantCloneException,
    TenantCloneNoTablesError,
    TenantClonePreconditionError,
)
from tenant_clone.network.tenants import Tenant

try:
    __version__ = version("tenant_clone")
except PackageNotFoundError:
    # package is not installed
    pass
