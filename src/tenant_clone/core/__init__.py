from tenant_clone.core.config import PlatformConfig, load_platform_config
from tenant_clone.core.enums import CloneStatus, TableOwnership
from tenant_clone.core.exceptions import (
    TenantCloneConfigError,
    TenantCloneException,
    TenantCloneNoTablesError,
    TenantClonePreconditionError,
)

__all__ = [
    "CloneStatus",
    "PlatformConfig",
    "TableOwnership",
    "TenantCloneConfigError",
    "TenantCloneException",
    "TenantCloneNoTablesError",
    "TenantClonePreconditionError",
    "load_platform_config",
]
