"""
Enumeration classes used throughout the tenant_clone package.
"""

from enum import Enum


class BaseStrEnum(str, Enum):
    """Base class for string enums in Python 3.10"""
    pass


class CloneStatus(BaseStrEnum):
    """Outcome of a clone operation.

    Attributes:
        success: Tables, metadata and files were cloned.
        dry_run: Discovery ran and the plan was logged; nothing was modified.
        failed: The operation was aborted.
    """
    success = "Success"
    dry_run = "Dry_Run"
    failed = "Failed"


class TableOwnership(BaseStrEnum):
    """Who a table matched by a tenant prefix actually belongs to."""
    owned_by_tenant = "Owned_By_Tenant"
    shared_platform_table = "Shared_Platform_Table"
    owned_by_other_tenant = "Owned_By_Other_Tenant"
