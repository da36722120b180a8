"""
Constants used throughout the tenant_clone package.
"""

from typing import Annotated  # noqa: I001
from pydantic import Field

# The tenant whose tables carry the bare prefix and who owns the shared tables
ROOT_TENANT_ID = 1

# Default table-name prefix of the platform
DEFAULT_TABLE_PREFIX = "wp_"

# Tables owned by the platform as a whole, named by their suffix after the root prefix
SHARED_TABLE_SUFFIXES = frozenset(
    {
        "blogs",
        "blog_versions",
        "registration_log",
        "site",
        "sitemeta",
        "signups",
        "users",
        "usermeta",
    }
)

# Registry tables used to detect a multi-tenant installation and resolve tenants
TENANT_REGISTRY_TABLE = "blogs"
NETWORK_TABLE = "site"

# Per-tenant configuration table and the keys rewritten after a clone
OPTIONS_TABLE = "options"
USER_ROLES_OPTION = "user_roles"
BASE_URL_OPTIONS = ("home", "siteurl")

# Directory inside the root upload tree that holds every other tenant's uploads
SITES_DIR = "sites"

# Tenant identifiers as they arrive from the command line
TenantId = Annotated[int, Field(gt=0)]
tenant_id_regex = r"[0-9]+"
