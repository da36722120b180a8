"""Tenants of a multi-tenant platform and how they are looked up.

A tenant is identified by a positive integer. Its tables share a name prefix
(``wp_`` for the root tenant, ``wp_<id>_`` for every other tenant) and its
public base URL is the ``siteurl`` option stored in its own options table.

The clone engine only depends on the ``TenantResolver`` protocol. The
``DatabaseTenantResolver`` implements it against the platform's tenant
registry (``<prefix>blogs``) using the SQLAlchemy engine the rest of the clone
runs on.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict
from sqlalchemy import Engine, MetaData, Table, inspect, select
from sqlalchemy.exc import NoSuchTableError

from tenant_clone.core.config import PlatformConfig
from tenant_clone.core.constants import (
    NETWORK_TABLE,
    OPTIONS_TABLE,
    ROOT_TENANT_ID,
    TENANT_REGISTRY_TABLE,
    TenantId,
)
from tenant_clone.core.logging_config import LoggerMixin


class Tenant(BaseModel):
    """A tenant of the platform.

    Attributes:
        tenant_id: Positive integer identifier. 1 is the root tenant.
        prefix: Literal prefix of every table the tenant owns.
        base_url: Public base URL of the tenant (its ``siteurl``).
    """

    model_config = ConfigDict(frozen=True)

    tenant_id: TenantId
    prefix: str
    base_url: str

    @property
    def is_root(self) -> bool:
        return self.tenant_id == ROOT_TENANT_ID

    def with_https(self) -> Tenant:
        """Return a copy whose base URL uses the https scheme."""
        return self.model_copy(update={"base_url": re.sub(r"^http:", "https:", self.base_url)})


@runtime_checkable
class TenantResolver(Protocol):
    """Looks up tenants by identifier."""

    def resolve(self, tenant_id: int) -> Tenant | None: ...

    def is_multitenant(self) -> bool: ...


class DatabaseTenantResolver(LoggerMixin):
    """Resolve tenants from the platform registry tables.

    Args:
        engine: Engine connected to the platform database.
        config: Platform configuration; supplies the base table prefix and the
            explicit multi-tenant flag.
    """

    def __init__(self, engine: Engine, config: PlatformConfig):
        self.engine = engine
        self.config = config

    @property
    def registry_table_name(self) -> str:
        return f"{self.config.table_prefix}{TENANT_REGISTRY_TABLE}"

    def is_multitenant(self) -> bool:
        """Whether the platform hosts more than one tenant.

        An explicit ``multisite`` setting wins; otherwise the platform counts as
        multi-tenant when both the tenant registry and the network table exist.
        """
        if self.config.multisite is not None:
            return self.config.multisite
        tables = set(inspect(self.engine).get_table_names())
        return {self.registry_table_name, f"{self.config.table_prefix}{NETWORK_TABLE}"} <= tables

    def resolve(self, tenant_id: int) -> Tenant | None:
        """Return the tenant registered under ``tenant_id``, or None if there is none."""
        metadata = MetaData()
        try:
            registry = Table(self.registry_table_name, metadata, autoload_with=self.engine)
        except NoSuchTableError:
            self._logger.warning(f"Tenant registry {self.registry_table_name} does not exist")
            return None

        with self.engine.connect() as conn:
            row = conn.execute(select(registry).where(registry.c.blog_id == tenant_id)).mappings().first()
        if row is None:
            return None

        prefix = self.config.tenant_prefix(tenant_id)
        base_url = self._site_url(prefix, metadata)
        if base_url is None:
            # No siteurl option; compose the URL from the registry entry
            base_url = f"http://{row['domain']}{row['path']}".rstrip("/")
        return Tenant(tenant_id=tenant_id, prefix=prefix, base_url=base_url)

    def _site_url(self, prefix: str, metadata: MetaData) -> str | None:
        try:
            options = Table(f"{prefix}{OPTIONS_TABLE}", metadata, autoload_with=self.engine)
        except NoSuchTableError:
            return None
        with self.engine.connect() as conn:
            return conn.execute(
                select(options.c.option_value).where(options.c.option_name == "siteurl")
            ).scalar_one_or_none()
