"""Clone one tenant of a multi-tenant platform into another.

A clone runs these steps in order:

1. Validate the request and resolve both tenants. Nothing is modified if any
   check fails.
2. List the source tenant's tables and drop those it does not own.
3. Duplicate every remaining table under the target prefix.
4. Rewrite the target's options (role key, ``home`` and ``siteurl``).
5. Replace the source base URL with the target base URL across the target's
   tables, unless ``skip_replace`` is set.
6. Mirror the source upload tree into the target upload tree.
7. Flush the platform cache.

A dry run stops after step 3 has logged its plan and returns a result with
status ``dry_run``; no table or file is touched.

Example:
    >>> config = load_platform_config("network.yaml")
    >>> result = clone_tenant(config, ["5", "7"], force_https=True)
    >>> result.status
    <CloneStatus.success: 'Success'>
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, Sequence

from sqlalchemy import Engine, create_engine

from tenant_clone.catalog.assets import AssetMirrorSummary, mirror_assets
from tenant_clone.catalog.metadata import fix_tenant_metadata
from tenant_clone.catalog.ownership import TablePair, plan_tables, tables_to_clone
from tenant_clone.catalog.tables import TableCatalog
from tenant_clone.core.config import PlatformConfig
from tenant_clone.core.constants import ROOT_TENANT_ID, tenant_id_regex
from tenant_clone.core.enums import CloneStatus, TableOwnership
from tenant_clone.core.exceptions import TenantCloneNoTablesError, TenantClonePreconditionError
from tenant_clone.core.logging_config import LoggerMixin
from tenant_clone.network.commands import CacheFlusher, PlatformCommand, ReferenceRewriter
from tenant_clone.network.tenants import DatabaseTenantResolver, Tenant, TenantResolver


@dataclass
class CloneResult:
    """Result of a tenant clone operation."""

    status: CloneStatus
    source: Tenant
    target: Tenant
    tables: list[TablePair] = field(default_factory=list)
    excluded_tables: dict[str, TableOwnership] = field(default_factory=dict)
    rows_copied: dict[str, int] = field(default_factory=dict)
    references_replaced: bool = False
    assets: AssetMirrorSummary | None = None

    @property
    def message(self) -> str:
        if self.status == CloneStatus.dry_run:
            return "Dry run completed!"
        return "Clone completed!"

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "source": self.source.model_dump(),
            "target": self.target.model_dump(),
            "tables": [pair._asdict() for pair in self.tables],
            "excluded_tables": {name: ownership.value for name, ownership in self.excluded_tables.items()},
            "rows_copied": self.rows_copied,
            "references_replaced": self.references_replaced,
            "assets": self.assets.to_dict() if self.assets else None,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def parse_tenant_ids(args: Sequence[str]) -> tuple[int, int]:
    """Validate the ``SOURCE TARGET`` arguments of a clone.

    Args:
        args: Exactly two strings of decimal digits.

    Returns:
        The source and target tenant IDs.

    Raises:
        TenantClonePreconditionError: If there are not exactly two positive
            integer arguments, they are equal, or the target is the root tenant.
    """
    if len(args) != 2 or not all(re.fullmatch(tenant_id_regex, str(a)) for a in args):
        raise TenantClonePreconditionError("Please provide two integer arguments.")
    source_id, target_id = int(args[0]), int(args[1])
    if source_id < 1 or target_id < 1:
        raise TenantClonePreconditionError("Tenant IDs must be positive integers.")
    if source_id == target_id:
        raise TenantClonePreconditionError("Can't clone the site to itself.")
    if target_id == ROOT_TENANT_ID:
        raise TenantClonePreconditionError(f"Target site ID = {ROOT_TENANT_ID} is not supported yet.")
    return source_id, target_id


class TenantCloner(LoggerMixin):
    """Clone tenants within one platform.

    All collaborators are passed in explicitly so that each can be replaced,
    e.g. by an in-memory SQLite engine and recording fakes in tests.

    Args:
        engine: Engine connected to the platform database.
        config: Platform configuration (table prefix, upload root).
        resolver: Tenant lookup. Defaults to the registry tables in ``engine``.
        rewriter: Network-wide URL replacement. Defaults to the platform CLI.
        cache: Cache flush. Defaults to the platform CLI.
    """

    def __init__(
        self,
        engine: Engine,
        config: PlatformConfig,
        resolver: TenantResolver | None = None,
        rewriter: ReferenceRewriter | None = None,
        cache: CacheFlusher | None = None,
    ):
        self.engine = engine
        self.config = config
        self.catalog = TableCatalog(engine)
        self.resolver = resolver or DatabaseTenantResolver(engine, config)
        command = PlatformCommand(config.command())
        self.rewriter = rewriter or command
        self.cache = cache or command

    def resolve_tenants(self, args: Sequence[str], force_https: bool = False) -> tuple[Tenant, Tenant]:
        """Check every precondition and resolve the source and target tenants.

        Raises:
            TenantClonePreconditionError: If the platform is not multi-tenant, the
                arguments are invalid, or either tenant does not exist.
        """
        if not self.resolver.is_multitenant():
            raise TenantClonePreconditionError("This is not a multisite installation.")
        source_id, target_id = parse_tenant_ids(args)

        source = self.resolver.resolve(source_id)
        target = self.resolver.resolve(target_id)
        if source is None or target is None:
            raise TenantClonePreconditionError("Site does not exist")
        if force_https:
            target = target.with_https()
        return source, target

    def clone(
        self,
        args: Sequence[str],
        force_https: bool = False,
        skip_replace: bool = False,
        dry_run: bool = False,
    ) -> CloneResult:
        """Clone the tenant ``args[0]`` into the tenant ``args[1]``.

        Args:
            args: Source and target tenant IDs as strings of digits.
            force_https: Use https for the target base URL.
            skip_replace: Do not replace the source URL in the target's tables.
                Useful for tenants that link to each other.
            dry_run: Log the plan without modifying any table or file.

        Returns:
            CloneResult with status ``success``, or ``dry_run`` for a dry run.

        Raises:
            TenantClonePreconditionError: If validation fails. Nothing was modified.
            TenantCloneNoTablesError: If the source tenant has no tables.
            sqlalchemy.exc.SQLAlchemyError: If a table copy or metadata update
                fails. Tables cloned before the failure are left in place.
            subprocess.CalledProcessError: If the search/replace or cache flush
                command fails.
        """
        source, target = self.resolve_tenants(args, force_https)
        self._logger.info(f"Cloning tables: {source.base_url} => {target.base_url}")

        matched = self.catalog.list_tables(source.prefix)
        if not matched:
            raise TenantCloneNoTablesError(source.prefix)
        owned, excluded = tables_to_clone(matched, source)
        for name, ownership in excluded.items():
            self._logger.debug(f"Skipping {name}: {ownership.value}")

        result = CloneResult(
            status=CloneStatus.dry_run if dry_run else CloneStatus.success,
            source=source,
            target=target,
            tables=plan_tables(owned, source, target),
            excluded_tables=excluded,
        )
        for pair in result.tables:
            rows = self.catalog.duplicate(pair, dry_run=dry_run)
            if rows is not None:
                result.rows_copied[pair.destination] = rows
        if dry_run:
            return result

        fix_tenant_metadata(self.engine, source, target)

        if not skip_replace:
            self._logger.info(f"Replacing URLs in the target site tables: {source.base_url} => {target.base_url}")
            self.rewriter.replace_references(source.base_url, target.base_url, target.prefix)
            result.references_replaced = True

        self._logger.info("Copying site files")
        result.assets = mirror_assets(self.config.upload_root(source.tenant_id), self.config.upload_root(target.tenant_id))

        self.cache.flush_cache()
        return result


def clone_tenant(
    config: PlatformConfig,
    args: Sequence[str],
    force_https: bool = False,
    skip_replace: bool = False,
    dry_run: bool = False,
) -> CloneResult:
    """Clone a tenant using the database and platform command named in ``config``."""
    engine = create_engine(config.database_url)
    try:
        return TenantCloner(engine, config).clone(
            args, force_https=force_https, skip_replace=skip_replace, dry_run=dry_run
        )
    finally:
        engine.dispose()
