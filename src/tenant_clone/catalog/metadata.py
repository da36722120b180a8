"""Point the configuration rows of a freshly cloned tenant at the target tenant.

After duplication the target's options table is a verbatim copy of the
source's. Two kinds of rows still name the source:

- the role definitions, stored under the key ``<source prefix>user_roles``;
- the ``home`` and ``siteurl`` values, which hold the source base URL.
"""

from __future__ import annotations

from sqlalchemy import Engine, MetaData, Table, update

from tenant_clone.core.constants import BASE_URL_OPTIONS, OPTIONS_TABLE, USER_ROLES_OPTION
from tenant_clone.core.logging_config import get_logger
from tenant_clone.network.tenants import Tenant

logger = get_logger("metadata")


def fix_tenant_metadata(engine: Engine, source: Tenant, target: Tenant) -> None:
    """Rewrite the tenant-scoped options of ``target`` after a clone from ``source``.

    Renames the role-definition key to the target prefix, keeping its value, and
    sets ``home`` and ``siteurl`` to ``target.base_url``. Both updates run in
    one transaction.

    Args:
        engine: Engine connected to the platform database.
        source: Tenant the tables were cloned from.
        target: Tenant the tables were cloned into, with its final base URL.

    Raises:
        sqlalchemy.exc.NoSuchTableError: If the target has no options table.
    """
    with engine.begin() as conn:
        options = Table(f"{target.prefix}{OPTIONS_TABLE}", MetaData(), autoload_with=conn)

        logger.info(f"Renaming option {source.prefix}{USER_ROLES_OPTION} => {target.prefix}{USER_ROLES_OPTION}")
        conn.execute(
            update(options)
            .where(options.c.option_name == f"{source.prefix}{USER_ROLES_OPTION}")
            .values(option_name=f"{target.prefix}{USER_ROLES_OPTION}")
        )

        logger.info(f"Setting {' and '.join(BASE_URL_OPTIONS)} to {target.base_url}")
        conn.execute(
            update(options)
            .where(options.c.option_name.in_(BASE_URL_OPTIONS))
            .values(option_value=target.base_url)
        )
