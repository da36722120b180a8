"""Decide which tables matched by a tenant prefix belong to that tenant.

Prefix matching alone is ambiguous for the root tenant: its bare prefix
(``wp_``) is also the start of every other tenant's prefix (``wp_5_``) and of
the platform's shared tables (``wp_users``, ``wp_blogs`` ...). Non-root
prefixes end in ``<id>_`` and are unambiguous.
"""

from __future__ import annotations

from typing import Iterable, NamedTuple

from tenant_clone.core.constants import SHARED_TABLE_SUFFIXES
from tenant_clone.core.enums import TableOwnership
from tenant_clone.network.tenants import Tenant


class TablePair(NamedTuple):
    """A source table and the table it is cloned into."""

    source: str
    destination: str


def classify_table(table_name: str, tenant: Tenant) -> TableOwnership:
    """Classify a table whose name starts with ``tenant.prefix``.

    Args:
        table_name: Name of a table matched by the tenant's prefix.
        tenant: The tenant whose prefix matched.

    Returns:
        ``owned_by_tenant`` for every table of a non-root tenant. For the root
        tenant, ``shared_platform_table`` when the remainder after the prefix is
        exactly a shared table suffix, ``owned_by_other_tenant`` when the
        remainder starts with a digit, and ``owned_by_tenant`` otherwise.

    Raises:
        ValueError: If ``table_name`` does not start with the tenant's prefix.
    """
    if not table_name.startswith(tenant.prefix):
        raise ValueError(f"Table {table_name} does not start with prefix {tenant.prefix}")
    if not tenant.is_root:
        return TableOwnership.owned_by_tenant

    remainder = table_name[len(tenant.prefix):]
    if remainder in SHARED_TABLE_SUFFIXES:
        return TableOwnership.shared_platform_table
    if remainder[:1].isdigit():
        return TableOwnership.owned_by_other_tenant
    return TableOwnership.owned_by_tenant


def tables_to_clone(table_names: Iterable[str], tenant: Tenant) -> tuple[list[str], dict[str, TableOwnership]]:
    """Split matched tables into those to clone and those excluded.

    Returns:
        The owned tables, in input order, and a mapping of every excluded table
        to the reason it was excluded.
    """
    owned: list[str] = []
    excluded: dict[str, TableOwnership] = {}
    for name in table_names:
        ownership = classify_table(name, tenant)
        if ownership == TableOwnership.owned_by_tenant:
            owned.append(name)
        else:
            excluded[name] = ownership
    return owned, excluded


def destination_name(table_name: str, source_prefix: str, target_prefix: str) -> str:
    """Substitute the leading source prefix with the target prefix.

    Only the leading occurrence is replaced, so ``wp_5_wp_5_log`` becomes
    ``wp_7_wp_5_log``.
    """
    if not table_name.startswith(source_prefix):
        raise ValueError(f"Table {table_name} does not start with prefix {source_prefix}")
    return target_prefix + table_name[len(source_prefix):]


def plan_tables(table_names: Iterable[str], source: Tenant, target: Tenant) -> list[TablePair]:
    return [TablePair(name, destination_name(name, source.prefix, target.prefix)) for name in table_names]
