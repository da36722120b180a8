"""Table discovery and duplication on the shared platform database.

Every tenant's tables live in the same database, so cloning a table is a
server-side copy: drop the destination, create it with the structure of the
source, then ``INSERT ... SELECT`` all rows. On MySQL the structure is copied
with ``CREATE TABLE ... LIKE``. Other dialects do not have it, so the source is
reflected and an equivalent table is built from the reflection. In both cases
columns, types, the primary key and indexes are copied while foreign keys and
rows are not.

Each table is duplicated inside its own transaction (``engine.begin()``).
There is no transaction spanning tables: a failure leaves the tables that were
already cloned in place. MySQL commits DDL implicitly, so there a failure in
the row copy can still leave an empty destination table behind.
"""

from __future__ import annotations

import warnings
from contextlib import nullcontext

from sqlalchemy import (
    Column,
    Connection,
    DefaultClause,
    Engine,
    Index,
    MetaData,
    Table,
    UniqueConstraint,
    column,
    func,
    insert,
    inspect,
    select,
    table,
    text,
)
from sqlalchemy.exc import SAWarning

from tenant_clone.catalog.ownership import TablePair
from tenant_clone.core.logging_config import LoggerMixin


class TableCatalog(LoggerMixin):
    """Read and copy tables of the platform database.

    Args:
        engine: Engine connected to the database holding every tenant's tables.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    def list_tables(self, prefix: str) -> list[str]:
        """List tables whose name starts with ``prefix``.

        The prefix is matched literally; ``_`` is not a wildcard.

        Args:
            prefix: Literal table-name prefix of a tenant.

        Returns:
            Matching table names in sorted order. Empty if no table matches.
        """
        return sorted(name for name in inspect(self.engine).get_table_names() if name.startswith(prefix))

    def row_count(self, table_name: str) -> int:
        with self.engine.connect() as conn:
            source = Table(table_name, MetaData(), autoload_with=conn)
            return conn.execute(select(func.count()).select_from(source)).scalar_one()

    def duplicate(self, pair: TablePair, dry_run: bool = False) -> int | None:
        """Replace ``pair.destination`` with a copy of ``pair.source``.

        Every step is logged before it runs. A dry run logs the same lines and
        executes nothing, so its output is a preview of the real run.

        Args:
            pair: Source table and destination table names.
            dry_run: If True, only log what would be done.

        Returns:
            Number of rows in the destination after the copy, or None in a dry run.
        """
        self._logger.info(f"Source table: {pair.source} => Destination table: {pair.destination}")
        with (nullcontext() if dry_run else self.engine.begin()) as conn:
            self._logger.info(f"Dropping {pair.destination}")
            if conn is not None:
                quote = conn.dialect.identifier_preparer.quote_identifier
                conn.execute(text(f"DROP TABLE IF EXISTS {quote(pair.destination)}"))

            self._logger.info(f"Creating {pair.destination} like {pair.source}")
            if conn is not None:
                source = self._reflect(conn, pair.source)
                if conn.dialect.name in ("mysql", "mariadb"):
                    conn.execute(text(f"CREATE TABLE {quote(pair.destination)} LIKE {quote(pair.source)}"))
                else:
                    self._create_like(conn, source, pair.destination)

            self._logger.info(f"Copying rows {pair.source} => {pair.destination}")
            if conn is None:
                return None
            names = [c.name for c in source.columns]
            destination = table(pair.destination, *[column(n) for n in names])
            conn.execute(insert(destination).from_select(names, select(source)))
            return conn.execute(select(func.count()).select_from(destination)).scalar_one()

    def _reflect(self, conn: Connection, table_name: str) -> Table:
        """Reflect a table, logging what SQLAlchemy could not reflect (e.g. SQLite expression indexes)."""
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", SAWarning)
            reflected = Table(table_name, MetaData(), autoload_with=conn)
        for warning in caught:
            self._logger.warning(f"{table_name}: {warning.message}")
        return reflected

    def _create_like(self, conn: Connection, source: Table, destination_name: str) -> None:
        destination = Table(
            destination_name,
            MetaData(),
            *[
                Column(
                    c.name,
                    c.type,
                    primary_key=c.primary_key,
                    nullable=c.nullable,
                    autoincrement=c.autoincrement,
                    server_default=_copied_default(c),
                    comment=c.comment,
                )
                for c in source.columns
            ],
        )
        for constraint in source.constraints:
            if isinstance(constraint, UniqueConstraint):
                destination.append_constraint(
                    UniqueConstraint(
                        *[c.name for c in constraint.columns],
                        name=_rename(constraint.name, source.name, destination_name),
                    )
                )
        for index in source.indexes:
            columns = [destination.c[c.name] for c in index.columns]
            if len(columns) != len(index.expressions):
                self._logger.warning(f"Skipping expression index {index.name} on {source.name}")
                continue
            Index(_rename(index.name, source.name, destination_name), *columns, unique=index.unique)
        destination.create(conn)


def _copied_default(source_column: Column) -> DefaultClause | None:
    """Server default for the copy of ``source_column``.

    Sequence defaults (``nextval(...)``) are dropped; the copy gets its own
    sequence from ``autoincrement`` instead of sharing the source's.
    """
    if source_column.server_default is None:
        return None
    default = source_column.server_default.arg
    if str(default).lstrip().lower().startswith("nextval("):
        return None
    return DefaultClause(default)


def _rename(name: str | None, source_name: str, destination_name: str) -> str | None:
    """Index names are database-wide on most dialects; derive one from the destination table."""
    if name is None:
        return None
    if source_name in name:
        return name.replace(source_name, destination_name, 1)
    return f"{destination_name}_{name}"
