# storefront/storage/auth_schema.py

"""Declarative tables of the authentication subsystem.

The storefront never reads or writes these tables; they are described
here as plain descriptors so that any persistence driver can create
them.  A SQLite renderer is included because that is the driver the
project ships with.
"""

import logging
import sqlite3
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from storefront.config.settings import Settings

logger = logging.getLogger("storefront.auth_schema")

# Portable column types, mapped per driver
SERIAL = "serial"
INTEGER = "integer"
VARCHAR = "varchar"
JSON = "json"
TIMESTAMP = "timestamp"
TIMESTAMPTZ = "timestamptz"


@dataclass(frozen=True)
class ForeignKey:
    """Reference from a column to ``table.column``."""

    table: str
    column: str = "id"


@dataclass(frozen=True)
class Column:
    """A single column descriptor."""

    name: str
    type: str
    length: int | None = None
    primary_key: bool = False
    not_null: bool = False
    unique: bool = False
    default_sql: str | None = None
    on_update_now: bool = False
    references: ForeignKey | None = None


@dataclass(frozen=True)
class Table:
    """A table descriptor with an optional composite primary key."""

    name: str
    columns: tuple[Column, ...]
    primary_key: tuple[str, ...] = ()

    def column(self, name: str) -> Column:
        for col in self.columns:
            if col.name == name:
                return col
        raise KeyError(f"{self.name} has no column {name!r}")

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def foreign_keys(self) -> dict[str, ForeignKey]:
        return {
            c.name: c.references
            for c in self.columns
            if c.references is not None
        }


@dataclass(frozen=True)
class Relation:
    """A one-to-one navigation from ``source.fields`` to ``target.references``."""

    name: str
    source: str
    target: str
    fields: tuple[str, ...] = field(default_factory=tuple)
    references: tuple[str, ...] = field(default_factory=tuple)


def create_table(
    prefix: str = Settings.AUTH_TABLE_PREFIX,
) -> Callable[[str], str]:
    """Return a name factory that namespaces tables with *prefix*.

    Several projects can then share one database instance.
    """
    def _name(name: str) -> str:
        return f"{prefix}{name}"
    return _name


_table_name = create_table()


def _varchar(name: str, **kwargs: object) -> Column:
    return Column(name, VARCHAR, length=255, **kwargs)  # type: ignore[arg-type]


USERS = Table(
    name=_table_name("user"),
    columns=(
        Column("id", SERIAL, primary_key=True),
        _varchar("username", not_null=True, unique=True),
        _varchar("name"),
        _varchar("email", not_null=True, unique=True),
        _varchar("image"),
        Column("cart", JSON),
        Column("favorites", JSON),
        Column(
            "created_at",
            TIMESTAMPTZ,
            not_null=True,
            default_sql="CURRENT_TIMESTAMP",
        ),
        Column("updated_at", TIMESTAMPTZ, on_update_now=True),
    ),
)

ACCOUNTS = Table(
    name=_table_name("account"),
    columns=(
        Column("id", SERIAL, primary_key=True),
        Column(
            "user_id",
            INTEGER,
            not_null=True,
            references=ForeignKey(USERS.name),
        ),
        _varchar("provider", not_null=True),
        _varchar("provider_account_id", not_null=True),
        _varchar("access_token"),
        _varchar("refresh_token"),
        Column("expires_at", TIMESTAMP),
    ),
)

SESSIONS = Table(
    name=_table_name("session"),
    columns=(
        Column("id", SERIAL, primary_key=True),
        _varchar("session_token", not_null=True, unique=True),
        Column(
            "user_id",
            INTEGER,
            not_null=True,
            references=ForeignKey(USERS.name),
        ),
        Column("expires", TIMESTAMP, not_null=True),
    ),
)

VERIFICATION_TOKENS = Table(
    name=_table_name("verification_token"),
    columns=(
        _varchar("identifier", not_null=True),
        _varchar("token", not_null=True),
        Column("expires", TIMESTAMPTZ, not_null=True),
    ),
    primary_key=("identifier", "token"),
)

SESSION_USER = Relation(
    name="user",
    source=SESSIONS.name,
    target=USERS.name,
    fields=("user_id",),
    references=("id",),
)

TABLES: tuple[Table, ...] = (USERS, ACCOUNTS, SESSIONS, VERIFICATION_TOKENS)
RELATIONS: tuple[Relation, ...] = (SESSION_USER,)


# ── SQLite driver ────────────────────────────────────────

_SQLITE_TYPES: dict[str, str] = {
    SERIAL: "INTEGER",
    INTEGER: "INTEGER",
    VARCHAR: "TEXT",
    JSON: "TEXT",
    TIMESTAMP: "TEXT",
    TIMESTAMPTZ: "TEXT",
}


def _quote(identifier: str) -> str:
    # Table names contain a hyphen from the prefix
    return '"' + identifier.replace('"', '""') + '"'


def _column_sql(col: Column) -> str:
    parts = [_quote(col.name), _SQLITE_TYPES[col.type]]
    if col.primary_key:
        parts.append("PRIMARY KEY")
        if col.type == SERIAL:
            parts.append("AUTOINCREMENT")
    if col.not_null:
        parts.append("NOT NULL")
    if col.unique:
        parts.append("UNIQUE")
    if col.default_sql is not None:
        parts.append(f"DEFAULT {col.default_sql}")
    if col.references is not None:
        parts.append(
            f"REFERENCES {_quote(col.references.table)}"
            f"({_quote(col.references.column)})"
        )
    return " ".join(parts)


def _update_trigger_sql(table: Table, col: Column) -> str:
    pk = [c.name for c in table.columns if c.primary_key] or list(
        table.primary_key
    )
    match = " AND ".join(f"{_quote(k)} = NEW.{_quote(k)}" for k in pk)
    trigger = _quote(f"{table.name}_touch_{col.name}")
    return (
        f"CREATE TRIGGER IF NOT EXISTS {trigger}\n"
        f"AFTER UPDATE ON {_quote(table.name)}\n"
        f"WHEN NEW.{_quote(col.name)} IS OLD.{_quote(col.name)}\n"
        f"BEGIN\n"
        f"    UPDATE {_quote(table.name)} "
        f"SET {_quote(col.name)} = CURRENT_TIMESTAMP WHERE {match};\n"
        f"END;"
    )


def to_sqlite_ddl(table: Table) -> str:
    """Render ``CREATE TABLE`` (plus touch triggers) for SQLite."""
    lines = [_column_sql(c) for c in table.columns]
    if table.primary_key:
        keys = ", ".join(_quote(k) for k in table.primary_key)
        lines.append(f"PRIMARY KEY ({keys})")
    body = ",\n    ".join(lines)
    statements = [
        f"CREATE TABLE IF NOT EXISTS {_quote(table.name)} (\n    {body}\n);"
    ]
    statements.extend(
        _update_trigger_sql(table, c)
        for c in table.columns
        if c.on_update_now
    )
    return "\n\n".join(statements)


def schema_sql(tables: tuple[Table, ...] = TABLES) -> str:
    return "\n\n".join(to_sqlite_ddl(t) for t in tables) + "\n"


def create_all(conn: sqlite3.Connection) -> list[str]:
    """Create every auth table on *conn*; safe to call repeatedly.

    Returns the names of the tables in creation order.
    """
    conn.execute("PRAGMA foreign_keys=ON")
    conn.executescript(schema_sql())
    conn.commit()
    return [t.name for t in TABLES]


class AuthSchemaDB:
    """SQLite database file holding the auth tables."""

    def __init__(self, db_path: Path | None = None) -> None:
        path = db_path or Settings.AUTH_DB_PATH
        path.parent.mkdir(parents=True, exist_ok=True)
        self.path = path
        self._conn = sqlite3.connect(str(path))
        self._conn.execute("PRAGMA journal_mode=WAL")
        self.tables = create_all(self._conn)
        logger.debug("AuthSchemaDB opened at %s", path)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._conn

    def existing_tables(self) -> list[str]:
        """Names of the auth tables currently present in the file."""
        rows = self._conn.execute(
            "SELECT name FROM sqlite_master "
            "WHERE type = 'table' AND name LIKE ? ORDER BY name",
            (f"{Settings.AUTH_TABLE_PREFIX}%",),
        ).fetchall()
        return [r[0] for r in rows]

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()
