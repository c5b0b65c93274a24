"""
Builders for INSERT / UPDATE / DELETE statements.

Column names come from resource configuration, never from request payloads
directly, but they are still checked against a plain identifier pattern
before being spliced into SQL text. Values are always bound as `$n`.
"""

import re
from collections.abc import Mapping, Sequence
from typing import Any

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def quote_identifier(name: str) -> str:
    """Validate a column or table name; returns it unchanged."""
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid SQL identifier: {name!r}")
    return name


def _placeholders(start: int, count: int) -> str:
    return ", ".join(f"${start + i}" for i in range(count))


def build_insert(
    table: str, fields: Mapping[str, Any], returning: str | None = "id"
) -> tuple[str, list[Any]]:
    """INSERT INTO t (a, b) VALUES ($1, $2) [RETURNING id]"""
    if not fields:
        raise ValueError("INSERT needs at least one column")

    columns = ", ".join(quote_identifier(column) for column in fields)
    query = (
        f"INSERT INTO {quote_identifier(table)} ({columns}) "
        f"VALUES ({_placeholders(1, len(fields))})"
    )
    if returning:
        query += f" RETURNING {returning}"
    return query, list(fields.values())


def build_update(
    table: str,
    fields: Mapping[str, Any],
    conditions: Mapping[str, Any],
) -> tuple[str, list[Any]]:
    """UPDATE t SET a = $1, b = $2 WHERE id = $3 [AND status = $4]

    Only the supplied keys are written. `conditions` is ANDed in order; the
    first condition is normally the primary key.
    """
    if not fields:
        raise ValueError("UPDATE needs at least one column to set")
    if not conditions:
        raise ValueError("UPDATE without a WHERE condition is not allowed")

    set_clause = ", ".join(
        f"{quote_identifier(column)} = ${i + 1}" for i, column in enumerate(fields)
    )
    offset = len(fields)
    where_clause = " AND ".join(
        f"{quote_identifier(column)} = ${offset + i + 1}"
        for i, column in enumerate(conditions)
    )
    params = list(fields.values()) + list(conditions.values())
    return f"UPDATE {quote_identifier(table)} SET {set_clause} WHERE {where_clause}", params


def build_update_many(
    table: str, fields: Mapping[str, Any], ids: Sequence[Any], id_column: str = "id"
) -> tuple[str, list[Any]]:
    """UPDATE t SET a = $1 WHERE id IN ($2, $3, ...)"""
    if not fields:
        raise ValueError("UPDATE needs at least one column to set")
    if not ids:
        raise ValueError("Bulk update needs at least one id")

    set_clause = ", ".join(
        f"{quote_identifier(column)} = ${i + 1}" for i, column in enumerate(fields)
    )
    in_clause = _placeholders(len(fields) + 1, len(ids))
    query = (
        f"UPDATE {quote_identifier(table)} SET {set_clause} "
        f"WHERE {quote_identifier(id_column)} IN ({in_clause})"
    )
    return query, list(fields.values()) + list(ids)


def build_delete(
    table: str, entity_id: Any, id_column: str = "id", returning: str | None = None
) -> tuple[str, list[Any]]:
    query = f"DELETE FROM {quote_identifier(table)} WHERE {quote_identifier(id_column)} = $1"
    if returning:
        query += f" RETURNING {returning}"
    return query, [entity_id]


def build_delete_many(
    table: str, ids: Sequence[Any], id_column: str = "id", returning: str | None = None
) -> tuple[str, list[Any]]:
    if not ids:
        raise ValueError("Bulk delete needs at least one id")

    query = (
        f"DELETE FROM {quote_identifier(table)} "
        f"WHERE {quote_identifier(id_column)} IN ({_placeholders(1, len(ids))})"
    )
    if returning:
        query += f" RETURNING {returning}"
    return query, list(ids)


def affected_rows(status: str) -> int:
    """Parse asyncpg's command tag ("UPDATE 3", "DELETE 0", "INSERT 0 1")."""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (ValueError, AttributeError):
        return 0
