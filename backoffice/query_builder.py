"""
QueryBuilder for parameterized SELECT statements.
The builder only produces SQL text and its positional parameters; it never executes.
"""

import re
from collections.abc import Callable
from typing import Any

_PARAM_PATTERN = re.compile(r"\$(\d+)")


class QueryBuilder:
    """
    Immutable builder for SELECT statements with joins, filters, grouping and paging.

    Every method returns a new builder, so a base query can be shared and
    refined without side effects.

    Usage:
        builder = QueryBuilder("cities", "c")
        query, params = (
            builder.select("c.*", "co.name AS country_name")
            .join("LEFT JOIN country co ON c.country_id = co.id")
            .where("c.status", 1)
            .order_by_desc("c.id")
            .paginate(2, 10)
            .build()
        )
    """

    def __init__(self, table_name: str, alias: str | None = None):
        self.table_name = table_name
        self.alias = alias
        self.select_fields = "*"
        self.joins: list[str] = []
        self.where_conditions: list[str] = []
        self.or_where_conditions: list[str] = []
        self.params: list[Any] = []
        self.order_by_parts: list[str] = []
        self.group_by_parts: list[str] = []
        self.having_conditions: list[str] = []
        self.limit_count: int | None = None
        self.offset_count: int | None = None

    @property
    def from_clause(self) -> str:
        return f"{self.table_name} {self.alias}" if self.alias else self.table_name

    def _clone(self) -> "QueryBuilder":
        new_builder = QueryBuilder(self.table_name, self.alias)
        new_builder.select_fields = self.select_fields
        new_builder.joins = self.joins.copy()
        new_builder.where_conditions = self.where_conditions.copy()
        new_builder.or_where_conditions = self.or_where_conditions.copy()
        new_builder.params = self.params.copy()
        new_builder.order_by_parts = self.order_by_parts.copy()
        new_builder.group_by_parts = self.group_by_parts.copy()
        new_builder.having_conditions = self.having_conditions.copy()
        new_builder.limit_count = self.limit_count
        new_builder.offset_count = self.offset_count
        return new_builder

    def _add_condition(
        self, field: str, value: Any, operator: str, is_or: bool = False
    ) -> "QueryBuilder":
        new_builder = self._clone()

        # None compares through IS NULL / IS NOT NULL
        if value is None and operator in ("=", "!=", "<>"):
            keyword = "IS NULL" if operator == "=" else "IS NOT NULL"
            condition = f"{field} {keyword}"
        else:
            new_builder.params.append(value)
            condition = f"{field} {operator} ${len(new_builder.params)}"

        if is_or:
            new_builder.or_where_conditions.append(condition)
        else:
            new_builder.where_conditions.append(condition)
        return new_builder

    def _add_in_condition(
        self, field: str, values: list[Any], is_not: bool = False
    ) -> "QueryBuilder":
        if not values:
            raise ValueError(f"IN condition on {field} needs at least one value")

        new_builder = self._clone()
        start_index = len(new_builder.params) + 1
        placeholders = ", ".join(f"${start_index + i}" for i in range(len(values)))
        not_keyword = "NOT " if is_not else ""
        new_builder.where_conditions.append(f"{field} {not_keyword}IN ({placeholders})")
        new_builder.params.extend(values)
        return new_builder

    @staticmethod
    def _shift_placeholders(condition: str, offset: int) -> str:
        return _PARAM_PATTERN.sub(lambda m: f"${int(m.group(1)) + offset}", condition)

    def _add_group_condition(
        self,
        group_function: Callable[["QueryBuilder"], "QueryBuilder"],
        is_or: bool = False,
    ) -> "QueryBuilder":
        """Render the group's conditions in parentheses, renumbering its placeholders."""
        group_builder = group_function(QueryBuilder(""))
        if not group_builder.where_conditions and not group_builder.or_where_conditions:
            return self

        offset = len(self.params)
        and_part = " AND ".join(
            self._shift_placeholders(c, offset) for c in group_builder.where_conditions
        )
        or_parts = [
            self._shift_placeholders(c, offset) for c in group_builder.or_where_conditions
        ]
        group_condition = " OR ".join(([and_part] if and_part else []) + or_parts)

        new_builder = self._clone()
        target = new_builder.or_where_conditions if is_or else new_builder.where_conditions
        target.append(f"({group_condition})")
        new_builder.params.extend(group_builder.params)
        return new_builder

    def select(self, *fields: str) -> "QueryBuilder":
        """Set the SELECT list. No arguments means `*`."""
        new_builder = self._clone()
        new_builder.select_fields = ", ".join(fields) if fields else "*"
        return new_builder

    def join(self, clause: str) -> "QueryBuilder":
        """Append a full join clause, e.g. `LEFT JOIN state s ON c.state_id = s.id`."""
        new_builder = self._clone()
        new_builder.joins.append(clause)
        return new_builder

    def where(
        self,
        field_or_function: str | Callable[["QueryBuilder"], "QueryBuilder"],
        *args: Any,
    ) -> "QueryBuilder":
        """Add a WHERE condition or grouped WHERE clause.

        Supports both of the following call styles:
        - where(field, value) -> operator defaults to '='
        - where(field, operator, value) -> explicit operator in the second place

        Grouped conditions via function: where(lambda qb: qb.or_where(...).or_where(...))
        """
        if callable(field_or_function):
            return self._add_group_condition(field_or_function)

        if len(args) == 2:
            operator, value = args
            return self._add_condition(field_or_function, value, operator)
        if len(args) == 1:
            return self._add_condition(field_or_function, args[0], "=")
        raise TypeError("where() expects (field, value) or (field, operator, value)")

    def or_where(
        self,
        field_or_function: str | Callable[["QueryBuilder"], "QueryBuilder"],
        *args: Any,
    ) -> "QueryBuilder":
        """Add an OR WHERE condition. Same call styles as `where`."""
        if callable(field_or_function):
            return self._add_group_condition(field_or_function, is_or=True)

        if len(args) == 2:
            operator, value = args
            return self._add_condition(field_or_function, value, operator, is_or=True)
        if len(args) == 1:
            return self._add_condition(field_or_function, args[0], "=", is_or=True)
        raise TypeError("or_where() expects (field, value) or (field, operator, value)")

    def where_raw(self, condition: str) -> "QueryBuilder":
        """Add a parameterless condition such as `e.created_at >= NOW() - INTERVAL '7 days'`."""
        new_builder = self._clone()
        new_builder.where_conditions.append(condition)
        return new_builder

    def where_group(
        self, group_function: Callable[["QueryBuilder"], "QueryBuilder"]
    ) -> "QueryBuilder":
        return self._add_group_condition(group_function)

    def where_in(self, field: str, values: list[Any]) -> "QueryBuilder":
        return self._add_in_condition(field, list(values))

    def where_not_in(self, field: str, values: list[Any]) -> "QueryBuilder":
        return self._add_in_condition(field, list(values), is_not=True)

    def order_by(self, field: str) -> "QueryBuilder":
        """Add ORDER BY ascending for a field. Chain to add multiple fields."""
        new_builder = self._clone()
        new_builder.order_by_parts.append(field)
        return new_builder

    def order_by_desc(self, field: str) -> "QueryBuilder":
        new_builder = self._clone()
        new_builder.order_by_parts.append(f"{field} DESC")
        return new_builder

    def group_by(self, *fields: str) -> "QueryBuilder":
        if not fields:
            return self
        new_builder = self._clone()
        new_builder.group_by_parts.extend(f for f in fields if f)
        return new_builder

    def having(self, field: str, *args: Any) -> "QueryBuilder":
        """Add a HAVING condition: having(expr, value) or having(expr, operator, value)."""
        if len(args) == 2:
            operator, value = args
        elif len(args) == 1:
            operator, value = "=", args[0]
        else:
            raise TypeError("having() expects (field, value) or (field, operator, value)")

        new_builder = self._clone()
        new_builder.params.append(value)
        new_builder.having_conditions.append(
            f"{field} {operator} ${len(new_builder.params)}"
        )
        return new_builder

    def limit(self, count: int) -> "QueryBuilder":
        new_builder = self._clone()
        new_builder.limit_count = count
        return new_builder

    def offset(self, count: int) -> "QueryBuilder":
        new_builder = self._clone()
        new_builder.offset_count = count
        return new_builder

    def paginate(self, page: int, per_page: int = 10) -> "QueryBuilder":
        """
        Set LIMIT/OFFSET from a 1-based page number.

        Args:
            page: Page number (1-based)
            per_page: Number of records per page (default: 10)
        """
        if page < 1:
            raise ValueError("Page number must be 1 or greater")
        if per_page < 1:
            raise ValueError("Per page count must be 1 or greater")

        return self.limit(per_page).offset((page - 1) * per_page)

    def for_count(self) -> "QueryBuilder":
        """Same FROM/JOIN/WHERE, selecting only the row count."""
        new_builder = self.select("COUNT(*) AS total")
        new_builder.order_by_parts = []
        new_builder.limit_count = None
        new_builder.offset_count = None
        return new_builder

    def _where_clause(self) -> str:
        parts: list[str] = []
        if self.where_conditions:
            if len(self.where_conditions) > 1 and self.or_where_conditions:
                parts.append(f"({' AND '.join(self.where_conditions)})")
            else:
                parts.append(" AND ".join(self.where_conditions))
        parts.extend(self.or_where_conditions)
        return " OR ".join(parts)

    def build(self) -> tuple[str, list[Any]]:
        """Build the final SQL query and parameters. LIMIT and OFFSET are bound too."""
        params = self.params.copy()
        query_parts = [f"SELECT {self.select_fields} FROM {self.from_clause}"]
        query_parts.extend(self.joins)

        where_clause = self._where_clause()
        if where_clause:
            query_parts.append(f"WHERE {where_clause}")

        if self.group_by_parts:
            query_parts.append(f"GROUP BY {', '.join(self.group_by_parts)}")

        if self.having_conditions:
            query_parts.append(f"HAVING {' AND '.join(self.having_conditions)}")

        if self.order_by_parts:
            query_parts.append(f"ORDER BY {', '.join(self.order_by_parts)}")

        if self.limit_count is not None:
            params.append(self.limit_count)
            query_parts.append(f"LIMIT ${len(params)}")

        if self.offset_count is not None:
            params.append(self.offset_count)
            query_parts.append(f"OFFSET ${len(params)}")

        return " ".join(query_parts), params

    def to_sql(self) -> str:
        """Return only the SQL query string without parameters"""
        query, _ = self.build()
        return query

    def __str__(self) -> str:
        query, params = self.build()
        return f"Query: {query}\nParams: {params}"
