"""Free-text filter over the filterable table columns."""
import json
import logging
from typing import Any

from sqlalchemy import or_

from quasar_table.paginator.base import Hook

logger = logging.getLogger(__name__)


class Filter:
    """
    Apply a filter term to a query.

    Every filterable column contributes one criterion: the column's custom
    filter result if one is registered, a case-insensitive substring match
    otherwise. Criteria are OR-ed together, so a row matches when any
    filterable column matches.
    """

    def __init__(self, columns: Any, table):
        self.columns = columns
        self.table = table
        self.custom_filters: dict[str, Hook] = {}

    def set_custom_filters(self, custom_filters: dict[str, Hook]) -> "Filter":
        self.custom_filters = dict(custom_filters)
        return self

    def __call__(self, query, term: str | None):
        if not term:
            return query

        criteria = []
        for column in self.filterable_columns():
            if column in self.custom_filters:
                criterion = self.custom_filters[column](query, term)
                if criterion is not None:
                    criteria.append(criterion)
            else:
                criteria.append(table_column(self.table, column).ilike(f"%{term}%"))

        if not criteria:
            return query
        return query.filter(or_(*criteria))

    def filterable_columns(self) -> list[str]:
        """Names of columns flagged filterable, in declaration order."""
        columns = self.columns
        if isinstance(columns, (str, bytes)):
            try:
                columns = json.loads(columns)
            except ValueError:
                logger.warning(f"Ignoring malformed columns spec for table '{self.table.name}'")
                return []

        if not isinstance(columns, list):
            if columns is not None:
                logger.warning(
                    f"Ignoring columns spec of type {type(columns).__name__} "
                    f"for table '{self.table.name}'"
                )
            return []

        return [
            column["name"]
            for column in columns
            if isinstance(column, dict) and column.get("name") and column.get("filterable")
        ]


def table_column(table, name: str):
    """Column ``name`` of ``table``; unknown names raise ValueError."""
    if not isinstance(name, str):
        raise ValueError(f"Column name must be a string, got {type(name).__name__}")
    column = table.c.get(name)
    if column is None:
        raise ValueError(f"Unknown column '{name}' on table '{table.name}'")
    return column
