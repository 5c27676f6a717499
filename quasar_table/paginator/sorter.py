"""Ordering for the data table query."""
from quasar_table.paginator.base import Hook
from quasar_table.paginator.filter import table_column


class Sorter:
    """Order a query by a column of the primary table, or hand off to a custom sorter."""

    def __init__(self, table):
        self.table = table
        self.custom_sorter: Hook | None = None

    def set_custom_sorter(self, custom_sorter: Hook | None) -> "Sorter":
        self.custom_sorter = custom_sorter
        return self

    def __call__(self, query, sort_by: str | None, descending: bool):
        if not sort_by:
            return query

        if self.custom_sorter:
            ordered = self.custom_sorter(query, sort_by, descending)
            return query if ordered is None else ordered

        column = table_column(self.table, sort_by)
        return query.order_by(column.desc() if descending else column.asc())
