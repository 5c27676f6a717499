"""Data table paginator - state, filter, sort and page for Quasar tables."""
from quasar_table.paginator.base import ControlDefaults, ControlState, Hook, HookKind, TableRow
from quasar_table.paginator.state import DataTableState, RequestArgs, SessionStateStore, StateResolver
from quasar_table.paginator.filter import Filter
from quasar_table.paginator.sorter import Sorter
from quasar_table.paginator.datatable import DataTablePaginator

__all__ = [
    "ControlDefaults",
    "ControlState",
    "Hook",
    "HookKind",
    "TableRow",
    "DataTableState",
    "RequestArgs",
    "SessionStateStore",
    "StateResolver",
    "Filter",
    "Sorter",
    "DataTablePaginator",
]
