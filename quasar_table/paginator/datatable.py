"""DataTablePaginator - a paginator for Flask-SQLAlchemy queries and Quasar tables."""
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any, Callable

from flask import current_app, has_app_context, has_request_context, json

from quasar_table.paginator.base import (
    DEFAULT_MAX_PER_PAGE,
    DEFAULT_PER_PAGE,
    DEFAULT_SESSION_SUFFIX,
    DESCENDING_KEY,
    FILTER_KEY,
    PAGINATION_KEY,
    PAGINATOR_NAME_KEY,
    PER_PAGE_KEY,
    SORT_BY_KEY,
    ControlDefaults,
    ControlState,
    Hook,
    TableRow,
    primary_model,
)
from quasar_table.paginator.filter import Filter
from quasar_table.paginator.sorter import Sorter
from quasar_table.paginator.state import RequestArgs, SessionStateStore, StateResolver

logger = logging.getLogger(__name__)


class DataTablePaginator:
    """
    Paginated, filterable, sortable view of a query for a Quasar table.

    Nothing touches the database on construction. The first data access
    (serialization, iteration, indexing, truthiness) resolves the control
    state, applies filter then sort, runs one paginate query and caches
    the transformed page. Later accesses reuse that page.

    Usage:
        paginator = (
            DataTablePaginator(User.query, sort_by="name")
            .custom_column("name_with_email", lambda row: f"{row.name} ({row.email})")
            .add_custom_filter("group", lambda query, term: User.group.has(Group.name.ilike(f"%{term}%")))
        )
        return jsonify(paginator.to_dict())
    """

    def __init__(
        self,
        query,
        sort_by: str | None = None,
        descending: bool = False,
        per_page: int | None = None,
        paginator_name: str | None = None,
        request_args: RequestArgs | Mapping | None = None,
        session: SessionStateStore | MutableMapping | None = None,
    ):
        self.query = query
        self.model = primary_model(query)
        self.main_table = self.model.__table__
        self.paginator_name = paginator_name or self.main_table.name
        self.defaults = ControlDefaults(
            sort_by=sort_by,
            descending=descending,
            per_page=per_page or _config("PAGINATOR_DEFAULT_PER_PAGE", DEFAULT_PER_PAGE),
        )

        self._request_args = request_args
        self._session = session

        self.custom_columns: dict[str, Hook] = {}
        self.custom_filters: dict[str, Hook] = {}
        self.custom_sorter: Hook | None = None
        self.custom_filter: Hook | None = None

        self.state: ControlState | None = None
        self.pagination = None
        self._rows: list[TableRow] = []
        self._pointer = 0
        self._initialized = False

    # ── Registration ───────────────────────────────────────────────

    def custom_column(self, column: str, callback: Callable) -> "DataTablePaginator":
        """Add or overwrite ``column`` on every row with ``callback(row)``."""
        self.custom_columns[column] = Hook.row_transformer(column, callback)
        return self

    def add_custom_filter(self, column: str, callback: Callable) -> "DataTablePaginator":
        """Replace the default substring match for ``column``."""
        self.custom_filters[column] = Hook.predicate_injector(column, callback)
        return self

    def set_custom_sorter(self, sorter: Callable) -> "DataTablePaginator":
        """Replace the default ordering entirely."""
        self.custom_sorter = Hook.order_injector(sorter)
        return self

    def filter(self, predicate: Callable) -> "DataTablePaginator":
        """Drop serialized rows for which ``predicate(row)`` is falsy.

        Runs after paging: the page may hold fewer than ``per_page`` rows
        and ``total`` is not adjusted.
        """
        self.custom_filter = Hook.row_predicate(predicate)
        return self

    # ── Serialization ──────────────────────────────────────────────

    def to_dict(self) -> dict:
        self._initialize()

        pagination = self._pagination_dict()
        if self.custom_filter:
            pagination["data"] = [row for row in pagination["data"] if self.custom_filter(row)]

        return {
            PAGINATOR_NAME_KEY: self.paginator_name,
            PAGINATION_KEY: pagination,
            FILTER_KEY: self.state.filter,
            SORT_BY_KEY: self.state.sort_by,
            PER_PAGE_KEY: self.state.per_page,
            DESCENDING_KEY: self.state.descending,
        }

    def to_json(self, **kwargs) -> str:
        return json.dumps(self.to_dict(), **kwargs)

    # ── Collection protocol ────────────────────────────────────────

    def count(self) -> int:
        """Row count of the base query, without filter or sort."""
        return self.query.count()

    def __len__(self):
        self._initialize()
        return len(self._rows)

    def __iter__(self):
        self._initialize()
        return iter(list(self._rows))

    def __getitem__(self, index):
        self._initialize()
        return self._rows[index]

    def __bool__(self):
        self._initialize()
        return bool(self._rows)

    @property
    def rows(self) -> list[TableRow]:
        self._initialize()
        return list(self._rows)

    # Cursor over the fetched page; rewinding never re-queries.

    def current(self) -> TableRow | None:
        self._initialize()
        if not self.valid():
            return None
        return self._rows[self._pointer]

    def key(self) -> int:
        return self._pointer

    def next(self):
        self._pointer += 1

    def valid(self) -> bool:
        self._initialize()
        return self._pointer < len(self._rows)

    def rewind(self):
        self._pointer = 0

    # ── Internals ──────────────────────────────────────────────────

    def _initialize(self):
        if self._initialized:
            return

        resolver = StateResolver(
            self._store(),
            suffix=_config("PAGINATOR_SESSION_SUFFIX", DEFAULT_SESSION_SUFFIX),
            max_per_page=_config("PAGINATOR_MAX_PER_PAGE", DEFAULT_MAX_PER_PAGE),
        )
        self.state = resolver.resolve(self.paginator_name, self._args(), self.defaults)

        query = Filter(self.state.columns, self.main_table).set_custom_filters(
            self.custom_filters
        )(self.query, self.state.filter)
        query = Sorter(self.main_table).set_custom_sorter(self.custom_sorter)(
            query, self.state.sort_by, self.state.descending
        )

        # Only the primary table's columns, whatever joins were added
        query = query.with_entities(self.model)

        logger.debug(
            f"Paginating '{self.paginator_name}': page={self.state.page}, "
            f"per_page={self.state.per_page}, filter={self.state.filter!r}, "
            f"sort_by={self.state.sort_by!r}, descending={self.state.descending}"
        )
        self.pagination = query.paginate(
            page=self.state.page, per_page=self.state.per_page, error_out=False
        )
        self._rows = [self._transform(item) for item in self.pagination.items]
        self._initialized = True

    def _transform(self, item) -> TableRow:
        row = TableRow(item)
        for column, callback in self.custom_columns.items():
            row[column] = callback(row)
        return row

    def _pagination_dict(self) -> dict[str, Any]:
        page = self.pagination
        return {
            "current_page": page.page,
            "data": [dict(row) for row in self._rows],
            "from": page.first or None,
            "to": page.last or None,
            "last_page": max(page.pages, 1),
            "per_page": page.per_page,
            "total": page.total,
            "next_page": page.next_num,
            "prev_page": page.prev_num,
            "path": _request_path(),
        }

    def _args(self) -> RequestArgs:
        if isinstance(self._request_args, RequestArgs):
            return self._request_args
        if self._request_args is not None:
            return RequestArgs(self._request_args)
        if has_request_context():
            from flask import request

            return RequestArgs.from_request(request)
        return RequestArgs()

    def _store(self) -> SessionStateStore:
        if isinstance(self._session, SessionStateStore):
            return self._session
        if self._session is not None:
            return SessionStateStore(self._session)
        if has_request_context():
            from flask import session

            return SessionStateStore(session)
        logger.debug(f"Paginator '{self.paginator_name}': no session, state will not be remembered")
        return SessionStateStore({})


def _config(key: str, default):
    if has_app_context():
        return current_app.config.get(key, default)
    return default


def _request_path() -> str | None:
    if has_request_context():
        from flask import request

        return request.base_url
    return None
