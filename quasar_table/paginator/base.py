"""Base types for the data table paginator."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from sqlalchemy import inspect


DEFAULT_PER_PAGE = 15
DEFAULT_MAX_PER_PAGE = 100
DEFAULT_SESSION_SUFFIX = "_datatable"

# Keys shared by the request, the remembered state and the envelope
PAGINATOR_NAME_KEY = "paginatorName"
PAGINATION_KEY = "pagination"
FILTER_KEY = "filter"
SORT_BY_KEY = "sortBy"
PER_PAGE_KEY = "perPage"
DESCENDING_KEY = "descending"
COLUMNS_KEY = "columns"
PAGE_KEY = "page"


@dataclass
class ControlDefaults:
    """Fallback values used when the request omits a control field."""

    sort_by: str | None = None
    descending: bool = False
    per_page: int = DEFAULT_PER_PAGE


@dataclass
class ControlState:
    """Resolved table controls for one paginator instance."""

    paginator_name: str
    filter: str | None = None
    sort_by: str | None = None
    per_page: int = DEFAULT_PER_PAGE
    descending: bool = False
    columns: Any = None
    page: int = 1

    def to_remembered(self) -> dict:
        """Field set persisted between requests."""
        return {
            FILTER_KEY: self.filter,
            SORT_BY_KEY: self.sort_by,
            PER_PAGE_KEY: self.per_page,
            DESCENDING_KEY: self.descending,
            COLUMNS_KEY: self.columns,
        }


class HookKind(str, Enum):
    """Capabilities a caller-supplied hook can have."""
    ROW_TRANSFORMER = "row_transformer"
    QUERY_PREDICATE_INJECTOR = "query_predicate_injector"
    QUERY_ORDER_INJECTOR = "query_order_injector"
    ROW_PREDICATE = "row_predicate"


@dataclass
class Hook:
    """A named callable registered on the paginator.

    Call contracts per kind:
        ROW_TRANSFORMER          fn(row) -> value stored under ``name``
        QUERY_PREDICATE_INJECTOR fn(query, term) -> criterion or None
        QUERY_ORDER_INJECTOR     fn(query, sort_by, descending) -> query
        ROW_PREDICATE            fn(serialized_row) -> bool
    """

    kind: HookKind
    func: Callable
    name: str | None = None

    def __call__(self, *args, **kwargs):
        return self.func(*args, **kwargs)

    @classmethod
    def row_transformer(cls, name: str, func: Callable) -> "Hook":
        return cls(kind=HookKind.ROW_TRANSFORMER, func=func, name=name)

    @classmethod
    def predicate_injector(cls, column: str, func: Callable) -> "Hook":
        return cls(kind=HookKind.QUERY_PREDICATE_INJECTOR, func=func, name=column)

    @classmethod
    def order_injector(cls, func: Callable) -> "Hook":
        return cls(kind=HookKind.QUERY_ORDER_INJECTOR, func=func)

    @classmethod
    def row_predicate(cls, func: Callable) -> "Hook":
        return cls(kind=HookKind.ROW_PREDICATE, func=func)


class TableRow(dict):
    """Serialized model row that still exposes the source model.

    Keys win over model attributes on attribute access, so custom
    columns can read values set by earlier ones as ``row.name`` or
    ``row["name"]``.
    """

    def __init__(self, model, data: dict | None = None):
        super().__init__(data if data is not None else serialize_model(model))
        self.model = model

    def __getattr__(self, item):
        if item in self:
            return self[item]
        model = self.__dict__.get("model")
        if model is None:
            raise AttributeError(item)
        return getattr(model, item)


def serialize_model(model) -> dict:
    """Model to dict: its own ``to_dict()`` or the mapped column attributes."""
    if hasattr(model, "to_dict"):
        return dict(model.to_dict())
    return {
        attr.key: getattr(model, attr.key)
        for attr in inspect(model).mapper.column_attrs
    }


def primary_model(query):
    """Mapped class of the first entity selected by ``query``."""
    descriptions = query.column_descriptions
    if not descriptions or descriptions[0].get("entity") is None:
        raise ValueError("Query does not select a mapped entity")
    return descriptions[0]["entity"]
