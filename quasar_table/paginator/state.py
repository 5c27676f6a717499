"""Control state resolution.

A paginator either trusts the incoming request (the client is driving
this table) or recalls the state remembered in the session from the
previous request (the client is driving another table, or none). Either
way the winning state is flashed back into the session for the next
request.
"""
import logging
from collections.abc import Mapping, MutableMapping
from typing import Any

from quasar_table.paginator.base import (
    COLUMNS_KEY,
    DEFAULT_MAX_PER_PAGE,
    DEFAULT_SESSION_SUFFIX,
    DESCENDING_KEY,
    FILTER_KEY,
    PAGE_KEY,
    PAGINATOR_NAME_KEY,
    PER_PAGE_KEY,
    SORT_BY_KEY,
    ControlDefaults,
    ControlState,
)

logger = logging.getLogger(__name__)

TRUTHY_VALUES = {"1", "true", "on", "yes"}

_MISSING = object()


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#   Request parameters
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RequestArgs:
    """Named lookups over the incoming request parameters.

    Empty strings are treated as null, the way form submissions of a
    cleared input arrive.
    """

    def __init__(self, values: Mapping | None = None):
        self._values = dict(values or {})

    @classmethod
    def from_request(cls, request) -> "RequestArgs":
        """Merge query string, form data and a JSON object body (JSON wins)."""
        values = {}
        for key in request.args:
            values[key] = request.args.get(key)
        for key in request.form:
            values[key] = request.form.get(key)
        payload = request.get_json(silent=True)
        if isinstance(payload, dict):
            values.update(payload)
        return cls(values)

    def has(self, key: str) -> bool:
        return key in self._values

    def input(self, key: str, default: Any = None) -> Any:
        if key not in self._values:
            return default
        value = self._values[key]
        if isinstance(value, str) and value == "":
            return None
        return value

    def boolean(self, key: str, default: bool = False) -> bool:
        return as_bool(self.input(key, default))

    def integer(self, key: str, default: int) -> int:
        return as_int(self.input(key, default), default)


def as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    if isinstance(value, (int, float)):
        return value == 1
    return str(value).strip().lower() in TRUTHY_VALUES


def as_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#   Session flash store
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class SessionStateStore:
    """One-shot values kept in a session mapping.

    A flashed value survives the rest of the current request and the
    whole next one; ``age_flash_data()`` runs at the end of each request
    and drops values flashed two requests ago. ``pull`` reads and forgets.
    """

    NEW_KEYS = "_flash_new"
    OLD_KEYS = "_flash_old"

    def __init__(self, session: MutableMapping):
        self.session = session

    def get(self, key: str, default: Any = None) -> Any:
        return self.session.get(key, default)

    def pull(self, key: str, default: Any = None) -> Any:
        value = self.session.pop(key, _MISSING)
        self._forget_flash_key(key)
        return default if value is _MISSING else value

    def flash(self, key: str, value: Any):
        self.session[key] = value
        new_keys = list(self.session.get(self.NEW_KEYS, []))
        if key not in new_keys:
            new_keys.append(key)
        self.session[self.NEW_KEYS] = new_keys
        old_keys = [k for k in self.session.get(self.OLD_KEYS, []) if k != key]
        self.session[self.OLD_KEYS] = old_keys

    def age_flash_data(self):
        """Expire last request's flash data; mark this request's as old."""
        old_keys = self.session.get(self.OLD_KEYS, [])
        new_keys = self.session.get(self.NEW_KEYS, [])
        if not old_keys and not new_keys:
            return
        for key in old_keys:
            self.session.pop(key, None)
        self.session[self.OLD_KEYS] = list(new_keys)
        self.session[self.NEW_KEYS] = []

    def _forget_flash_key(self, key: str):
        for bucket in (self.NEW_KEYS, self.OLD_KEYS):
            keys = self.session.get(bucket)
            if keys and key in keys:
                self.session[bucket] = [k for k in keys if k != key]


class DataTableState:
    """Flask extension aging the paginator flash data after every request."""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        app.config.setdefault("PAGINATOR_SESSION_SUFFIX", DEFAULT_SESSION_SUFFIX)
        app.extensions["quasar_table"] = self
        app.after_request(self._age_flash_data)

    @staticmethod
    def _age_flash_data(response):
        from flask import session

        SessionStateStore(session).age_flash_data()
        return response


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
#   Resolver
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class StateResolver:
    """Pick fresh or remembered control state and remember the winner."""

    def __init__(
        self,
        store: SessionStateStore,
        suffix: str = DEFAULT_SESSION_SUFFIX,
        max_per_page: int = DEFAULT_MAX_PER_PAGE,
    ):
        self.store = store
        self.suffix = suffix
        self.max_per_page = max_per_page

    def slot_key(self, paginator_name: str) -> str:
        return f"{paginator_name}{self.suffix}"

    def resolve(
        self,
        paginator_name: str,
        request_args: RequestArgs,
        defaults: ControlDefaults,
    ) -> ControlState:
        key = self.slot_key(paginator_name)
        requested_name = request_args.input(PAGINATOR_NAME_KEY, paginator_name)

        if requested_name == paginator_name:
            logger.debug(f"Paginator '{paginator_name}': using request state")
            state = ControlState(
                paginator_name=paginator_name,
                filter=request_args.input(FILTER_KEY),
                sort_by=request_args.input(SORT_BY_KEY, defaults.sort_by),
                per_page=self._clamp(request_args.integer(PER_PAGE_KEY, defaults.per_page)),
                descending=request_args.boolean(DESCENDING_KEY, defaults.descending),
                columns=request_args.input(COLUMNS_KEY),
                page=max(1, request_args.integer(PAGE_KEY, 1)),
            )
        else:
            remembered = self.store.pull(key, None) or {}
            logger.debug(
                f"Paginator '{paginator_name}': request is for '{requested_name}', "
                f"recalling {'remembered' if remembered else 'default'} state"
            )
            state = ControlState(
                paginator_name=paginator_name,
                filter=remembered.get(FILTER_KEY),
                sort_by=remembered.get(SORT_BY_KEY),
                per_page=self._clamp(as_int(remembered.get(PER_PAGE_KEY), defaults.per_page)),
                descending=as_bool(remembered.get(DESCENDING_KEY, False)),
                columns=remembered.get(COLUMNS_KEY),
            )

        self.store.flash(key, state.to_remembered())
        return state

    def _clamp(self, per_page: int) -> int:
        return max(1, min(per_page, self.max_per_page))
