"""Ordering of the data table query."""
import pytest

from quasar_table.models import User
from quasar_table.paginator import Sorter


def sql(query):
    return str(query.statement)


def test_default_descending_order(app):
    query = Sorter(User.__table__)(User.query, "created_at", True)

    assert "ORDER BY qt_users.created_at DESC" in sql(query)


def test_default_ascending_order(app):
    query = Sorter(User.__table__)(User.query, "email", False)

    assert "ORDER BY qt_users.email ASC" in sql(query)
    assert query.first().email == "user10@example.com"


@pytest.mark.parametrize("sort_by", [None, ""])
def test_no_sort_column_is_noop(app, sort_by):
    query = User.query

    assert Sorter(User.__table__)(query, sort_by, True) is query


def test_custom_sorter_owns_ordering(app):
    calls = []

    def sorter(query, sort_by, descending):
        calls.append((sort_by, descending))
        return query.order_by(User.id.desc())

    query = Sorter(User.__table__).set_custom_sorter(sorter)(User.query, "anything", False)

    assert calls == [("anything", False)]
    assert "ORDER BY qt_users.id DESC" in sql(query)


def test_custom_sorter_not_called_without_sort_column(app):
    calls = []
    sorter = Sorter(User.__table__).set_custom_sorter(lambda *args: calls.append(args))

    sorter(User.query, None, False)

    assert calls == []


def test_unknown_sort_column_raises(app):
    with pytest.raises(ValueError, match="nope"):
        Sorter(User.__table__)(User.query, "nope", False)


@pytest.mark.parametrize("sort_by", [1, ["name"], {"name": "email"}])
def test_non_string_sort_column_raises(app, sort_by):
    with pytest.raises(ValueError, match="must be a string"):
        Sorter(User.__table__)(User.query, sort_by, True)


def test_custom_sorter_returning_none_keeps_query(app):
    calls = []
    query = User.query

    sorter = Sorter(User.__table__).set_custom_sorter(lambda *args: calls.append(args))

    assert sorter(query, "name", True) is query
    assert calls == [(query, "name", True)]
