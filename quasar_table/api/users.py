"""Users data table endpoint."""
from flask import jsonify
from quasar_table.api import api_bp
from quasar_table.extensions import db
from quasar_table.models import Group, User
from quasar_table.paginator import DataTablePaginator, Sorter


def _filter_by_group(query, term):
    """Match the group name instead of the group column."""
    return User.group.has(Group.name.ilike(f"%{term}%"))


def _sort_users(query, sort_by, descending):
    """Sort by group name through a join; anything else by the users table."""
    if sort_by == "group":
        query = query.outerjoin(Group, User.group)
        return query.order_by(Group.name.desc() if descending else Group.name.asc())
    return Sorter(User.__table__)(query, sort_by, descending)


@api_bp.route("/users", methods=["GET", "POST"])
def list_users():
    """
    Users table for the Quasar front end.
    
    Accepts paginatorName, filter, sortBy, perPage, descending, columns
    and page from the query string or a JSON body.
    """
    paginator = (
        DataTablePaginator(User.query.options(db.joinedload(User.group)), sort_by="name")
        .custom_column("name_with_email", lambda row: f"{row.name} ({row.email})")
        .custom_column("group", lambda row: row.model.group.name if row.model.group else None)
        .add_custom_filter("group", _filter_by_group)
        .set_custom_sorter(_sort_users)
    )
    
    try:
        return jsonify(paginator.to_dict())
    except ValueError as e:
        return jsonify({"error": str(e)}), 400
