"""Quasar Table Database Models."""
from quasar_table.models.group import Group
from quasar_table.models.user import User

__all__ = [
    "Group",
    "User",
]
