"""Flask extensions initialization."""
from flask_sqlalchemy import SQLAlchemy

from quasar_table.paginator.state import DataTableState

db = SQLAlchemy()
datatable_state = DataTableState()
