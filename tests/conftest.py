import pytest
from sqlalchemy import event

from quasar_table import create_app
from quasar_table.config import FlaskConfig
from quasar_table.extensions import db
from quasar_table.models import Group, User


class TestingConfig(FlaskConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    PAGINATOR_DEFAULT_PER_PAGE = 15
    PAGINATOR_MAX_PER_PAGE = 100
    PAGINATOR_SESSION_SUFFIX = "_datatable"


def seed_users(count=20):
    groups = [Group(name="Admins"), Group(name="Operators")]
    db.session.add_all(groups)
    for i in range(1, count + 1):
        db.session.add(
            User(name=f"User {i}", email=f"user{i}@example.com", group=groups[i % 2])
        )
    db.session.commit()


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        seed_users()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def statements(app):
    """SELECT statements executed while the test runs."""
    executed = []

    def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("SELECT"):
            executed.append(statement)

    event.listen(db.engine, "before_cursor_execute", before_cursor_execute)
    yield executed
    event.remove(db.engine, "before_cursor_execute", before_cursor_execute)
