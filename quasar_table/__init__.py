"""Quasar Table Flask Application Factory."""
from flask import Flask

from quasar_table.config import FlaskConfig
from quasar_table.extensions import db, datatable_state
from quasar_table.paginator import DataTablePaginator


def create_app(config_class=FlaskConfig):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    
    # Initialize extensions
    db.init_app(app)
    datatable_state.init_app(app)
    
    # Register API blueprint
    from quasar_table.api import api_bp
    app.register_blueprint(api_bp, url_prefix="/api")
    
    # Health check endpoint
    @app.route("/health")
    def health():
        return {"status": "ok"}
    
    # Register commands
    from quasar_table.commands import seed_command
    app.cli.add_command(seed_command)

    return app


__all__ = ["create_app", "DataTablePaginator"]
