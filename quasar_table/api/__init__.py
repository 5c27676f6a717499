"""Quasar Table REST API Blueprints."""
from flask import Blueprint

api_bp = Blueprint("api", __name__)

# Import routes to register them
from quasar_table.api import users
