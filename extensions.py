import sqlite3

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from sqlalchemy import event
from sqlalchemy.engine import Engine

# Extensions are created unbound and attached in create_app()

# Database
db = SQLAlchemy()

# Bearer-token identity (request_loader lives in modules.users.auth)
login_manager = LoginManager()


def _unicode_lower(value):
    return value.lower() if isinstance(value, str) else value


@event.listens_for(Engine, "connect")
def _sqlite_unicode_lower(dbapi_connection, connection_record):
    """SQLite's built-in lower() folds ASCII only; München/MÜNCHEN must match."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        dbapi_connection.create_function("lower", 1, _unicode_lower, deterministic=True)
