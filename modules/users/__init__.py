"""Users module package: accounts, tokens and subscriptions."""

from flask import Blueprint

bp = Blueprint("users", __name__, url_prefix="/api/users")

from . import auth  # noqa: E402  pylint: disable=wrong-import-position
from . import routes  # noqa: E402  pylint: disable=wrong-import-position

__all__ = ["bp", "auth", "routes"]
