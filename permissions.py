# permissions.py
# -*- coding: utf-8 -*-
"""
RBAC for the API.
- can(identity, action)           : pure policy check, True/False.
- require_admin(identity)         : raises Forbidden unless the identity is an admin.
- permission_required(action)     : route decorator: authentication + policy check.

Roles:
- user  : manage own subscriptions
- admin : everything a user can do + festival create/update/delete and statistics
"""

from functools import wraps

from flask_login import current_user, login_required

from errors import Forbidden

# ------------------------------- POLICY TABLE ------------------------------- #
FESTIVAL_CREATE = "festival:create"
FESTIVAL_UPDATE = "festival:update"
FESTIVAL_DELETE = "festival:delete"
SUBSCRIPTION_MANAGE = "subscription:manage"
STATS_VIEW = "stats:view"

POLICY = {
    FESTIVAL_CREATE: {"admin"},
    FESTIVAL_UPDATE: {"admin"},
    FESTIVAL_DELETE: {"admin"},
    SUBSCRIPTION_MANAGE: {"user", "admin"},
    STATS_VIEW: {"admin"},
}


def can(identity, action: str) -> bool:
    """True if ``identity`` may perform ``action``. Unknown actions are denied."""
    if identity is None or not getattr(identity, "is_authenticated", False):
        return False
    return getattr(identity, "role", None) in POLICY.get(action, set())


def require_admin(identity) -> None:
    if getattr(identity, "role", None) != "admin":
        raise Forbidden()


# ------------------------------ ROUTE DECORATOR ----------------------------- #
def permission_required(action: str):
    """
    Example:
        @permission_required(FESTIVAL_DELETE)
        def delete(festival_id): ...

    - no/invalid token → 401 (via login_manager.unauthorized_handler)
    - role not allowed → 403
    """

    def decorator(view_func):
        @wraps(view_func)
        @login_required
        def wrapped(*args, **kwargs):
            if not can(current_user, action):
                raise Forbidden()
            return view_func(*args, **kwargs)

        return wrapped
    return decorator
