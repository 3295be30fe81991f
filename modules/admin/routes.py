"""HTTP routes for the admin dashboard."""

from flask import jsonify

from modules.admin.models import subscriber_stats
from permissions import STATS_VIEW, permission_required

from . import bp


@bp.route("/subscribers/stats", methods=["GET"])
@permission_required(STATS_VIEW)
def stats():
    return jsonify(subscriber_stats())
