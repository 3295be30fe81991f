"""HTTP routes for the festivals domain."""

from flask import jsonify, request
from flask_login import current_user

from modules.festivals.models import (
    create_festival,
    delete_festival,
    get_festival,
    query_festivals,
    update_festival,
)
from permissions import FESTIVAL_CREATE, FESTIVAL_DELETE, FESTIVAL_UPDATE, permission_required
from utils import json_body

from . import bp


@bp.route("", methods=["GET"])
def list_festivals():
    args = request.args
    festivals = query_festivals(
        region=args.get("region"),
        search=args.get("search"),
        start=args.get("startDate") or None,
        end=args.get("endDate") or None,
        month=args.get("month") or None,
        year=args.get("year") or None,
    )
    return jsonify([f.to_dict() for f in festivals])


@bp.route("/<int:festival_id>", methods=["GET"])
def festival_detail(festival_id: int):
    return jsonify(get_festival(festival_id).to_dict())


@bp.route("", methods=["POST"])
@permission_required(FESTIVAL_CREATE)
def add_festival():
    festival = create_festival(json_body(), creator_id=current_user.id)
    return jsonify(message="Festival created", festival=festival.to_dict()), 201


@bp.route("/<int:festival_id>", methods=["PUT"])
@permission_required(FESTIVAL_UPDATE)
def edit_festival(festival_id: int):
    festival = update_festival(festival_id, json_body())
    return jsonify(message="Festival updated", festival=festival.to_dict())


@bp.route("/<int:festival_id>", methods=["DELETE"])
@permission_required(FESTIVAL_DELETE)
def remove_festival(festival_id: int):
    delete_festival(festival_id)
    return jsonify(message="Festival deleted")
