"""HTTP routes for accounts and subscriptions."""

from flask import current_app, jsonify
from flask_login import current_user, login_required

from modules.users import auth
from modules.users.subscriptions import (
    list_subscribed_festivals,
    set_region_subscriptions,
    subscribe_festival,
    unsubscribe_festival,
)
from permissions import SUBSCRIPTION_MANAGE, permission_required
from utils import json_body

from . import bp


@bp.route("/register", methods=["POST"])
def register():
    data = json_body()
    token, user = auth.register(data.get("username"), data.get("email"), data.get("password"))
    return jsonify(message="User registered", token=token, user=user), 201


@bp.route("/login", methods=["POST"])
def login():
    data = json_body()
    token, user = auth.login(data.get("email"), data.get("password"))
    return jsonify(message="Login successful", token=token, user=user)


@bp.route("/me", methods=["GET"])
@login_required
def me():
    return jsonify(current_user.public_view())


@bp.route("/subscriptions/regions", methods=["PUT"])
@permission_required(SUBSCRIPTION_MANAGE)
def update_region_subscriptions():
    subscriptions = set_region_subscriptions(
        current_user.id,
        json_body().get("regions"),
        strict=current_app.config.get("STRICT_REGION_SUBSCRIPTIONS", False),
    )
    return jsonify(message="Region subscriptions updated", subscriptions=subscriptions)


@bp.route("/subscriptions/festivals/<int:festival_id>", methods=["POST"])
@permission_required(SUBSCRIPTION_MANAGE)
def add_festival_subscription(festival_id: int):
    subscriptions = subscribe_festival(current_user.id, festival_id)
    return jsonify(message="Festival subscribed", subscriptions=subscriptions)


@bp.route("/subscriptions/festivals/<int:festival_id>", methods=["DELETE"])
@permission_required(SUBSCRIPTION_MANAGE)
def remove_festival_subscription(festival_id: int):
    subscriptions = unsubscribe_festival(current_user.id, festival_id)
    return jsonify(message="Festival unsubscribed", subscriptions=subscriptions)


@bp.route("/subscriptions/festivals", methods=["GET"])
@permission_required(SUBSCRIPTION_MANAGE)
def subscribed_festivals():
    return jsonify([f.to_dict() for f in list_subscribed_festivals(current_user.id)])
