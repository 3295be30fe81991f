"""Accounts and bearer tokens.

Passwords are hashed explicitly in :func:`register` before the row is
persisted; there is no implicit save hook. Tokens are ``itsdangerous``
timed signatures over ``{"uid": <user id>}`` keyed by ``SECRET_KEY``.
"""

import logging

from flask import current_app
from itsdangerous import BadData, BadSignature, SignatureExpired, URLSafeTimedSerializer
from itsdangerous.encoding import base64_decode, base64_encode
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from werkzeug.security import check_password_hash, generate_password_hash

from errors import Conflict, InvalidCredentials, Unauthorized, ValidationError
from extensions import db, login_manager
from models import User

logger = logging.getLogger(__name__)

TOKEN_SALT = "auth-token"

# Compared against when the email is unknown so both login failures cost the same
_DUMMY_HASH = generate_password_hash("volksfest-dummy-password")


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(current_app.config["SECRET_KEY"], salt=TOKEN_SALT)


def issue_token(user: User) -> str:
    return _serializer().dumps({"uid": user.id})


def _required(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value


def _find_existing(username: str, email: str) -> User | None:
    return User.query.filter(or_(User.email == email, User.username == username)).first()


def register(username, email, password) -> tuple[str, dict]:
    username = _required(username, "username").strip()
    email = _required(email, "email").strip()
    password = _required(password, "password")

    if _find_existing(username, email) is not None:
        raise Conflict()

    user = User(
        username=username,
        email=email,
        password=generate_password_hash(password),
        role="user",
    )
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError:
        # a concurrent registration won the unique index
        db.session.rollback()
        raise Conflict() from None

    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return issue_token(user), user.public_view()


def login(email, password) -> tuple[str, dict]:
    if not isinstance(email, str) or not isinstance(password, str):
        raise InvalidCredentials()

    user = User.query.filter_by(email=email.strip()).first()
    stored_hash = user.password if user is not None else _DUMMY_HASH
    password_ok = check_password_hash(stored_hash, password)
    if user is None or not password_ok:
        logger.info("Failed login attempt")
        raise InvalidCredentials()

    return issue_token(user), user.public_view()


def _has_canonical_signature(token: str) -> bool:
    """base64 decoding ignores the unused low bits of the last character, so
    several spellings decode to the same signature; only the canonical one is accepted."""
    signature = token.rpartition(".")[2]
    try:
        return base64_encode(base64_decode(signature)).decode("ascii") == signature
    except (BadData, ValueError):
        return False


def authenticate(token) -> User:
    """Resolve a bearer token to its user or raise Unauthorized."""
    if not token:
        raise Unauthorized()
    if not _has_canonical_signature(token):
        raise Unauthorized("Invalid token")
    try:
        payload = _serializer().loads(token, max_age=current_app.config["TOKEN_MAX_AGE"])
    except SignatureExpired:
        raise Unauthorized("Token expired") from None
    except BadSignature:
        raise Unauthorized("Invalid token") from None

    user_id = payload.get("uid") if isinstance(payload, dict) else None
    if not isinstance(user_id, int):
        raise Unauthorized("Invalid token")

    user = db.session.get(User, user_id)
    if user is None:
        raise Unauthorized("User not found")
    return user


def bearer_token(header: str | None) -> str | None:
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


@login_manager.request_loader
def load_user_from_request(request) -> User | None:
    """Flask-Login hook: identity comes only from the Authorization header."""
    token = bearer_token(request.headers.get("Authorization"))
    if token is None:
        return None
    return authenticate(token)


@login_manager.unauthorized_handler
def unauthorized():
    raise Unauthorized()
