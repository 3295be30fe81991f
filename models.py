"""Shared SQLAlchemy models: accounts and their subscriptions."""

from datetime import datetime

from flask_login import UserMixin
from sqlalchemy import UniqueConstraint

from extensions import db

# Order matters: subscription projections list regions in this order
ALLOWED_REGIONS = ["bayern", "tirol", "oesterreich"]
ALLOWED_ROLES = ["user", "admin"]


class User(UserMixin, db.Model):
    """Represents an application account."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(150), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)  # salted hash only
    role = db.Column(db.String(50), nullable=False, default="user")  # user, admin
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    region_subscriptions = db.relationship(
        "RegionSubscription", backref="user", lazy=True, cascade="all, delete-orphan"
    )
    festival_subscriptions = db.relationship(
        "FestivalSubscription", backref="user", lazy=True, cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def subscriptions(self) -> dict:
        regions = {sub.region for sub in self.region_subscriptions}
        return {
            "regions": [r for r in ALLOWED_REGIONS if r in regions],
            "festivals": sorted(sub.festival_id for sub in self.festival_subscriptions),
        }

    def public_view(self) -> dict:
        """Projection sent to clients; never contains the password hash."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "role": self.role,
            "subscriptions": self.subscriptions(),
        }

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<User {self.username}>"


class RegionSubscription(db.Model):
    __tablename__ = "region_subscriptions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    region = db.Column(db.String(32), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "region", name="uq_region_subscription_user_region"),
    )


class FestivalSubscription(db.Model):
    __tablename__ = "festival_subscriptions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    festival_id = db.Column(db.Integer, db.ForeignKey("festivals.id"), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    __table_args__ = (
        UniqueConstraint("user_id", "festival_id", name="uq_festival_subscription_user_festival"),
    )
