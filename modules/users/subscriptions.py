"""Region and festival subscriptions of a user."""

import logging

from sqlalchemy.exc import IntegrityError

from errors import AlreadySubscribed, NotFound, ValidationError
from extensions import db
from models import ALLOWED_REGIONS, FestivalSubscription, RegionSubscription, User
from modules.festivals.models import Festival, get_festival

logger = logging.getLogger(__name__)


def get_subscriptions(user_id: int) -> dict:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user.subscriptions()


def set_region_subscriptions(user_id: int, regions, strict: bool = False) -> dict:
    """
    Replace the user's region set.

    Unknown regions are dropped unless ``strict`` is set, in which case the whole
    call is rejected. Duplicates collapse.
    """
    if not isinstance(regions, list):
        raise ValidationError("regions must be a list")

    invalid = [r for r in regions if r not in ALLOWED_REGIONS]
    if invalid and strict:
        raise ValidationError(f"Unknown regions: {', '.join(map(str, invalid))}")
    wanted = {r for r in regions if r in ALLOWED_REGIONS}

    RegionSubscription.query.filter_by(user_id=user_id).delete(synchronize_session=False)
    for region in wanted:
        db.session.add(RegionSubscription(user_id=user_id, region=region))
    db.session.commit()
    return get_subscriptions(user_id)


def _find_subscription(user_id: int, festival_id: int) -> FestivalSubscription | None:
    return FestivalSubscription.query.filter_by(user_id=user_id, festival_id=festival_id).first()


def subscribe_festival(user_id: int, festival_id: int) -> dict:
    get_festival(festival_id)

    if _find_subscription(user_id, festival_id) is not None:
        raise AlreadySubscribed()

    db.session.add(FestivalSubscription(user_id=user_id, festival_id=festival_id))
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise AlreadySubscribed() from None
    return get_subscriptions(user_id)


def unsubscribe_festival(user_id: int, festival_id: int) -> dict:
    """Removing a festival that is not subscribed is a no-op."""
    (FestivalSubscription.query
     .filter_by(user_id=user_id, festival_id=festival_id)
     .delete(synchronize_session=False))
    db.session.commit()
    return get_subscriptions(user_id)


def list_subscribed_festivals(user_id: int) -> list[Festival]:
    # inner join: ids whose festival no longer exists are skipped
    return (Festival.query
            .join(FestivalSubscription, FestivalSubscription.festival_id == Festival.id)
            .filter(FestivalSubscription.user_id == user_id)
            .order_by(Festival.start_date.asc(), Festival.id.asc())
            .all())
