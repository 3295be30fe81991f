"""Subscriber statistics for the admin dashboard."""

from sqlalchemy import func, union

from extensions import db
from models import ALLOWED_REGIONS, FestivalSubscription, RegionSubscription
from modules.festivals.models import Festival


def subscriber_stats() -> dict:
    """
    total     : users with at least one region or festival subscription
    byRegion  : subscribers per region (all regions listed, zero included)
    byFestival: subscribers per festival, most subscribed first
    """
    subscribers = union(
        db.select(RegionSubscription.user_id),
        db.select(FestivalSubscription.user_id),
    ).subquery()
    total = db.session.execute(db.select(func.count()).select_from(subscribers)).scalar_one()

    by_region = {region: 0 for region in ALLOWED_REGIONS}
    rows = db.session.execute(
        db.select(RegionSubscription.region, func.count(RegionSubscription.user_id))
        .group_by(RegionSubscription.region)
    ).all()
    for region, count in rows:
        if region in by_region:
            by_region[region] = count

    subscriber_count = func.count(FestivalSubscription.user_id)
    rows = db.session.execute(
        db.select(Festival.id, Festival.name, subscriber_count)
        .join(FestivalSubscription, FestivalSubscription.festival_id == Festival.id)
        .group_by(Festival.id, Festival.name)
        .order_by(subscriber_count.desc(), Festival.name.asc())
    ).all()
    by_festival = [{"id": fid, "name": name, "count": count} for fid, name, count in rows]

    return {"total": total, "byRegion": by_region, "byFestival": by_festival}
