# -*- coding: utf-8 -*-
"""
FESTIVAL MODULE MODELS and domain operations.

Tables:
- Festival: one festival record (region is one of ALLOWED_REGIONS).

Domain operations (all raise errors.ApiError subclasses):
- query_festivals : region / free-text / date-overlap / calendar-month filters, ANDed,
                     sorted by start date.
- get_festival    : by id or NotFound.
- create_festival : validates the full payload.
- update_festival : full replacement of the mutable fields, refreshes updated_at.
- delete_festival : deletes and removes the festival from every user's subscriptions.

Date overlap: a festival matches [start, end] if it starts inside the range, ends inside
the range, or spans the whole range.
"""
import calendar
import logging
from datetime import date, datetime
from typing import Optional

from sqlalchemy import and_, func, or_

from errors import NotFound, ValidationError
from extensions import db
from models import ALLOWED_REGIONS, FestivalSubscription
from utils import parse_date, parse_float, parse_int

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = [
    "name", "description", "location", "region", "address",
    "startDate", "endDate", "latitude", "longitude",
]
REGION_ALL = "all"


class Festival(db.Model):
    __tablename__ = "festivals"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    location = db.Column(db.String(200), nullable=False)
    region = db.Column(db.String(32), nullable=False, index=True)
    address = db.Column(db.String(255), nullable=False)
    start_date = db.Column(db.Date, nullable=False, index=True)
    end_date = db.Column(db.Date, nullable=False)
    image_url = db.Column(db.String(500))
    website = db.Column(db.String(500))
    entry_fee = db.Column(db.String(100))
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "location": self.location,
            "region": self.region,
            "address": self.address,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "imageUrl": self.image_url,
            "website": self.website,
            "entryFee": self.entry_fee,
            "coordinates": {"latitude": self.latitude, "longitude": self.longitude},
            "createdBy": self.created_by,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"<Festival {self.id}: {self.name}>"


# ---------- Validation ----------

def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _flatten_coordinates(data: dict) -> dict:
    """Clients send ``coordinates: {latitude, longitude}``; top-level keys also work."""
    flat = dict(data)
    coords = data.get("coordinates")
    if isinstance(coords, dict):
        for key in ("latitude", "longitude"):
            if _is_blank(flat.get(key)):
                flat[key] = coords.get(key)
    return flat


def validate_region(region) -> str:
    if region not in ALLOWED_REGIONS:
        raise ValidationError(f"region must be one of: {', '.join(ALLOWED_REGIONS)}")
    return region


def _festival_fields(data: dict) -> dict:
    data = _flatten_coordinates(data)
    missing = [f for f in REQUIRED_FIELDS if _is_blank(data.get(f))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    def optional(key):
        value = data.get(key)
        return None if _is_blank(value) else str(value)

    return {
        "name": str(data["name"]).strip(),
        "description": str(data["description"]).strip(),
        "location": str(data["location"]).strip(),
        "region": validate_region(data["region"]),
        "address": str(data["address"]).strip(),
        "start_date": parse_date(data["startDate"], "startDate"),
        "end_date": parse_date(data["endDate"], "endDate"),
        "latitude": parse_float(data["latitude"], "latitude"),
        "longitude": parse_float(data["longitude"], "longitude"),
        "image_url": optional("imageUrl"),
        "website": optional("website"),
        "entry_fee": optional("entryFee"),
    }


# ---------- Queries ----------

def _overlaps(start: date, end: date):
    return or_(
        and_(Festival.start_date >= start, Festival.start_date <= end),
        and_(Festival.end_date >= start, Festival.end_date <= end),
        and_(Festival.start_date <= start, Festival.end_date >= end),
    )


def month_range(month, year) -> tuple[date, date]:
    month = parse_int(month, "month")
    year = parse_int(year, "year")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    if not 1 <= year <= 9999:
        raise ValidationError("year is out of range")
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def query_festivals(region: Optional[str] = None, search: Optional[str] = None,
                    start=None, end=None, month=None, year=None) -> list[Festival]:
    query = Festival.query

    if region and region != REGION_ALL:
        query = query.filter(Festival.region == validate_region(region))

    if search:
        escaped = search.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
        pattern = f"%{escaped}%"
        query = query.filter(or_(
            func.lower(Festival.name).like(pattern, escape="\\"),
            func.lower(Festival.description).like(pattern, escape="\\"),
            func.lower(Festival.location).like(pattern, escape="\\"),
        ))

    if start is not None or end is not None:
        if start is None or end is None:
            raise ValidationError("startDate and endDate must be given together")
        query = query.filter(_overlaps(parse_date(start, "startDate"), parse_date(end, "endDate")))

    if month is not None or year is not None:
        if month is None or year is None:
            raise ValidationError("month and year must be given together")
        query = query.filter(_overlaps(*month_range(month, year)))

    return query.order_by(Festival.start_date.asc(), Festival.id.asc()).all()


def get_festival(festival_id: int) -> Festival:
    festival = db.session.get(Festival, festival_id)
    if festival is None:
        raise NotFound("Festival not found")
    return festival


# ---------- Mutations ----------

def create_festival(data: dict, creator_id: Optional[int]) -> Festival:
    festival = Festival(created_by=creator_id, **_festival_fields(data))
    db.session.add(festival)
    db.session.commit()
    logger.info("Festival %s created by user %s", festival.id, creator_id)
    return festival


def update_festival(festival_id: int, data: dict) -> Festival:
    festival = get_festival(festival_id)
    for key, value in _festival_fields(data).items():
        setattr(festival, key, value)
    festival.updated_at = datetime.utcnow()
    db.session.commit()
    logger.info("Festival %s updated", festival.id)
    return festival


def delete_festival(festival_id: int) -> int:
    """Delete the festival and drop it from all subscriptions; returns the number dropped."""
    festival = get_festival(festival_id)
    removed = (FestivalSubscription.query
               .filter_by(festival_id=festival.id)
               .delete(synchronize_session=False))
    db.session.delete(festival)
    db.session.commit()
    logger.info("Festival %s deleted, removed from %d subscriptions", festival_id, removed)
    return removed
