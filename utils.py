from datetime import date, datetime

from flask import request

from errors import ValidationError


def json_body() -> dict:
    """Return the request's JSON object or raise ValidationError."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


def parse_date(value, field: str) -> date:
    """Accept YYYY-MM-DD or a full ISO timestamp; only the date part is kept."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be an ISO date')
    try:
        return datetime.fromisoformat(value.strip().replace('Z', '+00:00')).date()
    except ValueError:
        raise ValidationError(f'{field} must be an ISO date') from None


def parse_float(value, field: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a number') from None


def parse_int(value, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer') from None
