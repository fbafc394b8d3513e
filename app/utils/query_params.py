"""
Strict query string validation for the analytics endpoints.

Parameters are read from the raw query string so a repeated parameter is
rejected instead of silently keeping one of its values.
"""
from fastapi import Request
from app.exceptions import ValidationError
from app.utils.date_utils import parse_iso_day
from datetime import date
from typing import List


def required_param(request: Request, name: str) -> str:
    """Get a parameter that must be given exactly once."""
    values = request.query_params.getlist(name)
    if len(values) != 1:
        raise ValidationError(f"query param {name} is mandatory")
    return values[0]


def required_day(request: Request, name: str) -> date:
    """Get a mandatory YYYY-MM-DD parameter."""
    value = required_param(request, name)
    try:
        return parse_iso_day(value)
    except ValueError as e:
        raise ValidationError(f"{name} must be a date: {e}") from e


def required_list(request: Request, name: str) -> List[str]:
    """Get a repeatable parameter that needs at least one value."""
    values = request.query_params.getlist(name)
    if not values:
        raise ValidationError(f"query param {name} is mandatory")
    return values
