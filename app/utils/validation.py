"""Presence checks shared by the route handlers."""

from typing import Iterable

from pydantic import BaseModel

from app.core.errors import BadRequest


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_fields(data: BaseModel, fields: Iterable[str], message: str) -> None:
    """Raise BadRequest(message) if any of `fields` is missing or blank on `data`."""
    missing = [name for name in fields if is_blank(getattr(data, name, None))]
    if missing:
        raise BadRequest(message)
