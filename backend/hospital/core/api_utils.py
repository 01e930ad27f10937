"""
Common API utilities shared by all controllers: the request-scoped
database session, query parameter checks and response helpers.
"""

from typing import Any, Iterable, Mapping, Optional

from flask import g, jsonify
from werkzeug.routing import IntegerConverter

from hospital.core.validation import MAX_DB_ID, ValidationError
from hospital.db.session import SessionLocal


def get_db_session():
    """Return the session bound to the current request, opening it lazily."""
    if "db" not in g:
        g.db = SessionLocal()
    return g.db


def close_db_session(exception: Optional[BaseException] = None) -> None:
    """Teardown hook: roll back anything left open and close the session."""
    db = g.pop("db", None)
    if db is None:
        return
    if exception is not None:
        db.rollback()
    db.close()


def require_query_param(args: Mapping[str, str], name: str) -> str:
    """Return a non-blank query parameter or raise a validation error."""
    value = args.get(name)
    if value is None or not value.strip():
        raise ValidationError("Parâmetro obrigatório", field=name)
    return value.strip()


def json_list(items: Iterable[Any]) -> tuple:
    """Serialize a list of response DTOs."""
    return jsonify([item.to_dict() for item in items]), 200


def json_item(item: Any, status_code: int = 200) -> tuple:
    return jsonify(item.to_dict()), status_code


def created_response(item: Any, location: str) -> tuple:
    """201 response carrying the new resource and its Location header."""
    return jsonify(item.to_dict()), 201, {"Location": location}


def no_content() -> tuple:
    return "", 204


class IdConverter(IntegerConverter):
    """``<int:...>`` limited to values a database id can hold.

    Larger path segments stop matching the route, so they end as a 404
    instead of reaching the database driver.
    """

    def __init__(self, map, *args, **kwargs):
        kwargs.setdefault("max", MAX_DB_ID)
        super().__init__(map, *args, **kwargs)
