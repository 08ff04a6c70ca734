"""Mise en forme des listes : filtrage, selection de champs, tri et pagination.

Parametres de requete reconnus :
  - <champ>=valeur ou <champ>[gt|gte|lt|lte|in]=valeur (in : liste separee par des virgules)
  - select=a,b   -- champs retournes (id toujours conserve)
  - sort=-a,b    -- tri, '-' pour decroissant (defaut : -created_at)
  - page, limit  -- pagination (defaut : page 1, 25 elements)
Les champs inconnus sont ignores.
"""

import logging
import re
from datetime import datetime
from functools import wraps

from flask import g, jsonify, request
from pydantic import BaseModel
from sqlalchemy.orm import selectinload

from app.api.responses import dump, envelope
from app.errors import BadRequestError
from app.extensions import db
from app.schemas.common import PageRef, Pagination
from app.storage import MAX_ID

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 25
DEFAULT_SORT = "-created_at"
RESERVED_PARAMS = frozenset({"select", "sort", "page", "limit"})

_KEY_PATTERN = re.compile(r"^(?P<field>[A-Za-z_][A-Za-z0-9_]*)(?:\[(?P<op>gt|gte|lt|lte|in)\])?$")

_INT_PATTERN = re.compile(r"[0-9]{1,19}")

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"false", "0", "no"})


def _coerce(column, raw: str):
    """Convertit une valeur de query string vers le type Python de la colonne."""
    py_type = column.type.python_type
    try:
        if py_type is bool:
            lowered = raw.lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError(raw)
        if py_type is int:
            value = int(raw)
            if abs(value) > MAX_ID:
                raise ValueError(raw)
            return value
        if py_type is float:
            return float(raw)
        if py_type is datetime:
            return datetime.fromisoformat(raw)
    except ValueError as exc:
        raise BadRequestError(f"Invalid value for {column.name}: {raw}") from exc
    return raw


def _condition(column, op: str | None, raw: str):
    if op == "in":
        return column.in_([_coerce(column, part) for part in raw.split(",") if part])
    value = _coerce(column, raw)
    if op == "gt":
        return column > value
    if op == "gte":
        return column >= value
    if op == "lt":
        return column < value
    if op == "lte":
        return column <= value
    return column == value


def _positive_int(args, name: str, default: int) -> int:
    raw = args.get(name)
    if raw is None:
        return default
    if not _INT_PATTERN.fullmatch(raw) or not 0 < int(raw) <= MAX_ID:
        raise BadRequestError(f"Parameter '{name}' must be a positive integer")
    return int(raw)


def _filterable_columns(model) -> dict:
    """Colonnes scalaires filtrables (les colonnes JSON sont exclues)."""
    return {
        col.key: col
        for col in model.__table__.columns
        if not isinstance(col.type, db.JSON)
    }


def shape_query(
    model,
    schema: type[BaseModel],
    populate: tuple[str, ...] = (),
    query=None,
    args=None,
) -> dict:
    """Execute une requete de liste mise en forme et retourne l'enveloppe prete.

    {"success": true, "count": n, "pagination": {...}, "data": [...]}
    """
    args = request.args if args is None else args
    query = model.query if query is None else query
    columns = _filterable_columns(model)

    # Filtrage
    for key, raw in args.items(multi=True):
        if key in RESERVED_PARAMS:
            continue
        match = _KEY_PATTERN.match(key)
        if not match or match.group("field") not in columns:
            continue
        column = getattr(model, match.group("field"))
        query = query.filter(_condition(column, match.group("op"), raw))

    # Tri
    for field in (args.get("sort") or DEFAULT_SORT).split(","):
        name = field.strip().lstrip("-")
        if name in columns:
            column = getattr(model, name)
            query = query.order_by(column.desc() if field.strip().startswith("-") else column.asc())
    query = query.order_by(model.id.desc())

    for relation in populate:
        query = query.options(selectinload(getattr(model, relation)))

    # Pagination
    page = _positive_int(args, "page", 1)
    limit = _positive_int(args, "limit", DEFAULT_LIMIT)
    start = (page - 1) * limit
    if start > MAX_ID:
        raise BadRequestError("Parameter 'page' is out of range")
    total = query.order_by(None).count()
    items = query.offset(start).limit(limit).all()

    pagination = Pagination()
    if start + limit < total:
        pagination.next = PageRef(page=page + 1, limit=limit)
    if start > 0:
        pagination.prev = PageRef(page=page - 1, limit=limit)

    data = [dump(schema, item) for item in items]

    # Selection de champs
    selected = {f.strip() for f in (args.get("select") or "").split(",") if f.strip()}
    if selected:
        data = [{k: v for k, v in row.items() if k == "id" or k in selected} for row in data]

    logger.debug("%s list: page=%d limit=%d total=%d", model.__tablename__, page, limit, total)
    return envelope(data, count=len(data), pagination=pagination)


def advanced_results(model, schema: type[BaseModel], populate: tuple[str, ...] = ()):
    """Decorateur de route liste : place le resultat dans ``g.advanced_results``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.advanced_results = shape_query(model, schema, populate=populate)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def advanced_response():
    """Reponse JSON d'une route decoree par advanced_results."""
    return jsonify(g.advanced_results), 200
