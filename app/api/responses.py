"""Mise en forme des reponses de succes (enveloppe uniforme)."""

from typing import Any

from flask import current_app, jsonify
from pydantic import BaseModel

from app.schemas.common import Pagination, SuccessEnvelope, TokenEnvelope


def dump(schema: type[BaseModel], obj: Any) -> dict:
    """Serialise une entite ORM via son schema pydantic (types JSON)."""
    return schema.model_validate(obj).model_dump(mode="json")


def envelope(
    data: Any, count: int | None = None, pagination: Pagination | None = None
) -> dict:
    """Construit le corps d'une enveloppe de succes."""
    body = SuccessEnvelope(data=data, count=count, pagination=pagination)
    result = body.model_dump(mode="json", exclude={"count", "pagination"})
    if count is not None:
        result["count"] = count
    if pagination is not None:
        # Seules les pages voisines existantes apparaissent
        result["pagination"] = pagination.model_dump(exclude_none=True)
    return result


def success(
    data: Any,
    status: int = 200,
    count: int | None = None,
    pagination: Pagination | None = None,
):
    """Reponse JSON de succes : {"success": true, "data": ...}."""
    return jsonify(envelope(data, count=count, pagination=pagination)), status


def token_response(user, status: int = 200):
    """Emet un JWT pour ``user`` dans le corps et dans un cookie HttpOnly."""
    token = user.get_signed_jwt_token()
    resp = jsonify(TokenEnvelope(token=token).model_dump())
    resp.status_code = status
    resp.set_cookie(
        "token",
        token,
        max_age=current_app.config["JWT_COOKIE_EXPIRE_DAYS"] * 24 * 3600,
        httponly=True,
        secure=current_app.config.get("ENV_NAME") == "production",
    )
    return resp
