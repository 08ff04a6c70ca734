"""Routes /api/v1/auth/users -- gestion des comptes, reservee aux admins."""

import logging

from flask import request
from flask_login import login_required

from app import storage
from app.api import users_bp
from app.api.auth import authorize
from app.api.query import advanced_response, advanced_results
from app.api.responses import dump, success
from app.errors import NotFoundError
from app.extensions import db
from app.models.user import User
from app.schemas.user import UserCreate, UserSchema, UserUpdate

logger = logging.getLogger(__name__)


@users_bp.before_request
@login_required
@authorize("admin")
def _admin_only():
    """Toutes les routes du blueprint exigent un admin connecte."""
    return None


def _get_user_or_404(user_id) -> User:
    user = storage.get(User, user_id)
    if user is None:
        raise NotFoundError(f"No user with the id of {user_id}")
    return user


@users_bp.route("", methods=["GET"])
@advanced_results(User, UserSchema)
def get_users():
    return advanced_response()


@users_bp.route("/<user_id>", methods=["GET"])
def get_user(user_id):
    return success(dump(UserSchema, _get_user_or_404(user_id)))


@users_bp.route("", methods=["POST"])
def create_user():
    payload = storage.load(UserCreate, request.get_json(silent=True))
    user = User(name=payload.name, email=payload.email, role=payload.role)
    user.set_password(payload.password)
    db.session.add(user)
    storage.commit()
    logger.info("User %d created by admin", user.id)
    return success(dump(UserSchema, user), status=201)


@users_bp.route("/<user_id>", methods=["PUT"])
def update_user(user_id):
    user = _get_user_or_404(user_id)
    changes = storage.load(UserUpdate, request.get_json(silent=True)).model_dump(
        exclude_none=True
    )
    for field, value in changes.items():
        setattr(user, field, value)
    storage.commit()
    return success(dump(UserSchema, user))


@users_bp.route("/<user_id>", methods=["DELETE"])
def delete_user(user_id):
    user = _get_user_or_404(user_id)
    db.session.delete(user)
    storage.commit()
    logger.info("User %s deleted by admin", user_id)
    return success({})
