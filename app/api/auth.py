"""Middleware d'authentification : chargement du JWT, roles, propriete.

Le JWT est lu dans l'en-tete ``Authorization: Bearer <token>`` puis, a
defaut, dans le cookie ``token``. Flask-Login expose l'utilisateur via
``current_user`` ; ``login_required`` protege les routes privees.
"""

import logging
from functools import wraps

from flask_login import current_user

from app.errors import UnauthorizedError
from app.extensions import db
from app.models.user import User, decode_jwt_token

logger = logging.getLogger(__name__)


def _token_from_request(req) -> str | None:
    header = req.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header.split(" ", 1)[1].strip() or None
    return req.cookies.get("token") or None


def load_user_from_request(req) -> User | None:
    """Callback request_loader de Flask-Login."""
    token = _token_from_request(req)
    if not token:
        return None
    user_id = decode_jwt_token(token)
    if user_id is None:
        logger.debug("Rejected JWT on %s", req.path)
        return None
    return db.session.get(User, user_id)


def unauthorized():
    """Callback unauthorized_handler : la route exige un utilisateur connecte."""
    raise UnauthorizedError("Not authorized to access this route")


def authorize(*roles: str):
    """Restreint une route aux roles donnes (a placer sous login_required)."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if current_user.role not in roles:
                raise UnauthorizedError(
                    f"User role {current_user.role} is not authorized to access this route"
                )
            return view(*args, **kwargs)

        return wrapper

    return decorator


def ensure_owner(resource, action: str, noun: str) -> None:
    """Le proprietaire de la ressource, ou un admin, peut seul la modifier.

    Doit etre appele avant toute mutation : en cas de refus rien n'est ecrit.
    """
    if resource.user_id != current_user.id and not current_user.is_admin:
        raise UnauthorizedError(
            f"User {current_user.id} is not authorized to {action} this {noun}"
        )
