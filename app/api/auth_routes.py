"""Routes /api/v1/auth -- inscription, connexion, profil, mot de passe."""

import logging

from flask import jsonify, request
from flask_login import current_user, login_required

from app import storage
from app.api import auth_bp
from app.api.responses import dump, envelope, success, token_response
from app.errors import (
    BadRequestError,
    ErrorResponse,
    ExternalAPIError,
    NotFoundError,
    UnauthorizedError,
)
from app.extensions import db, limiter
from app.models.user import User, find_by_reset_token
from app.schemas.user import (
    ForgotPasswordRequest,
    LoginRequest,
    RegisterRequest,
    ResetPasswordRequest,
    UpdateDetailsRequest,
    UpdatePasswordRequest,
    UserSchema,
)
from app.services.mail_service import send_password_reset

logger = logging.getLogger(__name__)


@auth_bp.route("/register", methods=["POST"])
def register():
    payload = storage.load(RegisterRequest, request.get_json(silent=True))
    user = User(name=payload.name, email=payload.email, role=payload.role)
    user.set_password(payload.password)
    db.session.add(user)
    storage.commit()
    logger.info("User %d registered as %s", user.id, user.role)
    return token_response(user)


@auth_bp.route("/login", methods=["POST"])
@limiter.limit("10/minute")
def login():
    body = request.get_json(silent=True)
    missing = isinstance(body, dict) and not (body.get("email") and body.get("password"))
    if not body or missing:
        raise BadRequestError("Please provide an email and password")
    credentials = storage.load(LoginRequest, body)

    user = User.query.filter_by(email=credentials.email).first()
    if user is None or not user.check_password(credentials.password):
        raise UnauthorizedError("Invalid credentials")

    logger.info("User %d logged in", user.id)
    return token_response(user)


@auth_bp.route("/logout", methods=["GET"])
def logout():
    """Invalide le cookie de session JWT."""
    resp = jsonify(envelope({}))
    resp.set_cookie("token", "none", max_age=10, httponly=True)
    return resp


@auth_bp.route("/me", methods=["GET"])
@login_required
def get_me():
    return success(dump(UserSchema, current_user))


@auth_bp.route("/updatedetails", methods=["PUT"])
@login_required
def update_details():
    changes = storage.load(UpdateDetailsRequest, request.get_json(silent=True)).model_dump(
        exclude_none=True
    )
    user = db.session.get(User, current_user.id)
    for field, value in changes.items():
        setattr(user, field, value)
    storage.commit()
    return success(dump(UserSchema, user))


@auth_bp.route("/updatepassword", methods=["PUT"])
@login_required
def update_password():
    payload = storage.load(UpdatePasswordRequest, request.get_json(silent=True))
    user = db.session.get(User, current_user.id)
    if not user.check_password(payload.current_password):
        raise UnauthorizedError("Password is incorrect")

    user.set_password(payload.new_password)
    storage.commit()
    return token_response(user)


@auth_bp.route("/forgotpassword", methods=["POST"])
@limiter.limit("5/minute")
def forgot_password():
    """Envoie par email un lien de reinitialisation valable 10 minutes."""
    payload = storage.load(ForgotPasswordRequest, request.get_json(silent=True))
    user = User.query.filter_by(email=payload.email).first()
    if user is None:
        raise NotFoundError("There is no user with that email")

    raw_token = user.generate_reset_token()
    storage.commit()

    reset_url = f"{request.host_url}api/v1/auth/resetpassword/{raw_token}"
    try:
        send_password_reset(user.email, reset_url)
    except ExternalAPIError as exc:
        user.clear_reset_token()
        storage.commit()
        raise ErrorResponse("Email could not be sent", 500) from exc

    return success("Email sent")


@auth_bp.route("/resetpassword/<resettoken>", methods=["PUT"])
def reset_password(resettoken):
    user = find_by_reset_token(resettoken)
    if user is None:
        raise BadRequestError("Invalid token")

    payload = storage.load(ResetPasswordRequest, request.get_json(silent=True))
    user.set_password(payload.password)
    user.clear_reset_token()
    storage.commit()
    logger.info("Password reset for user %d", user.id)
    return token_response(user)
