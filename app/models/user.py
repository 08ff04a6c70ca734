"""Modele User : comptes, roles et jetons d'authentification."""

import hashlib
import secrets
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app
from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash

from app.extensions import db

USER_ROLES = ("user", "publisher", "admin")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(UserMixin, db.Model):
    """Utilisateur de l'API (visiteur, editeur de bootcamp ou administrateur)."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    role = db.Column(db.String(20), nullable=False, default="user")
    password_hash = db.Column(db.String(256), nullable=False)
    reset_password_token = db.Column(db.String(64), index=True)
    reset_password_expire = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=_utcnow)

    bootcamps = db.relationship("Bootcamp", back_populates="user", lazy="select")

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def get_signed_jwt_token(self) -> str:
        """Signe un JWT contenant l'id utilisateur."""
        expire = datetime.now(timezone.utc) + timedelta(days=current_app.config["JWT_EXPIRE_DAYS"])
        return jwt.encode(
            {"id": self.id, "exp": expire},
            current_app.config["JWT_SECRET"],
            algorithm="HS256",
        )

    def generate_reset_token(self) -> str:
        """Genere un jeton de reinitialisation de mot de passe.

        Le jeton brut est renvoye a l'appelant (il part par email) ; seul son
        hash SHA-256 est stocke, avec une expiration courte.
        """
        raw = secrets.token_hex(20)
        self.reset_password_token = hash_reset_token(raw)
        minutes = current_app.config["RESET_TOKEN_EXPIRE_MINUTES"]
        self.reset_password_expire = _utcnow() + timedelta(minutes=minutes)
        return raw

    def clear_reset_token(self) -> None:
        self.reset_password_token = None
        self.reset_password_expire = None

    def __repr__(self):
        return f"<User {self.email} role={self.role}>"


def hash_reset_token(raw: str) -> str:
    return hashlib.sha256(raw.encode()).hexdigest()


def decode_jwt_token(token: str) -> int | None:
    """Retourne l'id utilisateur porte par un JWT valide, sinon None."""
    try:
        payload = jwt.decode(token, current_app.config["JWT_SECRET"], algorithms=["HS256"])
    except jwt.PyJWTError:
        return None
    user_id = payload.get("id")
    return user_id if isinstance(user_id, int) else None


def find_by_reset_token(raw: str) -> User | None:
    """Utilisateur dont le jeton de reinitialisation est valide et non expire."""
    return User.query.filter(
        User.reset_password_token == hash_reset_token(raw),
        User.reset_password_expire > _utcnow(),
    ).first()
