"""Classes de configuration pour l'API DevCamper."""

import os
import tempfile
from pathlib import Path

basedir = Path(__file__).resolve().parent


class Config:
    """Configuration de base (production)."""

    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-only-insecure-key")
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        f"sqlite:///{basedir / 'data' / 'devcamper.db'}",
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*").split(",")

    # Serveur
    PORT = int(os.environ.get("PORT", "5000"))

    # Upload des photos de bootcamp
    MAX_FILE_UPLOAD = int(os.environ.get("MAX_FILE_UPLOAD", "1000000"))
    FILE_UPLOAD_PATH = os.environ.get("FILE_UPLOAD_PATH", str(basedir / "public" / "uploads"))

    # Authentification JWT
    JWT_SECRET = os.environ.get("JWT_SECRET", "dev-only-insecure-jwt")
    JWT_EXPIRE_DAYS = int(os.environ.get("JWT_EXPIRE_DAYS", "30"))
    JWT_COOKIE_EXPIRE_DAYS = int(os.environ.get("JWT_COOKIE_EXPIRE_DAYS", "30"))
    RESET_TOKEN_EXPIRE_MINUTES = 10

    # API externes
    GEOCODER_PROVIDER = os.environ.get("GEOCODER_PROVIDER", "mapquest")
    GEOCODER_API_KEY = os.environ.get("GEOCODER_API_KEY", "")
    GEOCODER_TIMEOUT = int(os.environ.get("GEOCODER_TIMEOUT", "5"))
    RESEND_API_KEY = os.environ.get("RESEND_API_KEY", "")
    MAIL_FROM = os.environ.get("MAIL_FROM", "DevCamper <noreply@devcamper.io>")

    # Limitation de debit : 100 requetes / 10 minutes par IP
    RATELIMIT_DEFAULT = os.environ.get("RATELIMIT_DEFAULT", "100 per 10 minutes")

    # Journalisation
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    LOG_REQUESTS = False


class DevConfig(Config):
    """Configuration de developpement."""

    DEBUG = True
    LOG_LEVEL = "DEBUG"
    LOG_REQUESTS = True


class TestConfig(Config):
    """Configuration de test."""

    TESTING = True
    _test_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    SQLALCHEMY_DATABASE_URI = f"sqlite:///{_test_db.name}"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
    }
    FILE_UPLOAD_PATH = tempfile.mkdtemp(prefix="devcamper-uploads-")
    MAX_FILE_UPLOAD = 1024
    RATELIMIT_ENABLED = False
    GEOCODER_API_KEY = "test-key"
    RESEND_API_KEY = "test-key"
    LOG_LEVEL = "DEBUG"


config_by_name = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": Config,
}
