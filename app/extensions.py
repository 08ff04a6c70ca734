"""Extensions Flask -- instanciees ici, initialisees dans create_app()."""

import math

from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()
login_manager = LoginManager()
cors = CORS()
limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")


def _sqlite_angular_distance(
    lat1: float | None, lng1: float | None, lat2: float | None, lng2: float | None
) -> float | None:
    """Fonction SQLite custom : angle au centre (radians) entre deux points.

    Formule de haversine. Les recherches par rayon comparent cet angle au
    rayon angulaire (distance / rayon terrestre), ce qui revient a tester
    l'appartenance a une calotte spherique.
    """
    if None in (lat1, lng1, lat2, lng2):
        return None
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = phi2 - phi1
    dlambda = math.radians(lng2 - lng1)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    return 2 * math.asin(min(1.0, math.sqrt(h)))


@event.listens_for(Engine, "connect")
def _register_sqlite_functions(dbapi_conn, _connection_record):
    """Enregistre les fonctions custom SQLite a chaque nouvelle connexion."""
    if hasattr(dbapi_conn, "create_function"):
        dbapi_conn.create_function("angular_distance", 4, _sqlite_angular_distance)
