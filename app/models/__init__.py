"""Modeles ORM SQLAlchemy -- importe tous les modeles pour les enregistrer dans les metadonnees."""

from app.models.bootcamp import Bootcamp  # noqa: F401
from app.models.course import Course  # noqa: F401
from app.models.review import Review  # noqa: F401
from app.models.user import User  # noqa: F401
