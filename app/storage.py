"""Frontiere avec la couche de stockage.

Toute faute levee par l'ORM ou par la validation des corps de requete est
classee ici, une seule fois, en StorageFault etiquetee par un FaultKind. Le
reste du code n'a jamais a connaitre la forme des exceptions SQLAlchemy ou
pydantic.
"""

import enum
import logging
import re
from contextlib import contextmanager
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from app.errors import DevCamperError
from app.extensions import db

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)

# Plus grande valeur d'un INTEGER SQLite (entier signe 64 bits)
MAX_ID = 2**63 - 1

_ID_PATTERN = re.compile(r"[0-9]{1,19}")


class FaultKind(enum.Enum):
    """Classification des fautes de la couche de stockage."""

    MALFORMED_ID = "malformed_id"
    DUPLICATE_KEY = "duplicate_key"
    VALIDATION = "validation"


class StorageFault(DevCamperError):
    """Faute de stockage etiquetee, convertie en ErrorResponse par le normaliseur."""

    def __init__(self, kind: FaultKind, messages: list[str] | None = None):
        self.kind = kind
        self.messages = list(messages or [])
        super().__init__(f"{kind.value}: {'; '.join(self.messages)}")


def parse_id(raw: Any) -> int:
    """Convertit un identifiant de chemin en cle primaire.

    Un identifiant mal forme est une faute MALFORMED_ID (404 cote client).
    """
    value = None
    if isinstance(raw, int) and not isinstance(raw, bool):
        value = raw
    elif isinstance(raw, str) and _ID_PATTERN.fullmatch(raw):
        value = int(raw)
    if value is not None and 0 < value <= MAX_ID:
        return value
    raise StorageFault(FaultKind.MALFORMED_ID, [f"malformed identifier {raw!r}"])


def get(model, raw_id: Any):
    """Lit une entite par identifiant ; None si absente."""
    return db.session.get(model, parse_id(raw_id))


def _field_message(error: dict) -> str:
    field = ".".join(str(part) for part in error.get("loc", ())) or "body"
    if error.get("type") == "missing":
        return f"Please add a {field.replace('_', ' ')}"
    return f"{field}: {error.get('msg', 'invalid value')}"


def load(schema: type[SchemaT], payload: Any) -> SchemaT:
    """Valide un corps de requete contre un schema pydantic.

    Les erreurs de validation deviennent une faute VALIDATION portant un
    message par champ.
    """
    try:
        return schema.model_validate(payload if payload is not None else {})
    except PydanticValidationError as exc:
        raise StorageFault(FaultKind.VALIDATION, [_field_message(e) for e in exc.errors()]) from exc


def _is_unique_violation(exc: IntegrityError) -> bool:
    text = str(exc.orig).lower()
    return "unique" in text or "duplicate" in text


@contextmanager
def _classified():
    """Classe les violations de contrainte levees par l'ORM.

    La session est toujours annulee avant de propager une faute.
    """
    try:
        yield
    except IntegrityError as exc:
        db.session.rollback()
        if _is_unique_violation(exc):
            logger.info("Unique constraint violated: %s", exc.orig)
            raise StorageFault(FaultKind.DUPLICATE_KEY, [str(exc.orig)]) from exc
        logger.warning("Integrity error: %s", exc.orig)
        raise StorageFault(FaultKind.VALIDATION, ["Invalid or missing field value"]) from exc


def flush() -> None:
    """Envoie les ecritures en attente sans valider la transaction."""
    with _classified():
        db.session.flush()


def commit() -> None:
    with _classified():
        db.session.commit()
