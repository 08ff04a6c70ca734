"""Normaliseur d'erreurs -- seul endroit qui ecrit un corps de reponse d'erreur.

Toute exception levee pendant le traitement d'une requete (ErrorResponse
explicite, faute de stockage, erreur HTTP de werkzeug, bug) arrive ici et
devient une enveloppe {"success": false, "error": "..."}. Les details
internes restent dans les logs, jamais dans la reponse.
"""

import logging

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from app.errors import ConflictError, ErrorResponse, NotFoundError
from app.schemas.common import FailureEnvelope
from app.storage import FaultKind, StorageFault

logger = logging.getLogger(__name__)

DEFAULT_STATUS = 500
DEFAULT_MESSAGE = "Server Error"


def _from_storage_fault(fault: StorageFault) -> ErrorResponse:
    if fault.kind is FaultKind.MALFORMED_ID:
        return NotFoundError()
    if fault.kind is FaultKind.DUPLICATE_KEY:
        return ConflictError()
    if fault.kind is FaultKind.VALIDATION:
        return ErrorResponse(", ".join(fault.messages) or "Invalid input", 400)
    return ErrorResponse(DEFAULT_MESSAGE, DEFAULT_STATUS)


def normalize_error(exc: BaseException) -> ErrorResponse:
    """Convertit n'importe quelle exception en ErrorResponse."""
    if isinstance(exc, StorageFault):
        return _from_storage_fault(exc)
    if isinstance(exc, ErrorResponse):
        return exc
    if isinstance(exc, HTTPException):
        return ErrorResponse(exc.name or DEFAULT_MESSAGE, exc.code or DEFAULT_STATUS)
    return ErrorResponse(DEFAULT_MESSAGE, DEFAULT_STATUS)


def handle_error(exc: Exception):
    """Gestionnaire Flask terminal : journalise puis ecrit l'enveloppe d'echec."""
    error = normalize_error(exc)
    status = error.status_code or DEFAULT_STATUS
    message = error.message or DEFAULT_MESSAGE

    if status >= 500:
        logger.error(
            "Unhandled error on %s %s: %s", request.method, request.path, exc, exc_info=exc
        )
    else:
        logger.warning("%s %s -> %d %s (%r)", request.method, request.path, status, message, exc)

    return jsonify(FailureEnvelope(error=message).model_dump()), status


def register_error_handlers(app) -> None:
    app.register_error_handler(Exception, handle_error)
