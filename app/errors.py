"""Hierarchie d'exceptions DevCamper.

Regles :
  - Ne jamais utiliser ``except Exception`` nu. Toujours attraper un type specifique.
  - Les controleurs levent une ErrorResponse (ou une sous-classe) et laissent
    le normaliseur d'erreurs (app.api.errors) ecrire la reponse JSON.
"""


class DevCamperError(Exception):
    """Exception de base pour toutes les erreurs DevCamper."""


class ErrorResponse(DevCamperError):
    """Erreur structuree : un message lisible et un code HTTP.

    Immuable une fois construite ; consommee une seule fois par le
    normaliseur d'erreurs.
    """

    __slots__ = ("_message", "_status_code")

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self._message = message
        self._status_code = status_code

    @property
    def message(self) -> str:
        return self._message

    @property
    def status_code(self) -> int:
        return self._status_code

    def __repr__(self):
        return f"<{type(self).__name__} {self._status_code} {self._message!r}>"


class NotFoundError(ErrorResponse):
    """Ressource introuvable."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, 404)


class UnauthorizedError(ErrorResponse):
    """Controle de role ou de propriete echoue."""

    def __init__(self, message: str = "Not authorized to access this route"):
        super().__init__(message, 401)


class BadRequestError(ErrorResponse):
    """Entree invalide (upload manquant, parametre mal forme...)."""

    def __init__(self, message: str):
        super().__init__(message, 400)


class ConflictError(ErrorResponse):
    """Conflit avec l'etat existant (valeur unique deja prise)."""

    def __init__(self, message: str = "Duplicate field value entered"):
        super().__init__(message, 409)


class ExternalAPIError(DevCamperError):
    """Un appel API externe a echoue (geocodage, envoi d'email)."""
