"""Schemas communs d'enveloppe de reponse API."""

from typing import Any

from pydantic import BaseModel


class PageRef(BaseModel):
    """Reference vers une page voisine d'une liste paginee."""

    page: int
    limit: int


class Pagination(BaseModel):
    next: PageRef | None = None
    prev: PageRef | None = None


class SuccessEnvelope(BaseModel):
    """Enveloppe de succes.

    {"success": true, "data": ...}              -- ressource unique
    {"success": true, "count": n, "data": [...]} -- liste
    ``count`` et ``pagination`` sont omis quand ils ne s'appliquent pas.
    """

    success: bool = True
    count: int | None = None
    pagination: Pagination | None = None
    data: Any = None


class FailureEnvelope(BaseModel):
    """Enveloppe d'echec : {"success": false, "error": "message"}."""

    success: bool = False
    error: str


class TokenEnvelope(BaseModel):
    """Reponse des routes d'authentification qui emettent un jeton."""

    success: bool = True
    token: str
