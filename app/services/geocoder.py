"""Service de geocodage -- resout une adresse ou un code postal en coordonnees.

Fournisseur unique : MapQuest Geocoding API (cle requise, GEOCODER_API_KEY).
Toute defaillance (reseau, quota, adresse introuvable) leve ExternalAPIError :
c'est une faute non recuperee, traduite en 500 par le normaliseur.
"""

import logging
from dataclasses import dataclass

import httpx
from flask import current_app

from app.errors import ExternalAPIError

logger = logging.getLogger(__name__)

MAPQUEST_URL = "https://www.mapquestapi.com/geocoding/v1/address"

SUPPORTED_PROVIDERS = ("mapquest",)


@dataclass(frozen=True)
class GeoLocation:
    """Resultat de geocodage normalise."""

    latitude: float
    longitude: float
    formatted_address: str
    street: str | None = None
    city: str | None = None
    state: str | None = None
    zipcode: str | None = None
    country: str | None = None


def _format_address(street, city, state, zipcode, country) -> str:
    region = " ".join(p for p in (state, zipcode) if p)
    return ", ".join(p for p in (street, city, region, country) if p)


def _parse_mapquest(payload: dict) -> list[GeoLocation]:
    results = payload.get("results") or []
    if not results:
        return []

    locations = []
    for raw in results[0].get("locations") or []:
        lat_lng = raw.get("latLng") or raw.get("displayLatLng") or {}
        if "lat" not in lat_lng or "lng" not in lat_lng:
            continue
        street = raw.get("street") or None
        city = raw.get("adminArea5") or None
        state = raw.get("adminArea3") or None
        zipcode = raw.get("postalCode") or None
        country = raw.get("adminArea1") or None
        locations.append(
            GeoLocation(
                latitude=float(lat_lng["lat"]),
                longitude=float(lat_lng["lng"]),
                formatted_address=_format_address(street, city, state, zipcode, country),
                street=street,
                city=city,
                state=state,
                zipcode=zipcode,
                country=country,
            )
        )
    return locations


def _call_mapquest(query: str) -> dict:
    """Appel HTTP brut vers MapQuest ; retourne le JSON de reponse."""
    params = {
        "key": current_app.config.get("GEOCODER_API_KEY", ""),
        "location": query,
        "maxResults": 1,
    }
    timeout = current_app.config.get("GEOCODER_TIMEOUT", 5)
    try:
        resp = httpx.get(MAPQUEST_URL, params=params, timeout=timeout)
    except httpx.HTTPError as exc:
        raise ExternalAPIError(f"Geocodeur injoignable: {exc}") from exc

    if resp.status_code != 200:
        raise ExternalAPIError(f"Geocodeur erreur {resp.status_code}")

    try:
        return resp.json()
    except ValueError as exc:
        raise ExternalAPIError("Reponse du geocodeur illisible") from exc


def geocode(query: str) -> list[GeoLocation]:
    """Geocode une adresse libre ou un code postal ; liste vide si aucun resultat."""
    provider = current_app.config.get("GEOCODER_PROVIDER", "mapquest")
    if provider not in SUPPORTED_PROVIDERS:
        raise ExternalAPIError(f"Fournisseur de geocodage non supporte: {provider}")

    locations = _parse_mapquest(_call_mapquest(query))
    logger.debug("Geocoded %r -> %d result(s)", query, len(locations))
    return locations


def geocode_first(query: str) -> GeoLocation:
    """Premier resultat de geocodage ; ExternalAPIError si aucun."""
    locations = geocode(query)
    if not locations:
        raise ExternalAPIError(f"Aucun resultat de geocodage pour {query!r}")
    return locations[0]
