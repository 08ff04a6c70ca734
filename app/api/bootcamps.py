"""Routes /api/v1/bootcamps."""

import logging
import math
import os
import re
from pathlib import Path

from flask import current_app, request
from flask_login import current_user, login_required

from app import storage
from app.api import bootcamps_bp
from app.api.auth import authorize, ensure_owner
from app.api.query import advanced_response, advanced_results
from app.api.responses import dump, success
from app.errors import BadRequestError, ErrorResponse, NotFoundError
from app.extensions import db
from app.models.bootcamp import Bootcamp, slugify
from app.schemas.bootcamp import (
    BootcampCreate,
    BootcampSchema,
    BootcampUpdate,
    BootcampWithCourses,
)
from app.services.geocoder import geocode_first

logger = logging.getLogger(__name__)

# Rayon terrestre en miles (les distances de recherche sont en miles)
EARTH_RADIUS = 6963

_EXTENSION_PATTERN = re.compile(r"\.[A-Za-z0-9]{1,10}")


def _get_bootcamp_or_404(bootcamp_id) -> Bootcamp:
    bootcamp = storage.get(Bootcamp, bootcamp_id)
    if bootcamp is None:
        raise NotFoundError(f"Bootcamp not found with id of {bootcamp_id}")
    return bootcamp


@bootcamps_bp.route("", methods=["GET"])
@advanced_results(Bootcamp, BootcampWithCourses, populate=("courses",))
def get_bootcamps():
    """Liste publique des bootcamps (filtrage, tri, pagination)."""
    return advanced_response()


@bootcamps_bp.route("/<bootcamp_id>", methods=["GET"])
def get_bootcamp(bootcamp_id):
    bootcamp = _get_bootcamp_or_404(bootcamp_id)
    return success(dump(BootcampSchema, bootcamp))


@bootcamps_bp.route("", methods=["POST"])
@login_required
@authorize("publisher", "admin")
def create_bootcamp():
    """Cree un bootcamp appartenant a l'utilisateur courant.

    Un editeur ne peut publier qu'un seul bootcamp ; un admin n'a pas de limite.
    L'adresse est geocodee avant l'insertion.
    """
    published = Bootcamp.query.filter_by(user_id=current_user.id).first()
    if published is not None and not current_user.is_admin:
        raise BadRequestError(
            f"The user with ID {current_user.id} has already published a bootcamp"
        )

    payload = storage.load(BootcampCreate, request.get_json(silent=True))
    bootcamp = Bootcamp(**payload.model_dump(), user_id=current_user.id)
    bootcamp.slug = slugify(payload.name)
    bootcamp.apply_geolocation(geocode_first(payload.address))

    db.session.add(bootcamp)
    storage.commit()
    logger.info("Bootcamp %d created by user %d", bootcamp.id, current_user.id)
    return success(dump(BootcampSchema, bootcamp), status=201)


@bootcamps_bp.route("/<bootcamp_id>", methods=["PUT"])
@login_required
@authorize("publisher", "admin")
def update_bootcamp(bootcamp_id):
    bootcamp = _get_bootcamp_or_404(bootcamp_id)
    ensure_owner(bootcamp, "update", "bootcamp")

    changes = storage.load(BootcampUpdate, request.get_json(silent=True)).model_dump(
        exclude_none=True
    )
    for field, value in changes.items():
        setattr(bootcamp, field, value)
    if changes.get("name"):
        bootcamp.slug = slugify(changes["name"])
    if changes.get("address"):
        bootcamp.apply_geolocation(geocode_first(changes["address"]))

    storage.commit()
    return success(dump(BootcampSchema, bootcamp))


@bootcamps_bp.route("/<bootcamp_id>", methods=["DELETE"])
@login_required
@authorize("publisher", "admin")
def delete_bootcamp(bootcamp_id):
    """Supprime un bootcamp ainsi que ses cursus et avis."""
    bootcamp = _get_bootcamp_or_404(bootcamp_id)
    ensure_owner(bootcamp, "delete", "bootcamp")

    db.session.delete(bootcamp)
    storage.commit()
    logger.info("Bootcamp %s deleted by user %d", bootcamp_id, current_user.id)
    return success({})


@bootcamps_bp.route("/radius/<zipcode>/<distance>", methods=["GET"])
def get_bootcamps_in_radius(zipcode, distance):
    """Bootcamps situes a moins de ``distance`` miles du code postal.

    Le rayon angulaire (distance / rayon terrestre) delimite une calotte
    spherique ; le test d'appartenance est fait en SQL (angular_distance).
    """
    try:
        distance_miles = float(distance)
    except ValueError as exc:
        raise BadRequestError("Distance must be a number") from exc
    if not math.isfinite(distance_miles) or distance_miles < 0:
        raise BadRequestError("Distance must be a positive number")

    loc = geocode_first(zipcode)
    radius = distance_miles / EARTH_RADIUS

    bootcamps = (
        Bootcamp.query.filter(
            db.func.angular_distance(
                Bootcamp.latitude, Bootcamp.longitude, loc.latitude, loc.longitude
            )
            <= radius
        )
        .order_by(Bootcamp.id)
        .all()
    )
    return success([dump(BootcampSchema, b) for b in bootcamps], count=len(bootcamps))


def _safe_extension(filename: str) -> str:
    """Extension du fichier d'origine (casse conservee), vide si suspecte."""
    suffix = Path(filename).suffix
    return suffix if _EXTENSION_PATTERN.fullmatch(suffix) else ""


def _file_size(file) -> int:
    file.stream.seek(0, os.SEEK_END)
    size = file.stream.tell()
    file.stream.seek(0)
    return size


@bootcamps_bp.route("/<bootcamp_id>/photo", methods=["PUT"])
@login_required
@authorize("publisher", "admin")
def upload_bootcamp_photo(bootcamp_id):
    """Upload de la photo d'un bootcamp (multipart, champ ``file``).

    Controles dans l'ordre, le premier qui echoue repond 400 : fichier
    present, type image, taille maximale.
    """
    bootcamp = _get_bootcamp_or_404(bootcamp_id)
    ensure_owner(bootcamp, "update", "bootcamp")

    file = request.files.get("file")
    if file is None or not file.filename:
        raise BadRequestError("Please upload a file")

    if not (file.mimetype or "").startswith("image"):
        raise BadRequestError("Please upload an image file.")

    max_size = current_app.config["MAX_FILE_UPLOAD"]
    if _file_size(file) > max_size:
        raise BadRequestError(f"Please upload an image less than {max_size}")

    # Nom deterministe : photo_<id><extension d'origine>
    extension = _safe_extension(file.filename)
    filename = f"photo_{bootcamp.id}{extension}"
    upload_dir = Path(current_app.config["FILE_UPLOAD_PATH"])
    try:
        upload_dir.mkdir(parents=True, exist_ok=True)
        file.save(upload_dir / filename)
    except OSError as exc:
        logger.error("Photo upload failed for bootcamp %d: %s", bootcamp.id, exc)
        raise ErrorResponse("Problem with file upload", 500) from exc

    bootcamp.photo = filename
    storage.commit()
    logger.info("Photo %s stored for bootcamp %d", filename, bootcamp.id)
    return success(filename)
