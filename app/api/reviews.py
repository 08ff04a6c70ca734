"""Routes /api/v1/reviews et /api/v1/bootcamps/<bootcamp_id>/reviews."""

import logging

from flask import g, jsonify, request
from flask_login import current_user, login_required

from app import storage
from app.api import reviews_bp
from app.api.auth import authorize, ensure_owner
from app.api.query import shape_query
from app.api.responses import dump, success
from app.errors import BadRequestError, NotFoundError
from app.extensions import db
from app.models.bootcamp import Bootcamp
from app.models.review import Review
from app.schemas.review import ReviewCreate, ReviewSchema, ReviewUpdate

logger = logging.getLogger(__name__)


@reviews_bp.url_value_preprocessor
def _pull_bootcamp_id(_endpoint, values):
    g.bootcamp_id = values.pop("bootcamp_id", None) if values else None


def _get_review_or_404(review_id) -> Review:
    review = storage.get(Review, review_id)
    if review is None:
        raise NotFoundError(f"No review found with the id of {review_id}")
    return review


@reviews_bp.route("", methods=["GET"])
def get_reviews():
    if g.bootcamp_id is not None:
        reviews = (
            Review.query.filter_by(bootcamp_id=storage.parse_id(g.bootcamp_id))
            .order_by(Review.id)
            .all()
        )
        return success([dump(ReviewSchema, r) for r in reviews], count=len(reviews))

    return jsonify(shape_query(Review, ReviewSchema, populate=("bootcamp",))), 200


@reviews_bp.route("/<review_id>", methods=["GET"])
def get_review(review_id):
    review = _get_review_or_404(review_id)
    return success(dump(ReviewSchema, review))


@reviews_bp.route("", methods=["POST"])
@login_required
@authorize("user", "admin")
def add_review():
    """Ajoute un avis au bootcamp de l'URL.

    Un second avis du meme utilisateur sur le meme bootcamp viole la
    contrainte d'unicite (409).
    """
    if g.bootcamp_id is None:
        raise BadRequestError("A review must be added through its bootcamp")

    bootcamp = storage.get(Bootcamp, g.bootcamp_id)
    if bootcamp is None:
        raise NotFoundError(f"No bootcamp with the id of {g.bootcamp_id}")

    payload = storage.load(ReviewCreate, request.get_json(silent=True))
    review = Review(**payload.model_dump(), bootcamp_id=bootcamp.id, user_id=current_user.id)
    db.session.add(review)
    storage.flush()
    Review.refresh_average_rating(bootcamp)
    storage.commit()

    logger.info("Review %d added to bootcamp %d", review.id, bootcamp.id)
    return success(dump(ReviewSchema, review), status=201)


@reviews_bp.route("/<review_id>", methods=["PUT"])
@login_required
@authorize("user", "admin")
def update_review(review_id):
    review = _get_review_or_404(review_id)
    ensure_owner(review, "update", "review")

    changes = storage.load(ReviewUpdate, request.get_json(silent=True)).model_dump(
        exclude_none=True
    )
    for field, value in changes.items():
        setattr(review, field, value)
    if "rating" in changes:
        storage.flush()
        Review.refresh_average_rating(review.bootcamp)

    storage.commit()
    return success(dump(ReviewSchema, review))


@reviews_bp.route("/<review_id>", methods=["DELETE"])
@login_required
@authorize("user", "admin")
def delete_review(review_id):
    review = _get_review_or_404(review_id)
    ensure_owner(review, "delete", "review")

    bootcamp = review.bootcamp
    db.session.delete(review)
    storage.flush()
    Review.refresh_average_rating(bootcamp)
    storage.commit()
    return success({})
