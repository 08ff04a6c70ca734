"""Blueprints API v1 -- un blueprint par ressource.

Les cursus et avis sont aussi montes sous un bootcamp
(/bootcamps/<bootcamp_id>/courses, /bootcamps/<bootcamp_id>/reviews) :
le meme blueprint est enregistre une seconde fois, imbrique, sous un autre nom.
"""

from flask import Blueprint

API_PREFIX = "/api/v1"

auth_bp = Blueprint("auth", __name__)
users_bp = Blueprint("users", __name__)
bootcamps_bp = Blueprint("bootcamps", __name__)
courses_bp = Blueprint("courses", __name__)
reviews_bp = Blueprint("reviews", __name__)

# Re-routage vers les ressources filles
bootcamps_bp.register_blueprint(
    courses_bp, url_prefix="/<bootcamp_id>/courses", name="bootcamp_courses"
)
bootcamps_bp.register_blueprint(
    reviews_bp, url_prefix="/<bootcamp_id>/reviews", name="bootcamp_reviews"
)


def register_blueprints(app) -> None:
    """Monte tous les blueprints sous le prefixe API."""
    app.register_blueprint(bootcamps_bp, url_prefix=f"{API_PREFIX}/bootcamps")
    app.register_blueprint(courses_bp, url_prefix=f"{API_PREFIX}/courses")
    app.register_blueprint(reviews_bp, url_prefix=f"{API_PREFIX}/reviews")
    app.register_blueprint(auth_bp, url_prefix=f"{API_PREFIX}/auth")
    app.register_blueprint(users_bp, url_prefix=f"{API_PREFIX}/auth/users")


from app.api import auth_routes, bootcamps, courses, reviews, users  # noqa: E402, F401
