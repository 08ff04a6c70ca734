"""Routes /api/v1/courses et /api/v1/bootcamps/<bootcamp_id>/courses."""

import logging

from flask import g, jsonify, request
from flask_login import current_user, login_required

from app import storage
from app.api import courses_bp
from app.api.auth import authorize, ensure_owner
from app.api.query import shape_query
from app.api.responses import dump, success
from app.errors import BadRequestError, NotFoundError
from app.extensions import db
from app.models.bootcamp import Bootcamp
from app.models.course import Course
from app.schemas.course import CourseCreate, CourseSchema, CourseUpdate

logger = logging.getLogger(__name__)


@courses_bp.url_value_preprocessor
def _pull_bootcamp_id(_endpoint, values):
    g.bootcamp_id = values.pop("bootcamp_id", None) if values else None


def _get_course_or_404(course_id) -> Course:
    course = storage.get(Course, course_id)
    if course is None:
        raise NotFoundError(f"No course with the id of {course_id}")
    return course


@courses_bp.route("", methods=["GET"])
def get_courses():
    """Cursus d'un bootcamp (route imbriquee) ou liste mise en forme."""
    if g.bootcamp_id is not None:
        courses = (
            Course.query.filter_by(bootcamp_id=storage.parse_id(g.bootcamp_id))
            .order_by(Course.id)
            .all()
        )
        return success([dump(CourseSchema, c) for c in courses], count=len(courses))

    return jsonify(shape_query(Course, CourseSchema, populate=("bootcamp",))), 200


@courses_bp.route("/<course_id>", methods=["GET"])
def get_course(course_id):
    course = _get_course_or_404(course_id)
    return success(dump(CourseSchema, course))


@courses_bp.route("", methods=["POST"])
@login_required
@authorize("publisher", "admin")
def add_course():
    """Ajoute un cursus au bootcamp de l'URL ; reserve au proprietaire du bootcamp."""
    if g.bootcamp_id is None:
        raise BadRequestError("A course must be added through its bootcamp")

    bootcamp = storage.get(Bootcamp, g.bootcamp_id)
    if bootcamp is None:
        raise NotFoundError(f"No bootcamp with the id of {g.bootcamp_id}")
    ensure_owner(bootcamp, "add a course to", "bootcamp")

    payload = storage.load(CourseCreate, request.get_json(silent=True))
    course = Course(**payload.model_dump(), bootcamp_id=bootcamp.id, user_id=current_user.id)
    db.session.add(course)
    storage.flush()
    Course.refresh_average_cost(bootcamp)
    storage.commit()

    logger.info("Course %d added to bootcamp %d", course.id, bootcamp.id)
    return success(dump(CourseSchema, course), status=201)


@courses_bp.route("/<course_id>", methods=["PUT"])
@login_required
@authorize("publisher", "admin")
def update_course(course_id):
    course = _get_course_or_404(course_id)
    ensure_owner(course, "update", "course")

    changes = storage.load(CourseUpdate, request.get_json(silent=True)).model_dump(
        exclude_none=True
    )
    for field, value in changes.items():
        setattr(course, field, value)
    if "tuition" in changes:
        storage.flush()
        Course.refresh_average_cost(course.bootcamp)

    storage.commit()
    return success(dump(CourseSchema, course))


@courses_bp.route("/<course_id>", methods=["DELETE"])
@login_required
@authorize("publisher", "admin")
def delete_course(course_id):
    course = _get_course_or_404(course_id)
    ensure_owner(course, "delete", "course")

    bootcamp = course.bootcamp
    db.session.delete(course)
    storage.flush()
    Course.refresh_average_cost(bootcamp)
    storage.commit()
    return success({})
