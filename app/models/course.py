"""Modele Course -- cursus propose par un bootcamp."""

import math
from datetime import datetime, timezone

from app.extensions import db

SKILL_LEVELS = ("beginner", "intermediate", "advanced")


class Course(db.Model):
    """Cursus d'un bootcamp ; son cout alimente Bootcamp.average_cost."""

    __tablename__ = "courses"

    id = db.Column(db.Integer, primary_key=True)
    bootcamp_id = db.Column(db.Integer, db.ForeignKey("bootcamps.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    title = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)
    weeks = db.Column(db.Integer, nullable=False)
    tuition = db.Column(db.Float, nullable=False)
    minimum_skill = db.Column(db.String(20), nullable=False)
    scholarship_available = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    bootcamp = db.relationship("Bootcamp", back_populates="courses")

    @staticmethod
    def refresh_average_cost(bootcamp) -> None:
        """Recalcule le cout moyen du bootcamp, arrondi a la dizaine superieure."""
        avg = (
            db.session.query(db.func.avg(Course.tuition))
            .filter(Course.bootcamp_id == bootcamp.id)
            .scalar()
        )
        bootcamp.average_cost = math.ceil(avg / 10) * 10 if avg is not None else None

    def __repr__(self):
        return f"<Course {self.id} {self.title!r}>"
