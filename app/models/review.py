"""Modele Review -- avis d'un utilisateur sur un bootcamp."""

from datetime import datetime, timezone

from app.extensions import db


class Review(db.Model):
    """Avis note de 1 a 10. Un seul avis par utilisateur et par bootcamp."""

    __tablename__ = "reviews"
    __table_args__ = (db.UniqueConstraint("bootcamp_id", "user_id", name="uq_review_bootcamp_user"),)

    id = db.Column(db.Integer, primary_key=True)
    bootcamp_id = db.Column(db.Integer, db.ForeignKey("bootcamps.id"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    title = db.Column(db.String(100), nullable=False)
    text = db.Column(db.Text, nullable=False)
    rating = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    bootcamp = db.relationship("Bootcamp", back_populates="reviews")

    @staticmethod
    def refresh_average_rating(bootcamp) -> None:
        """Recalcule la note moyenne du bootcamp."""
        avg = (
            db.session.query(db.func.avg(Review.rating))
            .filter(Review.bootcamp_id == bootcamp.id)
            .scalar()
        )
        bootcamp.average_rating = round(float(avg), 1) if avg is not None else None

    def __repr__(self):
        return f"<Review {self.id} rating={self.rating}>"
