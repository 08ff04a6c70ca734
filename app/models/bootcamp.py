"""Modele Bootcamp -- formation publiee par un editeur, geolocalisee."""

import re
import unicodedata
from datetime import datetime, timezone

from app.extensions import db

CAREERS = (
    "Web Development",
    "Mobile Development",
    "UI/UX",
    "Data Science",
    "Business",
    "Other",
)


def slugify(text: str) -> str:
    """Transforme un nom en slug URL : minuscules, ASCII, tirets."""
    nfkd = unicodedata.normalize("NFKD", text)
    ascii_text = "".join(c for c in nfkd if not unicodedata.combining(c))
    return re.sub(r"[^a-z0-9]+", "-", ascii_text.lower()).strip("-")


class Bootcamp(db.Model):
    """Bootcamp de formation.

    L'adresse saisie est geocodee a la creation : les colonnes location_*
    et latitude/longitude viennent du geocodeur, pas du client.
    """

    __tablename__ = "bootcamps"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    name = db.Column(db.String(50), unique=True, nullable=False)
    slug = db.Column(db.String(80), index=True)
    description = db.Column(db.String(500), nullable=False)
    website = db.Column(db.String(255))
    phone = db.Column(db.String(20))
    email = db.Column(db.String(255))
    address = db.Column(db.String(255), nullable=False)

    # Localisation (GeoJSON Point equivalent)
    latitude = db.Column(db.Float, index=True)
    longitude = db.Column(db.Float, index=True)
    formatted_address = db.Column(db.String(255))
    street = db.Column(db.String(120))
    city = db.Column(db.String(80))
    state = db.Column(db.String(40))
    zipcode = db.Column(db.String(20))
    country = db.Column(db.String(5))

    careers = db.Column(db.JSON, nullable=False, default=list)
    average_rating = db.Column(db.Float)
    average_cost = db.Column(db.Float)
    photo = db.Column(db.String(255), default="no-photo.jpg")
    housing = db.Column(db.Boolean, default=False)
    job_assistance = db.Column(db.Boolean, default=False)
    job_guarantee = db.Column(db.Boolean, default=False)
    accept_gi = db.Column(db.Boolean, default=False)
    created_at = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    user = db.relationship("User", back_populates="bootcamps")
    courses = db.relationship(
        "Course", back_populates="bootcamp", cascade="all, delete-orphan", lazy="select"
    )
    reviews = db.relationship(
        "Review", back_populates="bootcamp", cascade="all, delete-orphan", lazy="select"
    )

    @property
    def location(self) -> dict | None:
        """Localisation structuree, ou None tant que l'adresse n'est pas geocodee."""
        if self.latitude is None or self.longitude is None:
            return None
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "formatted_address": self.formatted_address,
            "street": self.street,
            "city": self.city,
            "state": self.state,
            "zipcode": self.zipcode,
            "country": self.country,
        }

    def apply_geolocation(self, loc) -> None:
        """Recopie un resultat du geocodeur dans les colonnes de localisation."""
        self.latitude = loc.latitude
        self.longitude = loc.longitude
        self.formatted_address = loc.formatted_address
        self.street = loc.street
        self.city = loc.city
        self.state = loc.state
        self.zipcode = loc.zipcode
        self.country = loc.country

    def __repr__(self):
        return f"<Bootcamp {self.id} {self.name!r}>"
