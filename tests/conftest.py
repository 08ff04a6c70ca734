"""Shared pytest fixtures for DevCamper tests."""

import itertools
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from app import create_app
from app.extensions import db as _db
from app.models.bootcamp import Bootcamp, slugify
from app.models.user import User

# Reponse MapQuest fictive : Boston, MA 02215
FAKE_GEOCODE_RESPONSE = {
    "results": [
        {
            "locations": [
                {
                    "latLng": {"lat": 42.350846, "lng": -71.10505},
                    "street": "233 Bay State Rd",
                    "adminArea5": "Boston",
                    "adminArea3": "MA",
                    "postalCode": "02215",
                    "adminArea1": "US",
                }
            ]
        }
    ]
}


@pytest.fixture(scope="session")
def app():
    """Create application for testing.

    Pas de contexte applicatif global : chaque requete du client de test
    pousse le sien, sinon ``g`` (et l'utilisateur Flask-Login) fuiraient
    d'une requete a l'autre.
    """
    app = create_app("testing")
    yield app
    with app.app_context():
        _db.drop_all()


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


@pytest.fixture(autouse=True)
def _clean_tables(app):
    """Vide toutes les tables apres chaque test."""
    yield
    with app.app_context():
        _db.session.rollback()
        for table in reversed(_db.metadata.sorted_tables):
            _db.session.execute(table.delete())
        _db.session.commit()


@pytest.fixture(autouse=True)
def _mock_geocoder():
    """Empeche tout appel reseau vers MapQuest dans les tests."""
    with patch(
        "app.services.geocoder._call_mapquest",
        return_value=FAKE_GEOCODE_RESPONSE,
    ) as mocked:
        yield mocked


@pytest.fixture(autouse=True)
def _mock_resend():
    """Empeche tout envoi d'email reel."""
    with patch("resend.Emails.send", return_value={"id": "test"}) as m:
        yield m


@pytest.fixture()
def make_user(app):
    """Fabrique d'utilisateurs : retourne id, email, mot de passe et en-tetes auth."""
    counter = itertools.count(1)

    def _make(role: str = "publisher", email: str | None = None, password: str = "123456"):
        n = next(counter)
        with app.app_context():
            user = User(
                name=f"{role.title()} {n}",
                email=email or f"{role}{n}@example.com",
                role=role,
            )
            user.set_password(password)
            _db.session.add(user)
            _db.session.commit()
            token = user.get_signed_jwt_token()
            return SimpleNamespace(
                id=user.id,
                email=user.email,
                password=password,
                role=role,
                token=token,
                headers={"Authorization": f"Bearer {token}"},
            )

    return _make


@pytest.fixture()
def make_bootcamp(app):
    """Insere un bootcamp deja geolocalise, sans passer par l'API."""
    counter = itertools.count(1)

    def _make(owner, latitude: float = 42.350846, longitude: float = -71.10505, **overrides):
        n = next(counter)
        fields = {
            "name": f"Bootcamp {n}",
            "description": "A bootcamp",
            "address": "233 Bay State Rd Boston MA 02215",
            "careers": ["Web Development"],
        }
        fields.update(overrides)
        with app.app_context():
            bootcamp = Bootcamp(
                **fields,
                user_id=owner.id,
                slug=slugify(fields["name"]),
                latitude=latitude,
                longitude=longitude,
            )
            _db.session.add(bootcamp)
            _db.session.commit()
            return bootcamp.id

    return _make
