#!/usr/bin/env python3
"""Initialise la base de donnees -- cree toutes les tables DevCamper."""

import sys
from pathlib import Path

# Racine du projet sur sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app import create_app  # noqa: E402
from app.extensions import db  # noqa: E402
from app.models import Bootcamp, Course, Review, User  # noqa: E402, F401

app = create_app()

with app.app_context():
    db.create_all()
    print("Database tables created:")
    for table in db.metadata.sorted_tables:
        print(f"  - {table.name}")
