#!/usr/bin/env python3
"""Seeder -- importe ou supprime les donnees d'exemple (JSON de ce dossier).

Les bootcamps d'exemple portent deja leurs coordonnees : aucun appel au
geocodeur n'est fait pendant l'import.

Usage :
    python data/seeds/seeder.py -i   # importer
    python data/seeds/seeder.py -d   # tout supprimer
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent))

from app import create_app  # noqa: E402
from app.extensions import db  # noqa: E402
from app.models.bootcamp import Bootcamp, slugify  # noqa: E402
from app.models.course import Course  # noqa: E402
from app.models.review import Review  # noqa: E402
from app.models.user import User  # noqa: E402

SEEDS_DIR = Path(__file__).resolve().parent


def _read(name: str) -> list[dict]:
    with open(SEEDS_DIR / f"{name}.json", encoding="utf-8") as f:
        return json.load(f)


def import_data(config_name: str | None = None) -> dict[str, int]:
    """Insere utilisateurs, bootcamps, cursus et avis ; retourne les compteurs."""
    app = create_app(config_name)
    with app.app_context():
        for row in _read("users"):
            password = row.pop("password")
            user = User(**row)
            user.set_password(password)
            db.session.add(user)

        for row in _read("bootcamps"):
            db.session.add(Bootcamp(**row, slug=slugify(row["name"])))
        db.session.flush()

        for row in _read("courses"):
            db.session.add(Course(**row))
        for row in _read("reviews"):
            db.session.add(Review(**row))
        db.session.flush()

        for bootcamp in Bootcamp.query.all():
            Course.refresh_average_cost(bootcamp)
            Review.refresh_average_rating(bootcamp)
        db.session.commit()

        counts = {
            "users": User.query.count(),
            "bootcamps": Bootcamp.query.count(),
            "courses": Course.query.count(),
            "reviews": Review.query.count(),
        }
    print(f"[+] Data imported: {counts}")
    return counts


def delete_data(config_name: str | None = None) -> None:
    """Vide les tables de l'application (enfants d'abord)."""
    app = create_app(config_name)
    with app.app_context():
        for model in (Review, Course, Bootcamp, User):
            model.query.delete()
        db.session.commit()
    print("[-] Data destroyed")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seeder DevCamper")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("-i", "--import", dest="do_import", action="store_true")
    group.add_argument("-d", "--delete", dest="do_delete", action="store_true")
    args = parser.parse_args(argv)

    if args.do_import:
        import_data()
    else:
        delete_data()
    return 0


if __name__ == "__main__":
    sys.exit(main())
