#!/usr/bin/env python3
"""Point d'entree du serveur DevCamper.

Une exception non geree hors du traitement d'une requete (boucle du
serveur, thread de travail) est fatale : elle est journalisee puis le
processus s'arrete avec le code 1. Un superviseur externe le relance.
"""

import logging
import os
import sys
import threading

from app import create_app

logger = logging.getLogger("app.server")


def _fatal(exc_type, exc, tb) -> None:
    logger.critical("Fatal error: %s", exc, exc_info=(exc_type, exc, tb))
    logging.shutdown()
    os._exit(1)


def _fatal_thread(args: threading.ExceptHookArgs) -> None:
    if args.exc_type is SystemExit:
        return
    _fatal(args.exc_type, args.exc_value, args.exc_traceback)


def main() -> None:
    sys.excepthook = _fatal
    threading.excepthook = _fatal_thread

    app = create_app()
    port = app.config["PORT"]
    logger.info("Server running in %s mode on port %d", app.config["ENV_NAME"], port)
    app.run(host=os.environ.get("HOST", "0.0.0.0"), port=port)


if __name__ == "__main__":
    main()
