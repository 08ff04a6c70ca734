"""Configuration de la journalisation pour l'API DevCamper.

Logging standard Python : un handler console sur le logger racine. Les
details des erreurs (stack traces) ne vont que dans ces logs, jamais dans
les reponses HTTP.
"""

import logging
import sys

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Bibliotheques bavardes ramenees a WARNING
_QUIET_LOGGERS = ("httpx", "httpcore")


def setup_logging(log_level: str = "INFO") -> None:
    """Configure le logger racine de l'application (idempotent)."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    if not root.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATEFMT))
        root.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
