"""Process-wide logging setup for the command line."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Configure root logging once for the CLI process."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # SQL echo is controlled separately through settings.echo_sql
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
