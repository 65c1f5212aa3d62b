"""Apply Alembic migrations up to a revision (head by default)."""

import argparse
from pathlib import Path

from alembic import command
from alembic.config import Config
from loguru import logger

from core.logging import configure_logging

ALEMBIC_INI = Path(__file__).resolve().parent / "alembic.ini"


def run_migrations(revision: str = "head") -> None:
    logger.info(f"Upgrading database to {revision}...")
    alembic_cfg = Config(str(ALEMBIC_INI))
    command.upgrade(alembic_cfg, revision)
    logger.info("Migrations complete!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Apply database migrations")
    parser.add_argument("revision", nargs="?", default="head")
    args = parser.parse_args()

    configure_logging()
    run_migrations(args.revision)
