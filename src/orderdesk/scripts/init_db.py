"""
Safe DB initializer:
- If the database is empty: create all tables from SQLAlchemy models.
- If some tables exist: print a warning and exit.
- Optional override: set ALLOW_CREATE_MISSING=true to create only missing tables.
"""

import logging
import os
import sys

from sqlalchemy import inspect
from sqlalchemy import MetaData
from sqlalchemy.exc import SQLAlchemyError

# Importing the models registers them on Base.metadata
from orderdesk import models  # noqa: F401
from orderdesk.db import Base
from orderdesk.db import engine
from orderdesk.logging_config import setup_logging
from orderdesk.settings import settings

logger = logging.getLogger("orderdesk.init_db")


def allow_create_missing() -> bool:
    return os.getenv("ALLOW_CREATE_MISSING", "").lower() in {"1", "true", "yes"}


def main(bind=engine) -> int:
    try:
        existing = set(inspect(bind).get_table_names())
    except SQLAlchemyError:
        logger.exception("Failed to inspect database")
        return 1

    defined = set(Base.metadata.tables.keys())

    if not existing:
        logger.info("Empty database detected. Creating all tables")
        try:
            Base.metadata.create_all(bind=bind)
        except SQLAlchemyError:
            logger.exception("create_all failed")
            return 1
        logger.info("All tables created")
        return 0

    missing = sorted(defined - existing)
    extra = sorted(existing - defined)
    if extra:
        logger.warning("Tables in the database but not in the models: %s", extra)

    if not missing:
        logger.info("Schema tables already exist. Nothing to do")
        return 0

    logger.warning("Detected missing tables: %s", missing)
    if not allow_create_missing():
        logger.error(
            "Will NOT modify a partially-initialized database. "
            "Set ALLOW_CREATE_MISSING=true to create only the missing tables."
        )
        return 2

    md = MetaData()
    for name in missing:
        Base.metadata.tables[name].to_metadata(md)
    try:
        md.create_all(bind=bind)
    except SQLAlchemyError:
        logger.exception("Failed to create missing tables")
        return 1
    logger.info("Missing tables created: %s", missing)
    return 0


if __name__ == "__main__":
    setup_logging(settings.log_level, settings.log_format)
    sys.exit(main())
