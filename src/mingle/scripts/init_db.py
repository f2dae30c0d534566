"""Create, or reset, the tables of the configured database."""
from __future__ import annotations

import argparse
import logging
import sys

from sqlalchemy.exc import SQLAlchemyError

from mingle.core.settings import get_settings
from mingle.db.session import build_engine, create_tables, drop_tables

logger = logging.getLogger("mingle.init_db")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the Mingle tables")
    parser.add_argument(
        "--drop-tables",
        action="store_true",
        help="Drop every table before creating them again.",
    )
    parser.add_argument(
        "--url",
        default=None,
        help="Override database URL (defaults to effective settings URL)",
    )
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="[init_db] %(levelname)s %(message)s")

    settings = get_settings()
    if args.url:
        settings = settings.model_copy(update={"database_url": args.url, "use_testing_database": False})

    engine = build_engine(settings)
    try:
        if args.drop_tables:
            drop_tables(engine)
            logger.info("Dropped all tables")
        create_tables(engine)
    except SQLAlchemyError as exc:
        logger.error("Could not prepare %s: %s", engine.url.render_as_string(hide_password=True), exc)
        return 1
    finally:
        engine.dispose()

    logger.info("Tables ready on %s", engine.url.render_as_string(hide_password=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
