# create_tables.py
import argparse
import logging
import os

from dotenv import load_dotenv

from taskkeeper.config.settings import configure_logging
from taskkeeper.database import create_schema, make_engine

logger = logging.getLogger(__name__)


def create_tables(database_url: str, drop_first: bool = False):
    """Create all tables"""
    engine = make_engine(database_url, os.getenv("DB_SSLMODE"))
    try:
        create_schema(engine, drop_first=drop_first)
        logger.info(f"All tables created on {engine.url.render_as_string(hide_password=True)}")
    finally:
        engine.dispose()


if __name__ == "__main__":
    load_dotenv()
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    parser = argparse.ArgumentParser(description="Create the users and tasks tables")
    parser.add_argument("--drop", action="store_true", help="drop existing tables first")
    args = parser.parse_args()

    url = os.getenv("DATABASE_URL")
    if not url:
        parser.error("DATABASE_URL is not set")
    create_tables(url, drop_first=args.drop)
