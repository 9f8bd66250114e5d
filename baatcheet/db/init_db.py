import logging

from alembic import command
from alembic.config import Config
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine

from baatcheet.core.config import settings
from baatcheet.db.base import Base
from baatcheet.db.session import create_db_engine

logger = logging.getLogger("baatcheet")


def init_db(alembic_ini: str = "alembic.ini") -> None:
    """
    Initialize the database by running Alembic migrations.
    """
    try:
        alembic_cfg = Config(alembic_ini)
        command.upgrade(alembic_cfg, "head")
        logger.info("Database migrations applied successfully")
    except Exception as e:
        logger.error(f"Error applying database migrations: {e}")
        raise


def check_database_connection(engine: Engine) -> None:
    """Open one connection and run a trivial query; raises on failure"""
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    logger.info("Database connected successfully")


def create_all_tables(engine: Engine) -> None:
    existing_tables = inspect(engine).get_table_names()

    Base.metadata.create_all(bind=engine)

    new_tables = set(inspect(engine).get_table_names()) - set(existing_tables)
    if new_tables:
        logger.info(f"Created new tables: {new_tables}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    check_database_connection(create_db_engine(settings.DATABASE_URL))
    logger.info("Applying database migrations")
    init_db()
    logger.info("Database is up to date")
