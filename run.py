import argparse
import logging
import sys

import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from baatcheet.core.config import settings
from baatcheet.db.init_db import check_database_connection
from baatcheet.db.session import create_db_engine

logger = logging.getLogger("baatcheet")


def main():
    parser = argparse.ArgumentParser(description="Run the Baatcheet API server")
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to run the server on (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to run the server on (default: {settings.PORT})"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload on code changes (default: based on DEBUG setting)"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # No listener without a database
    try:
        engine = create_db_engine(settings.DATABASE_URL)
        check_database_connection(engine)
        engine.dispose()
    except (SQLAlchemyError, ValueError) as e:
        logger.error(f"Error connecting to the database: {e}")
        sys.exit(1)

    use_reload = args.reload or settings.DEBUG
    logger.info(f"Server is running on http://{args.host}:{args.port}")

    uvicorn.run(
        "baatcheet.main:create_app",
        factory=True,
        host=args.host,
        port=args.port,
        reload=use_reload
    )


if __name__ == "__main__":
    main()
