"""Simple CLI to validate the planning database connection.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer and runs a basic health
check against the planning database.
"""

from liqplan.infrastructure.container import build_database_adapter
from liqplan.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Run a basic connectivity check against the planning database."""
    adapter = build_database_adapter()
    logger = get_app_logger()

    engine = adapter.get_planning_engine()
    logger.info(f"Planning DB: {engine.url}")

    with engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    logger.info("Planning database connection is working.")


if __name__ == "__main__":
    main()
