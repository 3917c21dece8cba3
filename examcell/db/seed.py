# /examcell/db/seed.py

"""
Creates the static tables and the first staff account.

    python -m examcell.db.seed

Re-running is harmless: an existing admin user is left untouched.
"""

import logging

from ..core.config import ADMIN_USERNAME, ADMIN_PASSWORD
from ..core.logging_config import configure_logging
from ..services import user_service
from ..services.database_service import DatabaseService
from ..services.errors import ConflictError
from .database import SessionLocal, init_db

logger = logging.getLogger(__name__)


def seed_admin_user(db: DatabaseService, username: str = ADMIN_USERNAME, password: str = ADMIN_PASSWORD) -> bool:
    try:
        user_service.create_user(db, username=username, password=password)
    except ConflictError:
        logger.info("User '%s' already exists; nothing to seed", username)
        return False
    logger.info("Admin user '%s' created", username)
    return True


def main():
    configure_logging()
    init_db()
    session = SessionLocal()
    try:
        seed_admin_user(DatabaseService(db_session=session))
    finally:
        session.close()


if __name__ == "__main__":
    main()
