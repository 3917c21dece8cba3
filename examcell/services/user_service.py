# /examcell/services/user_service.py

from typing import Optional

from ..core import security
from ..db.models.user_model import User
from .database_service import DatabaseService
from .errors import ConflictError


def authenticate_user(db: DatabaseService, username: str, password: str) -> Optional[User]:
    """Returns the active user if the credentials match, otherwise None."""
    user = db.get_user_by_username(username)
    if user is None or not user.is_active:
        return None
    if not security.verify_password(password, user.hashed_password):
        return None
    return user


def create_user(db: DatabaseService, username: str, password: str) -> User:
    if db.get_user_by_username(username):
        raise ConflictError(f"User '{username}' already exists")
    return db.add_user({"username": username, "hashed_password": security.hash_password(password)})
