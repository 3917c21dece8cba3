# /examcell/core/deps.py

import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from ..db.database import get_db
from ..db.models.user_model import User
from . import security

logger = logging.getLogger(__name__)

# auto_error=False so a missing header produces our own 401 body instead of FastAPI's 403.
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """
    Resolves the bearer token on the request to an active User.

    Every authenticated router is mounted with this dependency, so a request
    without a valid token is rejected before any business logic runs.
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise unauthorized

    try:
        user_id = int(security.decode_access_token(credentials.credentials))
    except ValueError as e:
        logger.info("Rejected bearer token: %s", e)
        raise unauthorized

    user = db.get(User, user_id)
    if user is None or not user.is_active:
        raise unauthorized
    return user
