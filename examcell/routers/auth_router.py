# /examcell/routers/auth_router.py

"""
This module defines the API for authentication:
- User login and token generation (`/login`)
- Retrieving the current user's profile (`/me`)
"""

from fastapi import APIRouter, Depends, HTTPException, status

from ..core import security
from ..core.deps import get_current_user
from ..db.models.user_model import User as UserModel
from ..models.user_model import LoginRequest, Token, User
from ..services import user_service
from ..services.database_service import DatabaseService, get_db_service

router = APIRouter()


@router.post("/login", response_model=Token)
def login_for_access_token(credentials: LoginRequest, db: DatabaseService = Depends(get_db_service)):
    """
    Checks the username and password and, on success, returns a bearer token
    for every other `/api` route.
    """
    user = user_service.authenticate_user(db, username=credentials.username, password=credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(access_token=security.create_access_token(subject=user.id), token_type="bearer")


@router.get("/me", response_model=User)
def read_current_user(current_user: UserModel = Depends(get_current_user)):
    """
    Retrieves the profile of the currently authenticated user.
    """
    return current_user
