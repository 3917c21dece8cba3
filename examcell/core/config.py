# /examcell/core/config.py

"""
Runtime configuration, read once from environment variables.

Every value has a default that is good enough for local development, so the
service starts with nothing more than `uvicorn examcell.main:app`. A `.env`
file in the working directory is loaded first.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# --- Database ---
# Any SQLAlchemy URL works; production deployments point this at MySQL or PostgreSQL.
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./examcell.db")

# --- Authentication ---
JWT_SECRET = os.getenv("JWT_SECRET", "change-me-in-production")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "1440"))

# Credentials used by `python -m examcell.db.seed` to create the first staff account.
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin123")

# --- HTTP ---
CORS_ORIGINS = [origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()]

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
