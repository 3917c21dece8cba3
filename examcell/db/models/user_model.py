# /examcell/db/models/user_model.py

from sqlalchemy import Column, String, Integer, Boolean

from ..base_class import Base


class User(Base):
    """
    A staff account. Used only to issue and resolve bearer tokens.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
