# /examcell/services/database_helpers/user_repository_sql.py

from typing import Dict, Optional

from sqlalchemy.orm import Session

from ...db.models.user_model import User


class UserRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self.db.query(User).filter(User.username == username).first()

    def add_user(self, record: Dict) -> User:
        new_user = User(**record)
        self.db.add(new_user)
        self.db.commit()
        self.db.refresh(new_user)
        return new_user
