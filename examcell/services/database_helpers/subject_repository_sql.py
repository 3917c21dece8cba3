# /examcell/services/database_helpers/subject_repository_sql.py

import logging
from typing import List, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from ...db.models.subject_models import Subject
from ..errors import ConflictError

logger = logging.getLogger(__name__)


class SubjectRepositorySQL:
    def __init__(self, db_session: Session):
        self.db = db_session

    def _commit(self, conflict_message: str):
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            logger.warning("Integrity error: %s", e.orig)
            raise ConflictError(conflict_message)

    def get_all_subjects(self, class_id: Optional[int] = None) -> List[Subject]:
        query = self.db.query(Subject).options(joinedload(Subject.class_))
        if class_id is not None:
            query = query.filter(Subject.classId == class_id)
        return query.order_by(Subject.id).all()

    def get_subject_by_id(self, subject_id: int) -> Optional[Subject]:
        return self.db.query(Subject).filter(Subject.id == subject_id).first()

    def get_subject_by_code(self, subject_code: str) -> Optional[Subject]:
        return self.db.query(Subject).filter(Subject.subjectCode == subject_code).first()

    def get_subject_by_abbreviation(self, class_id: int, abbreviation: str) -> Optional[Subject]:
        return (
            self.db.query(Subject)
            .filter(Subject.classId == class_id, Subject.abbreviation == abbreviation)
            .first()
        )

    def add_subject(self, record: Dict) -> Subject:
        new_subject = Subject(**record)
        self.db.add(new_subject)
        self._commit(f"Subject with code '{record.get('subjectCode')}' already exists")
        self.db.refresh(new_subject)
        return new_subject

    def update_subject(self, subject_id: int, data: Dict) -> Optional[Subject]:
        db_subject = self.get_subject_by_id(subject_id)
        if db_subject:
            for key, value in data.items():
                setattr(db_subject, key, value)
            self._commit(f"Subject with code '{db_subject.subjectCode}' already exists")
            self.db.refresh(db_subject)
        return db_subject

    def delete_subject(self, subject_id: int) -> bool:
        db_subject = self.get_subject_by_id(subject_id)
        if db_subject:
            self.db.delete(db_subject)
            self.db.commit()
            return True
        return False
