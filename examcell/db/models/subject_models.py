# /examcell/db/models/subject_models.py

from sqlalchemy import Column, String, Integer, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.orm import relationship

from ..base_class import Base


class Subject(Base):
    """
    SQLAlchemy model representing a subject taught to one Class.

    `assessments` is the ordered list of assessment tags (e.g. ["FA-TH", "SA-TH"]).
    Each tag becomes one `{abbreviation}_{tag}` column in the class's marks table,
    which is why the abbreviation must be unique inside its class.
    """
    __tablename__ = "subjects"
    __table_args__ = (
        UniqueConstraint("class_id", "abbreviation", name="uq_subjects_class_abbreviation"),
    )

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    subjectCode = Column("subject_code", String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    abbreviation = Column(String(20), nullable=False)
    assessments = Column(JSON, nullable=False, default=list)

    classId = Column("class_id", Integer, ForeignKey("classes.id"), nullable=False, index=True)

    class_ = relationship("Class", back_populates="subjects")
