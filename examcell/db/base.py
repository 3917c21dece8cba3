# /examcell/db/base.py

# Registry of the static ORM models. `init_db()` and alembic's env.py import
# Base from here so that the metadata holds every table.
# The per-class marks tables are not ORM models; they are created at runtime.

from .base_class import Base

from .models.class_student_models import Class, Student
from .models.subject_models import Subject
from .models.user_model import User
