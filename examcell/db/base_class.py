# /examcell/db/base_class.py

from sqlalchemy.orm import declarative_base

# Every ORM model in examcell inherits from this single declarative Base.
Base = declarative_base()
