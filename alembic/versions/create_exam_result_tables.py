"""Create classes, students, subjects and users tables

Revision ID: 3a1c9e7f2b10
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a1c9e7f2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the static tables. Per-class marks tables are created at runtime."""
    op.create_table(
        'classes',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('department', sa.String(length=20), nullable=False),
        sa.Column('semester', sa.String(length=20), nullable=False),
        sa.Column('master_code', sa.String(length=20), nullable=False),
        sa.UniqueConstraint('department', 'semester', 'master_code', name='uq_classes_natural_key'),
    )
    op.create_index('ix_classes_id', 'classes', ['id'])

    op.create_table(
        'students',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('seat_number', sa.String(length=255), nullable=False),
        sa.Column('enrollment_number', sa.String(length=255), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=False),
    )
    op.create_index('ix_students_id', 'students', ['id'])
    op.create_index('ix_students_name', 'students', ['name'])
    op.create_index('ix_students_seat_number', 'students', ['seat_number'], unique=True)
    op.create_index('ix_students_enrollment_number', 'students', ['enrollment_number'], unique=True)
    op.create_index('ix_students_class_id', 'students', ['class_id'])

    op.create_table(
        'subjects',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('subject_code', sa.String(length=50), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('abbreviation', sa.String(length=20), nullable=False),
        sa.Column('assessments', sa.JSON(), nullable=False),
        sa.Column('class_id', sa.Integer(), sa.ForeignKey('classes.id'), nullable=False),
        sa.UniqueConstraint('class_id', 'abbreviation', name='uq_subjects_class_abbreviation'),
    )
    op.create_index('ix_subjects_id', 'subjects', ['id'])
    op.create_index('ix_subjects_subject_code', 'subjects', ['subject_code'], unique=True)
    op.create_index('ix_subjects_class_id', 'subjects', ['class_id'])

    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=100), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_username', 'users', ['username'], unique=True)


def downgrade() -> None:
    """Drop the static tables."""
    op.drop_table('users')
    op.drop_table('subjects')
    op.drop_table('students')
    op.drop_table('classes')
