"""Create employees, departments and dept_emp tables

Revision ID: a1c4e2f9b7d3
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a1c4e2f9b7d3'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # The employees sample database may already hold these tables
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing_tables = inspector.get_table_names()

    if 'employees' not in existing_tables:
        op.create_table(
            'employees',
            sa.Column('emp_no', sa.Integer(), autoincrement=False, nullable=False),
            sa.Column('birth_date', sa.Date(), nullable=False),
            sa.Column('first_name', sa.String(length=14), nullable=False),
            sa.Column('last_name', sa.String(length=16), nullable=False),
            sa.Column('gender', sa.String(length=1), nullable=False),
            sa.Column('hire_date', sa.Date(), nullable=False),
            sa.PrimaryKeyConstraint('emp_no')
        )

    if 'departments' not in existing_tables:
        op.create_table(
            'departments',
            sa.Column('dept_no', sa.String(length=4), nullable=False),
            sa.Column('dept_name', sa.String(length=40), nullable=False),
            sa.PrimaryKeyConstraint('dept_no'),
            sa.UniqueConstraint('dept_name')
        )

    if 'dept_emp' not in existing_tables:
        op.create_table(
            'dept_emp',
            sa.Column('emp_no', sa.Integer(), autoincrement=False, nullable=False),
            sa.Column('dept_no', sa.String(length=4), nullable=False),
            sa.Column('from_date', sa.Date(), nullable=False),
            sa.Column('to_date', sa.Date(), nullable=False),
            sa.CheckConstraint('from_date <= to_date', name='check_dept_emp_date_range'),
            sa.ForeignKeyConstraint(['emp_no'], ['employees.emp_no'], ondelete='CASCADE'),
            sa.ForeignKeyConstraint(['dept_no'], ['departments.dept_no'], ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('emp_no')
        )
        op.create_index(op.f('ix_dept_emp_dept_no'), 'dept_emp', ['dept_no'], unique=False)


def downgrade():
    op.drop_index(op.f('ix_dept_emp_dept_no'), table_name='dept_emp')
    op.drop_table('dept_emp')
    op.drop_table('departments')
    op.drop_table('employees')
