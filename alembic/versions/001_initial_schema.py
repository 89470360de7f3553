"""Initial schema for employee records

Revision ID: 001_initial_schema
Revises:
Create Date: 2025-10-14

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create employees table
    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('payroll_number', sa.String(), nullable=False,
                  comment='Business key from the payroll system'),
        sa.Column('forenames', sa.String(), nullable=True),
        sa.Column('surname', sa.String(), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True,
                  comment='Date of birth (0001-01-01 when not supplied on import)'),
        sa.Column('telephone', sa.String(), nullable=True),
        sa.Column('mobile', sa.String(), nullable=True),
        sa.Column('address', sa.String(), nullable=True),
        sa.Column('address2', sa.String(), nullable=True),
        sa.Column('postcode', sa.String(), nullable=True),
        sa.Column('email_home', sa.String(), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True,
                  comment='Employment start date (0001-01-01 when not supplied on import)'),
        sa.PrimaryKeyConstraint('id'),
        comment='Employee personnel records'
    )

    # Create indexes on employees table
    op.create_index('idx_employees_surname', 'employees', ['surname'])
    op.create_index('idx_employees_payroll_number', 'employees', ['payroll_number'])


def downgrade() -> None:
    # Drop employees table and indexes
    op.drop_index('idx_employees_payroll_number', table_name='employees')
    op.drop_index('idx_employees_surname', table_name='employees')
    op.drop_table('employees')
