"""Add assignsubmission_automark table

Revision ID: automark_001
Revises: 
Create Date: 2024-03-17
"""
from alembic import op
import sqlalchemy as sa

revision = 'automark_001'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        'assignsubmission_automark',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('assignment', sa.Integer(), nullable=False),
        sa.Column('submission', sa.Integer(), nullable=False),
        sa.Column('value', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_assignsubmission_automark_submission',
        'assignsubmission_automark',
        ['submission'],
    )

def downgrade():
    op.drop_index('ix_assignsubmission_automark_submission', table_name='assignsubmission_automark')
    op.drop_table('assignsubmission_automark')
