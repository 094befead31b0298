"""registration_checkins

Revision ID: 002_registration_checkins
Revises: 001_initial_schema
Create Date: 2026-10-17 14:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_registration_checkins'
down_revision = '001_initial_schema'
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'registration_checkins',
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('form_submission_id', sa.Integer(),
                  sa.ForeignKey('form_submissions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('checkin_status', sa.String(20), nullable=False, server_default='undone'),
        sa.Column('checked_in_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('checked_in_by', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('event_day_id', sa.String(100), nullable=True),
        sa.Column('event_day_label', sa.String(255), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('registration_checkins')
