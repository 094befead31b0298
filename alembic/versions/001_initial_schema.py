"""initial_schema

Revision ID: 001_initial_schema
Revises: 
Create Date: 2026-10-17 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('id', sa.Integer(), primary_key=True, index=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _form_columns():
    return [
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sections', sa.JSON(), nullable=True),
        sa.Column('fields', sa.JSON(), nullable=True),
        sa.Column('general_info', sa.JSON(), nullable=True),
        sa.Column('actions', sa.JSON(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        *_timestamps(),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('role', sa.Enum('organizer', 'participant', name='userrole'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        'events',
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('publish_status', sa.String(20), nullable=True),
        sa.Column('keywords', sa.JSON(), nullable=True),
        sa.Column('registration_form_ids', sa.JSON(), nullable=True),
        sa.Column('submission_form_ids', sa.JSON(), nullable=True),
        sa.Column('evaluation_form_ids', sa.JSON(), nullable=True),
        sa.Column('committee_ids', sa.JSON(), nullable=True),
    )

    op.create_table('registration_forms', *_timestamps(), *_form_columns())
    op.create_table('evaluation_forms', *_timestamps(), *_form_columns())

    op.create_table(
        'form_submissions',
        *_timestamps(),
        sa.Column('form_id', sa.Integer(), sa.ForeignKey('registration_forms.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('event_title', sa.String(255), nullable=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('participant_user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True, index=True),
        sa.Column('submitted_by', sa.String(255), nullable=True),
        sa.Column('subscription_type', sa.String(20), nullable=True),
        sa.Column('entity_name', sa.String(255), nullable=True),
        sa.Column('role', sa.String(20), nullable=True),
        sa.Column('general_info', sa.JSON(), nullable=True),
        sa.Column('answers', sa.JSON(), nullable=True),
        sa.Column('decision_status', sa.String(20), nullable=True),
        sa.Column('decision_comment', sa.Text(), nullable=True),
        sa.Column('decision_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('decided_by', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('accepted_event_id', sa.Integer(), sa.ForeignKey('events.id'), nullable=True, index=True),
        sa.Column('dispatching_status', sa.String(20), nullable=True),
        sa.Column('approval_status', sa.String(20), nullable=True),
        sa.Column('approval_comment', sa.Text(), nullable=True),
    )

    op.create_table(
        'form_answers',
        *_timestamps(),
        sa.Column('submission_id', sa.Integer(), sa.ForeignKey('form_submissions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('form_id', sa.Integer(), sa.ForeignKey('registration_forms.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('field_id', sa.String(100), nullable=False),
        sa.Column('field_label', sa.String(500), nullable=False),
        sa.Column('answer_value', sa.Text(), nullable=True),
        sa.Column('answer_type', sa.String(20), nullable=False),
        sa.Column('is_general_info', sa.Boolean(), nullable=True),
        sa.Column('registration_type', sa.String(20), nullable=True),
    )

    op.create_table(
        'evaluation_answers',
        *_timestamps(),
        sa.Column('evaluation_form_id', sa.Integer(), sa.ForeignKey('evaluation_forms.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True, index=True),
        sa.Column('submitted_by', sa.String(255), nullable=True),
        sa.Column('general_info', sa.JSON(), nullable=True),
        sa.Column('answers', sa.JSON(), nullable=True),
    )

    op.create_table(
        'committees',
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('fields_of_intervention', sa.JSON(), nullable=True),
    )

    op.create_table(
        'committee_members',
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('title', sa.String(50), nullable=True),
        sa.Column('gender', sa.String(20), nullable=True),
        sa.Column('nationality', sa.String(100), nullable=True),
        sa.Column('email', sa.String(255), nullable=False, index=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('preferred_language', sa.String(10), nullable=True),
        sa.Column('affiliation', sa.JSON(), nullable=True),
        sa.Column('research_domains', sa.JSON(), nullable=True),
        sa.Column('identifiers', sa.JSON(), nullable=True),
    )

    op.create_table(
        'jury_members',
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, unique=True),
        sa.Column('first_name', sa.String(255), nullable=False),
        sa.Column('last_name', sa.String(255), nullable=False),
        sa.Column('title', sa.String(50), nullable=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True, index=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('affiliation', sa.JSON(), nullable=True),
        sa.Column('research_domains', sa.JSON(), nullable=True),
        sa.Column('profile_completed', sa.Boolean(), nullable=True),
    )

    op.create_table(
        'dispatch_submissions',
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('form_id', sa.Integer(), nullable=False),
        sa.Column('dispatching', sa.JSON(), nullable=True),
        sa.Column('deadline', sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint('user_id', 'event_id', 'form_id', name='uq_dispatch_user_event_form'),
    )

    op.create_table(
        'participant_reviews',
        *_timestamps(),
        sa.Column('participant_id', sa.Integer(), sa.ForeignKey('committee_members.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('form_id', sa.Integer(), nullable=False),
        sa.Column('submission_id', sa.Integer(), nullable=False, index=True),
        sa.Column('submission_type', sa.String(20), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('answers', sa.JSON(), nullable=True),
        sa.UniqueConstraint('participant_id', 'submission_id', 'form_id', name='uq_review_participant_submission_form'),
    )

    op.create_table(
        'badge_templates',
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('title', sa.String(255), nullable=False, index=True),
        sa.Column('background_image', sa.Text(), nullable=True),
        sa.Column('background_image_type', sa.String(20), nullable=True),
        sa.Column('width', sa.Integer(), nullable=False),
        sa.Column('height', sa.Integer(), nullable=False),
        sa.Column('elements', sa.JSON(), nullable=True),
    )

    op.create_table(
        'participants_badge',
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('event_id', sa.Integer(), sa.ForeignKey('events.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('form_submission_id', sa.Integer(), sa.ForeignKey('form_submissions.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('badge_template_id', sa.Integer(), sa.ForeignKey('badge_templates.id'), nullable=True),
        sa.Column('badge_image_url', sa.String(500), nullable=False, index=True),
        sa.Column('badge_public_id', sa.String(255), nullable=True),
        sa.Column('participant_name', sa.String(255), nullable=False),
        sa.Column('participant_email', sa.String(255), nullable=True),
        sa.Column('participant_phone', sa.String(50), nullable=True),
        sa.Column('participant_organization', sa.String(255), nullable=True),
        sa.Column('registration_type', sa.String(20), nullable=True),
    )

    op.create_table(
        'email_templates',
        *_timestamps(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, index=True),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('subject', sa.String(255), nullable=False),
        sa.Column('body', sa.Text(), nullable=False),
        sa.Column('placeholders', sa.JSON(), nullable=True),
        sa.Column('attachments', sa.JSON(), nullable=True),
    )


def downgrade() -> None:
    for table in [
        'email_templates',
        'participants_badge',
        'badge_templates',
        'participant_reviews',
        'dispatch_submissions',
        'jury_members',
        'committee_members',
        'committees',
        'evaluation_answers',
        'form_answers',
        'form_submissions',
        'evaluation_forms',
        'registration_forms',
        'events',
        'users',
    ]:
        op.drop_table(table)
    sa.Enum(name='userrole').drop(op.get_bind(), checkfirst=True)
