"""Initial schema: users, groups, surveys, templates, responses and link tables

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from collections.abc import Sequence

from alembic import op
import sqlalchemy as sa

from surveydesk.migrations.util import get_timestamp_default, get_uuid_type

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels: Sequence[str] | None = None
depends_on: Sequence[str] | None = None


def upgrade() -> None:
    uuid = get_uuid_type()
    now = get_timestamp_default()

    op.create_table(
        'users',
        sa.Column('user_id', uuid, nullable=False),
        sa.Column('username', sa.String(80), nullable=False),
        sa.Column('username_canonical', sa.String(80), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(16), nullable=False, server_default='user'),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.Column('last_login_date', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('user_id'),
        sa.UniqueConstraint('username'),
        sa.UniqueConstraint('username_canonical'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'groups',
        sa.Column('group_id', uuid, nullable=False),
        sa.Column('name', sa.String(120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.PrimaryKeyConstraint('group_id'),
    )

    op.create_table(
        'surveys',
        sa.Column('survey_id', uuid, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('creator_id', uuid, nullable=False),
        sa.Column('status', sa.String(16), nullable=False, server_default='draft'),
        sa.Column('questions', sa.JSON(), nullable=False),
        sa.Column('theme', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.PrimaryKeyConstraint('survey_id'),
    )
    op.create_index('ix_surveys_creator_id', 'surveys', ['creator_id'])
    op.create_index('ix_surveys_status_created', 'surveys', ['status', 'created_at'])

    op.create_table(
        'templates',
        sa.Column('template_id', uuid, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('questions', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.PrimaryKeyConstraint('template_id'),
    )
    op.create_index('ix_templates_title', 'templates', ['title'])

    # survey_id/user_id are lookup references only: responses outlive both
    op.create_table(
        'survey_responses',
        sa.Column('response_id', uuid, nullable=False),
        sa.Column('survey_id', uuid, nullable=False),
        sa.Column('user_id', uuid, nullable=True),
        sa.Column('answers', sa.JSON(), nullable=False),
        sa.Column('submitted_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.PrimaryKeyConstraint('response_id'),
    )
    op.create_index('ix_survey_responses_survey_id', 'survey_responses', ['survey_id'])
    op.create_index('ix_survey_responses_user_id', 'survey_responses', ['user_id'])
    op.create_index('ix_survey_responses_survey_user', 'survey_responses', ['survey_id', 'user_id'])

    op.create_table(
        'group_memberships',
        sa.Column('group_id', uuid, nullable=False),
        sa.Column('user_id', uuid, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.ForeignKeyConstraint(['group_id'], ['groups.group_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.user_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('group_id', 'user_id'),
    )

    op.create_table(
        'survey_group_assignments',
        sa.Column('survey_id', uuid, nullable=False),
        sa.Column('group_id', uuid, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=now),
        sa.ForeignKeyConstraint(['survey_id'], ['surveys.survey_id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['group_id'], ['groups.group_id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('survey_id', 'group_id'),
    )


def downgrade() -> None:
    op.drop_table('survey_group_assignments')
    op.drop_table('group_memberships')

    op.drop_index('ix_survey_responses_survey_user', table_name='survey_responses')
    op.drop_index('ix_survey_responses_user_id', table_name='survey_responses')
    op.drop_index('ix_survey_responses_survey_id', table_name='survey_responses')
    op.drop_table('survey_responses')

    op.drop_index('ix_templates_title', table_name='templates')
    op.drop_table('templates')

    op.drop_index('ix_surveys_status_created', table_name='surveys')
    op.drop_index('ix_surveys_creator_id', table_name='surveys')
    op.drop_table('surveys')

    op.drop_table('groups')
    op.drop_table('users')
