"""initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'tenants',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_tenants_type'), 'tenants', ['type'], unique=False)

    op.create_table(
        'users',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('tenant_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_users_email'), 'users', ['email'], unique=True)
    op.create_index(op.f('ix_users_tenant_id'), 'users', ['tenant_id'], unique=False)

    op.create_table(
        'studios',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('tenant_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_studios_tenant_id'), 'studios', ['tenant_id'], unique=True)

    op.create_table(
        'profiles',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('headshot_url', sa.String(length=500), nullable=True),
        sa.Column('availability', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id'),
    )

    op.create_table(
        'locations',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'skills',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'casting_calls',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('compensation', sa.String(length=255), nullable=True),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('studio_id', sa.String(length=36), nullable=False),
        sa.Column('location_id', sa.String(length=36), nullable=True),
        sa.Column('project_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['studio_id'], ['studios.id']),
        sa.ForeignKeyConstraint(['location_id'], ['locations.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_casting_calls_status'), 'casting_calls', ['status'], unique=False)
    op.create_index(op.f('ix_casting_calls_studio_id'), 'casting_calls', ['studio_id'], unique=False)

    op.create_table(
        'casting_call_skills',
        sa.Column('casting_call_id', sa.String(length=36), nullable=False),
        sa.Column('skill_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['casting_call_id'], ['casting_calls.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['skill_id'], ['skills.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('casting_call_id', 'skill_id'),
    )

    op.create_table(
        'applications',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('profile_id', sa.String(length=36), nullable=False),
        sa.Column('casting_call_id', sa.String(length=36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['profile_id'], ['profiles.id']),
        sa.ForeignKeyConstraint(['casting_call_id'], ['casting_calls.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('casting_call_id', 'profile_id', name='uq_application_call_profile'),
    )
    op.create_index(op.f('ix_applications_status'), 'applications', ['status'], unique=False)
    op.create_index(op.f('ix_applications_profile_id'), 'applications', ['profile_id'], unique=False)
    op.create_index(op.f('ix_applications_casting_call_id'), 'applications', ['casting_call_id'], unique=False)

    op.create_table(
        'messages',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('subject', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('is_read', sa.Boolean(), nullable=False),
        sa.Column('is_archived', sa.Boolean(), nullable=False),
        sa.Column('studio_sender_id', sa.String(length=36), nullable=True),
        sa.Column('talent_sender_id', sa.String(length=36), nullable=True),
        sa.Column('studio_receiver_id', sa.String(length=36), nullable=True),
        sa.Column('talent_receiver_id', sa.String(length=36), nullable=True),
        sa.Column('related_to_project_id', sa.String(length=36), nullable=True),
        sa.Column('related_to_casting_call_id', sa.String(length=36), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['studio_sender_id'], ['studios.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['talent_sender_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['studio_receiver_id'], ['studios.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['talent_receiver_id'], ['profiles.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['related_to_casting_call_id'], ['casting_calls.id'], ondelete='SET NULL'),
        sa.CheckConstraint(
            "(studio_sender_id IS NOT NULL AND talent_receiver_id IS NOT NULL"
            " AND talent_sender_id IS NULL AND studio_receiver_id IS NULL)"
            " OR "
            "(talent_sender_id IS NOT NULL AND studio_receiver_id IS NOT NULL"
            " AND studio_sender_id IS NULL AND talent_receiver_id IS NULL)",
            name='ck_message_one_direction',
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    for column in (
        'is_read', 'studio_sender_id', 'talent_sender_id',
        'studio_receiver_id', 'talent_receiver_id', 'related_to_casting_call_id',
    ):
        op.create_index(op.f(f'ix_messages_{column}'), 'messages', [column], unique=False)


def downgrade() -> None:
    op.drop_table('messages')
    op.drop_table('applications')
    op.drop_table('casting_call_skills')
    op.drop_table('casting_calls')
    op.drop_table('skills')
    op.drop_table('locations')
    op.drop_table('profiles')
    op.drop_table('studios')
    op.drop_table('users')
    op.drop_table('tenants')
