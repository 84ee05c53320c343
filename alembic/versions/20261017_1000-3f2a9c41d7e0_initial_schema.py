"""initial_schema

Revision ID: 3f2a9c41d7e0
Revises:
Create Date: 2026-10-17 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f2a9c41d7e0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create users with their relation sets, chats, messages and notifications.

    Composite primary keys on relation_members and chat_members, and the
    unique (recipient_login, message_id) pair on notifications, reject
    duplicate rows written by racing requests.
    """
    op.create_table('relation_sets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('kind', sa.Enum('CONTACT', 'BLOCK', name='relation_kind', native_enum=False), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table('users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('login', sa.String(length=50), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=False),
        sa.Column('status', sa.String(length=140), nullable=True),
        sa.Column('contact_set_id', sa.Integer(), nullable=False),
        sa.Column('block_set_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['block_set_id'], ['relation_sets.id']),
        sa.ForeignKeyConstraint(['contact_set_id'], ['relation_sets.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('block_set_id'),
        sa.UniqueConstraint('contact_set_id')
    )
    op.create_index('ix_users_login', 'users', ['login'], unique=True)

    op.create_table('relation_members',
        sa.Column('set_id', sa.Integer(), nullable=False),
        sa.Column('member_login', sa.String(length=50), nullable=False),
        sa.Column('added_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['member_login'], ['users.login'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['set_id'], ['relation_sets.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('set_id', 'member_login')
    )
    op.create_index('idx_relation_members_login', 'relation_members', ['member_login'], unique=False)

    op.create_table('chats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('initial_sender', sa.String(length=50), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['initial_sender'], ['users.login']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_chats_initial_sender', 'chats', ['initial_sender'], unique=False)

    op.create_table('chat_members',
        sa.Column('chat_id', sa.Integer(), nullable=False),
        sa.Column('member_login', sa.String(length=50), nullable=False),
        sa.Column('joined_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['member_login'], ['users.login'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('chat_id', 'member_login')
    )
    op.create_index('idx_chat_members_login', 'chat_members', ['member_login'], unique=False)

    op.create_table('messages',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('chat_id', sa.Integer(), nullable=False),
        sa.Column('author', sa.String(length=50), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), nullable=False),
        sa.Column('text', sa.Text(), nullable=False),
        sa.Column('edited_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['author'], ['users.login']),
        sa.ForeignKeyConstraint(['chat_id'], ['chats.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_messages_chat_timestamp_id', 'messages', ['chat_id', 'timestamp', 'id'], unique=False)

    op.create_table('notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('recipient_login', sa.String(length=50), nullable=False),
        sa.Column('message_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['message_id'], ['messages.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_login'], ['users.login'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('recipient_login', 'message_id', name='uq_notifications_recipient_message')
    )
    op.create_index('idx_notifications_recipient', 'notifications', ['recipient_login'], unique=False)
    op.create_index('idx_notifications_message', 'notifications', ['message_id'], unique=False)


def downgrade() -> None:
    """Drop all messenger tables."""
    op.drop_index('idx_notifications_message', table_name='notifications')
    op.drop_index('idx_notifications_recipient', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('idx_messages_chat_timestamp_id', table_name='messages')
    op.drop_table('messages')
    op.drop_index('idx_chat_members_login', table_name='chat_members')
    op.drop_table('chat_members')
    op.drop_index('ix_chats_initial_sender', table_name='chats')
    op.drop_table('chats')
    op.drop_index('idx_relation_members_login', table_name='relation_members')
    op.drop_table('relation_members')
    op.drop_index('ix_users_login', table_name='users')
    op.drop_table('users')
    op.drop_table('relation_sets')
