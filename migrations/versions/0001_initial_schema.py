"""initial schema

Revision ID: initial_schema_001
Revises:
Create Date: 2026-10-17 09:00:00

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = 'initial_schema_001'
down_revision = None
branch_labels = None
depends_on = None

JSON = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql')

USER_ROLE = sa.Enum('SUBSCRIBER', 'CONTRIBUTOR', 'EDITOR', 'ADMIN', name='user_role', native_enum=False)
CONTENT_STATUS = sa.Enum('PUBLISHED', 'DRAFT', name='content_status', native_enum=False)
TOOLBOX_SECTION = sa.Enum('CONTROLLER', 'FPA', name='toolbox_section', native_enum=False)
TOOLBOX_STATUS = sa.Enum(
    'DEVELOPING', 'TESTING', 'BETA_READY', 'READY_FOR_COMMERCIAL_USE', name='toolbox_status', native_enum=False
)
OBJECT_VISIBILITY = sa.Enum('PRIVATE', 'PUBLIC', name='object_visibility', native_enum=False)


def _timestamps():
    return [
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    ]


def upgrade():
    op.create_table(
        'user',
        *_timestamps(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=True),
        sa.Column('auth_provider', sa.String(length=32), nullable=False),
        sa.Column('external_id', sa.String(length=255), nullable=True),
        sa.Column('first_name', sa.String(length=120), nullable=True),
        sa.Column('last_name', sa.String(length=120), nullable=True),
        sa.Column('profile_image_url', sa.String(length=1024), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('company', sa.String(length=255), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('expertise_tags', JSON, nullable=True),
        sa.Column('points', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('badges', JSON, nullable=True),
        sa.Column('role', USER_ROLE, nullable=False, server_default='SUBSCRIBER'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('external_id'),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'user_invitation',
        *_timestamps(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('role', USER_ROLE, nullable=False),
        sa.Column('invited_by_id', sa.String(length=36), nullable=True),
        sa.Column('accepted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('revoked_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['invited_by_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_user_invitation_invited_by_id', 'user_invitation', ['invited_by_id'], unique=False)

    op.create_table(
        'news_category',
        *_timestamps(),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('slug', sa.String(length=120), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(length=64), nullable=True),
        sa.Column('color', sa.String(length=32), nullable=True),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )
    op.create_index('ix_news_category_slug', 'news_category', ['slug'], unique=True)

    op.create_table(
        'news_article',
        *_timestamps(),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('excerpt', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('thumbnail_url', sa.String(length=1024), nullable=True),
        sa.Column('source_url', sa.String(length=1024), nullable=True),
        sa.Column('source_name', sa.String(length=255), nullable=True),
        sa.Column('author_id', sa.String(length=36), nullable=True),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', CONTENT_STATUS, nullable=False, server_default='PUBLISHED'),
        sa.ForeignKeyConstraint(['author_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_news_article_author_id', 'news_article', ['author_id'], unique=False)
    op.create_index('ix_news_article_published', 'news_article', ['published_at'], unique=False)
    op.create_index('ix_news_article_status_archived', 'news_article', ['status', 'is_archived'], unique=False)

    op.create_table(
        'article_category',
        sa.Column('article_id', sa.String(length=36), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['article_id'], ['news_article.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['news_category.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('article_id', 'category_id'),
    )

    op.create_table(
        'news_comment',
        *_timestamps(),
        sa.Column('article_id', sa.String(length=36), nullable=False),
        sa.Column('author_id', sa.String(length=36), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.ForeignKeyConstraint(['article_id'], ['news_article.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_news_comment_article_id', 'news_comment', ['article_id'], unique=False)
    op.create_index('ix_news_comment_author_id', 'news_comment', ['author_id'], unique=False)

    op.create_table(
        'podcast_episode',
        *_timestamps(),
        sa.Column('episode_number', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('audio_url', sa.String(length=1024), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('duration', sa.String(length=32), nullable=True),
        sa.Column('host_name', sa.String(length=255), nullable=True),
        sa.Column('guest_name', sa.String(length=255), nullable=True),
        sa.Column('guest_title', sa.String(length=255), nullable=True),
        sa.Column('play_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_archived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('published_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('status', CONTENT_STATUS, nullable=False, server_default='PUBLISHED'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('episode_number'),
    )

    op.create_table(
        'podcast_category',
        sa.Column('podcast_id', sa.String(length=36), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(['podcast_id'], ['podcast_episode.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['category_id'], ['news_category.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('podcast_id', 'category_id'),
    )

    op.create_table(
        'forum_category',
        *_timestamps(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(length=64), nullable=True),
        sa.Column('color', sa.String(length=32), nullable=True),
        sa.Column('discussion_count', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'forum_discussion',
        *_timestamps(),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=False),
        sa.Column('author_id', sa.String(length=36), nullable=True),
        sa.Column('is_pinned', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_locked', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('reply_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_reply_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('status', CONTENT_STATUS, nullable=False, server_default='PUBLISHED'),
        sa.ForeignKeyConstraint(['category_id'], ['forum_category.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_forum_discussion_category_id', 'forum_discussion', ['category_id'], unique=False)
    op.create_index('ix_forum_discussion_author_id', 'forum_discussion', ['author_id'], unique=False)
    op.create_index(
        'ix_forum_discussion_category_last_reply', 'forum_discussion', ['category_id', 'last_reply_at'], unique=False
    )

    op.create_table(
        'forum_reply',
        *_timestamps(),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('discussion_id', sa.String(length=36), nullable=False),
        sa.Column('author_id', sa.String(length=36), nullable=True),
        sa.Column('parent_reply_id', sa.String(length=36), nullable=True),
        sa.Column('likes', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['discussion_id'], ['forum_discussion.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['user.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['parent_reply_id'], ['forum_reply.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_forum_reply_discussion_id', 'forum_reply', ['discussion_id'], unique=False)
    op.create_index('ix_forum_reply_author_id', 'forum_reply', ['author_id'], unique=False)
    op.create_index('ix_forum_reply_parent_reply_id', 'forum_reply', ['parent_reply_id'], unique=False)

    op.create_table(
        'resource',
        *_timestamps(),
        sa.Column('title', sa.String(length=500), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('type', sa.String(length=32), nullable=False),
        sa.Column('category', sa.String(length=120), nullable=False),
        sa.Column('url', sa.String(length=1024), nullable=True),
        sa.Column('file_url', sa.String(length=1024), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('duration', sa.String(length=32), nullable=True),
        sa.Column('difficulty', sa.String(length=32), nullable=True),
        sa.Column('download_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rating_total', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('rating_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_free', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('author_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['author_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_resource_author_id', 'resource', ['author_id'], unique=False)
    op.create_index('ix_resource_type_category', 'resource', ['type', 'category'], unique=False)

    op.create_table(
        'resource_rating',
        *_timestamps(),
        sa.Column('resource_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['resource_id'], ['resource.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('resource_id', 'user_id', name='uq_resource_rating_user'),
    )
    op.create_index('ix_resource_rating_resource_id', 'resource_rating', ['resource_id'], unique=False)

    op.create_table(
        'toolbox_app',
        *_timestamps(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('link', sa.String(length=1024), nullable=True),
        sa.Column('image_url', sa.String(length=1024), nullable=True),
        sa.Column('section', TOOLBOX_SECTION, nullable=False, server_default='CONTROLLER'),
        sa.Column('status', TOOLBOX_STATUS, nullable=False, server_default='DEVELOPING'),
        sa.Column('display_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'subscriber',
        *_timestamps(),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('categories', JSON, nullable=True),
        sa.Column('frequency', sa.String(length=16), nullable=False, server_default='weekly'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('confirmed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    op.create_table(
        'poll',
        *_timestamps(),
        sa.Column('question', sa.Text(), nullable=False),
        sa.Column('options', JSON, nullable=False),
        sa.Column('total_votes', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['created_by_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_poll_created_by_id', 'poll', ['created_by_id'], unique=False)

    op.create_table(
        'poll_vote',
        *_timestamps(),
        sa.Column('poll_id', sa.String(length=36), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=False),
        sa.Column('option_index', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['poll_id'], ['poll.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('poll_id', 'user_id', name='uq_poll_vote_user'),
    )
    op.create_index('ix_poll_vote_poll_id', 'poll_vote', ['poll_id'], unique=False)

    # Likes reference several target tables, so target_id carries no foreign key
    op.create_table(
        'content_like',
        *_timestamps(),
        sa.Column('target_type', sa.String(length=32), nullable=False),
        sa.Column('target_id', sa.String(length=36), nullable=False),
        sa.Column('actor_key', sa.String(length=128), nullable=False),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('target_type', 'target_id', 'actor_key', name='uq_like_target_actor'),
    )
    op.create_index('ix_like_target', 'content_like', ['target_type', 'target_id'], unique=False)
    op.create_index('ix_content_like_user_id', 'content_like', ['user_id'], unique=False)

    op.create_table(
        'stored_object',
        *_timestamps(),
        sa.Column('object_path', sa.String(length=1024), nullable=False),
        sa.Column('purpose', sa.String(length=32), nullable=False),
        sa.Column('owner_id', sa.String(length=36), nullable=True),
        sa.Column('content_type', sa.String(length=200), nullable=False),
        sa.Column('declared_size', sa.Integer(), nullable=False),
        sa.Column('original_name', sa.String(length=500), nullable=True),
        sa.Column('visibility', OBJECT_VISIBILITY, nullable=False, server_default='PRIVATE'),
        sa.Column('finalized_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['owner_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('object_path'),
    )
    op.create_index('ix_stored_object_owner_id', 'stored_object', ['owner_id'], unique=False)

    op.create_table(
        'seed_marker',
        *_timestamps(),
        sa.Column('version', sa.String(length=32), nullable=False),
        sa.Column('summary', JSON, nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('version'),
    )

    op.create_table(
        'audit_log',
        *_timestamps(),
        sa.Column('user_id', sa.String(length=36), nullable=True),
        sa.Column('action', sa.String(length=128), nullable=False),
        sa.Column('entity_type', sa.String(length=128), nullable=False),
        sa.Column('entity_id', sa.String(length=36), nullable=True),
        sa.Column('meta', JSON, nullable=True),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_audit_log_user_id', 'audit_log', ['user_id'], unique=False)


def downgrade():
    op.drop_index('ix_audit_log_user_id', table_name='audit_log')
    op.drop_table('audit_log')
    op.drop_table('seed_marker')
    op.drop_index('ix_stored_object_owner_id', table_name='stored_object')
    op.drop_table('stored_object')
    op.drop_index('ix_content_like_user_id', table_name='content_like')
    op.drop_index('ix_like_target', table_name='content_like')
    op.drop_table('content_like')
    op.drop_index('ix_poll_vote_poll_id', table_name='poll_vote')
    op.drop_table('poll_vote')
    op.drop_index('ix_poll_created_by_id', table_name='poll')
    op.drop_table('poll')
    op.drop_table('subscriber')
    op.drop_table('toolbox_app')
    op.drop_index('ix_resource_rating_resource_id', table_name='resource_rating')
    op.drop_table('resource_rating')
    op.drop_index('ix_resource_type_category', table_name='resource')
    op.drop_index('ix_resource_author_id', table_name='resource')
    op.drop_table('resource')
    op.drop_index('ix_forum_reply_parent_reply_id', table_name='forum_reply')
    op.drop_index('ix_forum_reply_author_id', table_name='forum_reply')
    op.drop_index('ix_forum_reply_discussion_id', table_name='forum_reply')
    op.drop_table('forum_reply')
    op.drop_index('ix_forum_discussion_category_last_reply', table_name='forum_discussion')
    op.drop_index('ix_forum_discussion_author_id', table_name='forum_discussion')
    op.drop_index('ix_forum_discussion_category_id', table_name='forum_discussion')
    op.drop_table('forum_discussion')
    op.drop_table('forum_category')
    op.drop_table('podcast_category')
    op.drop_table('podcast_episode')
    op.drop_index('ix_news_comment_author_id', table_name='news_comment')
    op.drop_index('ix_news_comment_article_id', table_name='news_comment')
    op.drop_table('news_comment')
    op.drop_table('article_category')
    op.drop_index('ix_news_article_status_archived', table_name='news_article')
    op.drop_index('ix_news_article_published', table_name='news_article')
    op.drop_index('ix_news_article_author_id', table_name='news_article')
    op.drop_table('news_article')
    op.drop_index('ix_news_category_slug', table_name='news_category')
    op.drop_table('news_category')
    op.drop_index('ix_user_invitation_invited_by_id', table_name='user_invitation')
    op.drop_table('user_invitation')
    op.drop_index('ix_user_email', table_name='user')
    op.drop_table('user')
