"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa

revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _image_columns():
    return [
        sa.Column('image', sa.String(length=1024), nullable=True),
        sa.Column('image_ref', sa.String(length=512), nullable=True),
    ]


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.Enum('user', 'admin', name='user_role'), nullable=False, server_default='user'),
        sa.Column('avatar', sa.String(length=1024), nullable=True),
        sa.Column('avatar_ref', sa.String(length=512), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_user_email', 'user', ['email'], unique=True)

    op.create_table(
        'password_reset_codes',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('code', sa.String(length=255), nullable=False, unique=True),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('status', sa.Enum('valid', 'used', name='reset_code_status'), nullable=False, server_default='valid'),
        *_timestamps(),
    )
    op.create_index('idx_password_reset_codes_user_id', 'password_reset_codes', ['user_id'])

    op.create_table(
        'revoked_tokens',
        sa.Column('token_hash', sa.String(length=64), primary_key=True),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('revoked_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('idx_revoked_tokens_expires_at', 'revoked_tokens', ['expires_at'])

    op.create_table(
        'projects',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('author_id', sa.String(length=64), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        *_image_columns(),
        *_timestamps(),
    )
    op.create_index('idx_projects_author_id_created_at', 'projects', ['author_id', sa.text('created_at DESC')])

    op.create_table(
        'skills',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('author_id', sa.String(length=64), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_image_columns(),
        *_timestamps(),
    )
    op.create_index('idx_skills_author_id_created_at', 'skills', ['author_id', sa.text('created_at DESC')])

    op.create_table(
        'project_skills',
        sa.Column('project_id', sa.String(length=64), sa.ForeignKey('projects.id', ondelete='CASCADE'), primary_key=True),
        sa.Column('skill_id', sa.String(length=64), sa.ForeignKey('skills.id', ondelete='CASCADE'), primary_key=True),
    )

    op.create_table(
        'posts',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('author_id', sa.String(length=64), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('tags', sa.JSON(), nullable=False),
        *_image_columns(),
        *_timestamps(),
    )
    op.create_index('ix_posts_slug', 'posts', ['slug'], unique=True)
    op.create_index('idx_posts_author_id_created_at', 'posts', ['author_id', sa.text('created_at DESC')])

    op.create_table(
        'certificates',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('author_id', sa.String(length=64), sa.ForeignKey('user.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        *_image_columns(),
        *_timestamps(),
    )
    op.create_index('idx_certificates_author_id_created_at', 'certificates', ['author_id', sa.text('created_at DESC')])

    op.create_table(
        'contacts',
        sa.Column('id', sa.String(length=64), primary_key=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('linkedin', sa.String(length=512), nullable=True),
        sa.Column('github', sa.String(length=512), nullable=True),
        sa.Column('twitter', sa.String(length=512), nullable=True),
        sa.Column('instagram', sa.String(length=512), nullable=True),
        sa.Column('facebook', sa.String(length=512), nullable=True),
        *_timestamps(),
    )


def downgrade():
    op.drop_table('contacts')
    op.drop_table('certificates')
    op.drop_table('posts')
    op.drop_table('project_skills')
    op.drop_table('skills')
    op.drop_table('projects')
    op.drop_table('revoked_tokens')
    op.drop_table('password_reset_codes')
    op.drop_table('user')
    sa.Enum(name='reset_code_status').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='user_role').drop(op.get_bind(), checkfirst=True)
