"""Initial forum schema

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(128), nullable=False, unique=True),
        sa.Column("email", sa.String(256), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(256), server_default=""),
        sa.Column("url", sa.String(512), server_default=""),
        sa.Column("intro", sa.Text, server_default=""),
        sa.Column("city", sa.String(128), server_default=""),
        sa.Column("role", sa.String(32), server_default="member"),
        sa.Column("status", sa.String(32), server_default="valid"),
        sa.Column("update_time", sa.BigInteger, server_default="0"),
    )

    # Articles; ids are epoch millis assigned by the writer
    op.create_table(
        "articles",
        sa.Column("id", sa.BigInteger, primary_key=True, autoincrement=False),
        sa.Column("title", sa.String(512), nullable=False),
        sa.Column("content", sa.Text, server_default=""),
        sa.Column("type", sa.String(32), server_default="normal"),
        sa.Column("status", sa.String(32), server_default="valid"),
        sa.Column("author_id", sa.Integer, nullable=True),
        sa.Column("author_email", sa.String(256), server_default=""),
        sa.Column("tags", sa.String(512), server_default=""),
        sa.Column("city", sa.String(128), server_default=""),
        sa.Column("create_time", sa.BigInteger, server_default="0"),
        sa.Column("update_time", sa.BigInteger, server_default="0"),
        sa.Column("latest_cmt_time", sa.BigInteger, server_default="0"),
        sa.Column("comment_count", sa.Integer, server_default="0"),
        sa.Column("view_count", sa.Integer, server_default="0"),
        sa.Column("good_count", sa.Integer, server_default="0"),
        sa.Column("reward_point", sa.Integer, server_default="0"),
        sa.Column("reward_content", sa.Text, server_default=""),
        sa.Column("reddit_score", sa.Float, server_default="0"),
        sa.Column("client_article_id", sa.String(64), server_default=""),
        sa.Column("permalink", sa.String(256), server_default=""),
    )
    op.create_index("ix_articles_type", "articles", ["type"])
    op.create_index("ix_articles_status", "articles", ["status"])
    op.create_index("ix_articles_author_id", "articles", ["author_id"])
    op.create_index("ix_articles_city", "articles", ["city"])
    op.create_index("ix_articles_client_article_id", "articles", ["client_article_id"])

    # Tags
    op.create_table(
        "tags",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(128), nullable=False, unique=True),
        sa.Column("reference_count", sa.Integer, server_default="0"),
    )

    # Tag -> article index
    op.create_table(
        "tag_article",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("tag_id", sa.Integer, sa.ForeignKey("tags.id"), nullable=False),
        sa.Column("article_id", sa.BigInteger, sa.ForeignKey("articles.id"), nullable=False),
    )
    op.create_index(
        "ix_tag_article_tag_article", "tag_article", ["tag_id", "article_id"], unique=True
    )

    # Comments
    op.create_table(
        "comments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("on_article_id", sa.BigInteger, sa.ForeignKey("articles.id"), nullable=False),
        sa.Column("author_id", sa.Integer, nullable=True),
        sa.Column("author_email", sa.String(256), server_default=""),
        sa.Column("content", sa.Text, server_default=""),
        sa.Column("create_time", sa.BigInteger, server_default="0"),
    )
    op.create_index("ix_comments_article_time", "comments", ["on_article_id", "create_time"])


def downgrade() -> None:
    op.drop_table("comments")
    op.drop_table("tag_article")
    op.drop_table("tags")
    op.drop_table("articles")
    op.drop_table("users")
