from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from agora.database import Base


class Tag(Base):
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    title: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    reference_count: Mapped[int] = mapped_column(Integer, default=0)


class TagArticle(Base):
    """One row per (tag, article) pair; the tag -> article index."""

    __tablename__ = "tag_article"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tag_id: Mapped[int] = mapped_column(ForeignKey("tags.id"), nullable=False)
    article_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("articles.id"), nullable=False
    )

    __table_args__ = (
        Index("ix_tag_article_tag_article", "tag_id", "article_id", unique=True),
    )
