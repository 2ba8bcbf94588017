from sqlalchemy import BigInteger, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agora.database import Base


class Comment(Base):
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    on_article_id: Mapped[int] = mapped_column(
        BigInteger, ForeignKey("articles.id"), nullable=False
    )
    author_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    author_email: Mapped[str] = mapped_column(String(256), default="")
    content: Mapped[str] = mapped_column(Text, default="")
    # Epoch millis
    create_time: Mapped[int] = mapped_column(BigInteger, default=0)

    __table_args__ = (
        Index("ix_comments_article_time", "on_article_id", "create_time"),
    )

    def __repr__(self) -> str:
        return f"<Comment {self.id} on {self.on_article_id}>"
