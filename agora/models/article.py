import datetime as dt

from sqlalchemy import BigInteger, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from agora.database import Base

ARTICLE_TYPE_NORMAL = "normal"
ARTICLE_TYPE_DISCUSSION = "discussion"
ARTICLE_TYPE_CITY_BROADCAST = "city_broadcast"
ARTICLE_TYPE_THOUGHT = "thought"

ARTICLE_STATUS_VALID = "valid"
ARTICLE_STATUS_INVALID = "invalid"

EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


def generate_id(when: dt.datetime | None = None) -> int:
    """Epoch-millis id, so that id order follows creation order."""
    when = when or dt.datetime.now(dt.timezone.utc)
    if when.tzinfo is None:
        when = when.replace(tzinfo=dt.timezone.utc)
    return (when - EPOCH) // dt.timedelta(milliseconds=1)


class Article(Base):
    __tablename__ = "articles"

    # Assigned by the writer from the creation instant, see generate_id()
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(512), nullable=False)
    content: Mapped[str] = mapped_column(Text, default="")
    type: Mapped[str] = mapped_column(
        String(32), default=ARTICLE_TYPE_NORMAL, index=True
    )  # normal, discussion, city_broadcast, thought
    status: Mapped[str] = mapped_column(
        String(32), default=ARTICLE_STATUS_VALID, index=True
    )  # valid, invalid

    author_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    author_email: Mapped[str] = mapped_column(String(256), default="")
    # Comma-joined tag titles
    tags: Mapped[str] = mapped_column(String(512), default="")
    city: Mapped[str] = mapped_column(String(128), default="", index=True)

    # Epoch millis
    create_time: Mapped[int] = mapped_column(BigInteger, default=0)
    update_time: Mapped[int] = mapped_column(BigInteger, default=0)
    latest_cmt_time: Mapped[int] = mapped_column(BigInteger, default=0)

    comment_count: Mapped[int] = mapped_column(Integer, default=0)
    view_count: Mapped[int] = mapped_column(Integer, default=0)
    good_count: Mapped[int] = mapped_column(Integer, default=0)
    reward_point: Mapped[int] = mapped_column(Integer, default=0)
    reward_content: Mapped[str] = mapped_column(Text, default="")
    reddit_score: Mapped[float] = mapped_column(Float, default=0.0)

    client_article_id: Mapped[str] = mapped_column(String(64), default="", index=True)
    permalink: Mapped[str] = mapped_column(String(256), default="")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "type": self.type,
            "status": self.status,
            "author_id": self.author_id,
            "author_email": self.author_email,
            "tags": self.tags,
            "city": self.city,
            "create_time": self.create_time,
            "update_time": self.update_time,
            "latest_cmt_time": self.latest_cmt_time,
            "comment_count": self.comment_count,
            "view_count": self.view_count,
            "good_count": self.good_count,
            "reward_point": self.reward_point,
            "reward_content": self.reward_content,
            "reddit_score": self.reddit_score,
            "client_article_id": self.client_article_id,
            "permalink": self.permalink,
        }

    def __repr__(self) -> str:
        return f"<Article {self.id}: {self.title[:50]}>"
