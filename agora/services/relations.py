"""Tag -> article resolution over the tag_article index.

Pages are taken over distinct article ids, so an article carrying several of
the requested tags occupies a single slot and a page of size P yields up to P
distinct articles.
"""

from collections.abc import Iterable

from sqlalchemy import func
from sqlalchemy.orm import Session

from agora.errors import store_access
from agora.models.article import Article
from agora.models.tag import Tag, TagArticle


def get_tag_by_title(db: Session, title: str) -> Tag | None:
    with store_access("Gets tag by title", title=title):
        return db.query(Tag).filter(Tag.title == title).first()


def resolve_article_ids(
    db: Session,
    tag_ids: Iterable[int],
    page: int,
    page_size: int,
    fetched: set[int] | None = None,
) -> list[int]:
    """Article ids tagged with any of ``tag_ids``, newest first.

    Ids already present in ``fetched`` are skipped, and the returned ids are
    added to it, so successive calls sharing one set never repeat an article.
    """
    tag_ids = list(tag_ids)
    if not tag_ids or page_size <= 0:
        return []

    query = db.query(TagArticle.article_id).distinct()
    if len(tag_ids) == 1:
        query = query.filter(TagArticle.tag_id == tag_ids[0])
    else:
        query = query.filter(TagArticle.tag_id.in_(tag_ids))
    if fetched:
        query = query.filter(TagArticle.article_id.notin_(fetched))

    with store_access("Resolves tag articles", tag_ids=tag_ids, page=page, page_size=page_size):
        rows = (
            query.order_by(TagArticle.article_id.desc())
            .offset((max(page, 1) - 1) * page_size)
            .limit(page_size)
            .all()
        )

    ids = [row.article_id for row in rows]
    if fetched is not None:
        fetched.update(ids)
    return ids


def count_tag_articles(db: Session, tag_ids: Iterable[int]) -> int:
    tag_ids = list(tag_ids)
    if not tag_ids:
        return 0
    with store_access("Counts tag articles", tag_ids=tag_ids):
        return (
            db.query(func.count(func.distinct(TagArticle.article_id)))
            .filter(TagArticle.tag_id.in_(tag_ids))
            .scalar()
        ) or 0


def fetch_articles(db: Session, article_ids: Iterable[int]) -> list[Article]:
    """Articles for the given ids, newest first."""
    article_ids = list(article_ids)
    if not article_ids:
        return []
    with store_access("Gets articles by ids", count=len(article_ids)):
        return (
            db.query(Article)
            .filter(Article.id.in_(article_ids))
            .order_by(Article.id.desc())
            .all()
        )
