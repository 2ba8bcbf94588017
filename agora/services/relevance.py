import logging
import random

from sqlalchemy.orm import Session

from agora.models.article import Article
from agora.services.relations import fetch_articles, get_tag_by_title, resolve_article_ids

logger = logging.getLogger(__name__)

# Upper bound of source tags consulted per call
RELEVANT_ARTICLE_RANDOM_FETCH_TAG_CNT = 3


def split_tags(tags: str) -> list[str]:
    return [title.strip() for title in (tags or "").split(",") if title.strip()]


def sample_relevant_articles(
    db: Session,
    article: Article | dict,
    fetch_size: int,
    rng: random.Random | None = None,
) -> list[Article]:
    """Other articles sharing a randomly chosen subset of the article's tags.

    Up to three tags are picked without replacement and ``fetch_size`` is split
    evenly between them. Results are grouped per tag in pick order, never repeat
    an article, and never include the source article. Sparse tags give fewer
    than ``fetch_size`` results.
    """
    rng = rng or random.Random()
    if isinstance(article, Article):
        source_id, tags = article.id, article.tags
    else:
        source_id, tags = article["id"], article.get("tags", "")

    titles = split_tags(tags)
    if not titles or fetch_size <= 0:
        return []

    sub_cnt = min(len(titles), RELEVANT_ARTICLE_RANDOM_FETCH_TAG_CNT)
    sub_fetch_size = fetch_size // sub_cnt
    if sub_fetch_size == 0:
        return []

    fetched = {source_id}
    ret: list[Article] = []
    for idx in rng.sample(range(len(titles)), sub_cnt):
        tag = get_tag_by_title(db, titles[idx])
        if tag is None:
            logger.debug("Tag [title=%s] of article %s not found", titles[idx], source_id)
            continue

        article_ids = resolve_article_ids(db, [tag.id], 1, sub_fetch_size, fetched)
        ret.extend(fetch_articles(db, article_ids))

    return ret
