"""Article listings: selection strategies, hydration and enrichment."""

import logging
import random
from collections.abc import Callable, Sequence

from sqlalchemy import and_
from sqlalchemy.orm import Session

from agora.config import get_settings
from agora.errors import store_access
from agora.models.article import (
    ARTICLE_STATUS_VALID,
    ARTICLE_TYPE_DISCUSSION,
    Article,
)
from agora.models.comment import Comment
from agora.models.tag import Tag
from agora.models.user import ROLE_ADMIN, USER_STATUS_INVALID, User
from agora.services import times
from agora.services.assembly import ArticleAssembler, sanitize_title
from agora.services.avatar import get_avatar_url
from agora.services.heat import ViewCounter
from agora.services.lang import LangService
from agora.services.pagination import page_count, page_window
from agora.services.participants import attach_participants
from agora.services.relations import (
    fetch_articles,
    get_tag_by_title,
    resolve_article_ids,
)
from agora.services.relevance import sample_relevant_articles, split_tags
from agora.services.visibility import process_article_content

logger = logging.getLogger(__name__)

# Fields projected by the interests and news feeds
LINK_FIELDS = ("title", "permalink", "create_time")

# Transient fields dropped from interest feed entries
INTEREST_STRIPPED_FIELDS = (
    "participants",
    "participant_name",
    "participant_thumbnail_url",
    "latest_cmt_time",
    "update_time",
    "heat",
    "title_emoji",
    "time_ago",
)


def _showing_filter():
    return and_(
        Article.status == ARTICLE_STATUS_VALID,
        Article.type != ARTICLE_TYPE_DISCUSSION,
    )


def _page(query, page: int, page_size: int):
    return query.offset((max(page, 1) - 1) * page_size).limit(page_size)


def _story_date(value) -> str:
    return value.strftime("%Y-%m-%dT%H:%M:%SZ")


class ArticleQueryService:
    def __init__(
        self,
        db: Session,
        view_counter: ViewCounter,
        lang: LangService | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], int] = times.now_millis,
    ):
        self.db = db
        self.settings = get_settings()
        self.assembler = ArticleAssembler(db, view_counter, lang=lang, clock=clock)
        self.lang = self.assembler.lang
        self.rng = rng or random.Random()
        self.clock = clock

    # Ranked listings

    def get_recent_articles(self, page: int, page_size: int) -> list[dict]:
        """Valid, non-discussion articles, newest first."""
        with store_access("Gets recent articles", page=page, page_size=page_size):
            rows = _page(self._recent_query(), page, page_size).all()
            articles = self.assembler.organize_articles(rows)
            self._block_invalid_authors(articles)
            attach_participants(self.db, articles, self.settings.LATEST_ARTICLE_PARTICIPANTS_CNT)
        return articles

    def count_recent_articles(self) -> int:
        with store_access("Counts recent articles"):
            return self.db.query(Article).filter(_showing_filter()).count()

    def get_hot_articles(self, fetch_size: int) -> list[dict]:
        """Most commented non-discussion articles of the last HOT_ARTICLE_DAYS days."""
        lower_bound_id = self.clock() - self.settings.HOT_ARTICLE_DAYS * times.DAY_UNIT
        with store_access("Gets hot articles", fetch_size=fetch_size):
            rows = (
                self.db.query(Article)
                .filter(Article.id >= lower_bound_id, Article.type != ARTICLE_TYPE_DISCUSSION)
                .order_by(Article.comment_count.desc(), Article.id.asc())
                .limit(fetch_size)
                .all()
            )
            return self.assembler.organize_articles(rows)

    def get_top_articles(self, page: int, page_size: int) -> list[dict]:
        """Valid, non-discussion articles by reddit score, then latest comment."""
        with store_access("Gets top articles", page=page, page_size=page_size):
            rows = _page(self._top_query(), page, page_size).all()
            articles = self.assembler.organize_articles(rows)
            self._block_invalid_authors(articles)
            attach_participants(self.db, articles, self.settings.INDEX_ARTICLE_PARTICIPANTS_CNT)
        return articles

    def get_index_articles(self, fetch_size: int) -> list[dict]:
        return self.get_top_articles(1, fetch_size)

    def get_random_articles(self, fetch_size: int) -> list[dict]:
        """Uniform sample over the whole article collection."""
        with store_access("Gets random articles", fetch_size=fetch_size):
            ids = [row.id for row in self.db.query(Article.id).all()]
            picked = self.rng.sample(ids, min(fetch_size, len(ids)))
            return self.assembler.organize_articles(fetch_articles(self.db, picked))

    # Tag, city and author listings

    def get_articles_by_tag(self, tag: Tag, page: int, page_size: int) -> list[dict]:
        return self.get_articles_by_tags(page, page_size, [tag])

    def get_articles_by_tags(
        self,
        page: int,
        page_size: int,
        tags: Sequence[Tag],
        fields: Sequence[str] | None = None,
    ) -> list[dict]:
        """Articles carrying any of ``tags``, newest first."""
        if not tags:
            return []
        tag_ids = [tag.id for tag in tags]
        with store_access("Gets articles by tags", tag_ids=tag_ids, page=page):
            article_ids = resolve_article_ids(self.db, tag_ids, page, page_size)
            if fields:
                rows = self._project(article_ids, fields)
            else:
                rows = fetch_articles(self.db, article_ids)
            articles = self.assembler.organize_articles(rows)
            attach_participants(self.db, articles, self.settings.TAG_ARTICLE_PARTICIPANTS_CNT)
        return articles

    def get_articles_by_city(self, city: str, page: int, page_size: int) -> list[dict]:
        with store_access("Gets articles by city", city=city, page=page):
            rows = _page(
                self.db.query(Article).filter(Article.city == city).order_by(Article.id.desc()),
                page,
                page_size,
            ).all()
            articles = self.assembler.organize_articles(rows)
            attach_participants(self.db, articles, self.settings.CITY_ARTICLE_PARTICIPANTS_CNT)
        return articles

    def get_user_articles(self, user_id: int, page: int, page_size: int) -> list[dict]:
        with store_access("Gets user articles", user_id=user_id, page=page):
            rows = _page(
                self.db.query(Article)
                .filter(Article.author_id == user_id)
                .order_by(Article.create_time.desc()),
                page,
                page_size,
            ).all()
            return self.assembler.organize_articles(rows)

    def get_relevant_articles(self, article: Article | dict, fetch_size: int) -> list[dict]:
        article_id = article.id if isinstance(article, Article) else article["id"]
        with store_access("Gets relevant articles", article_id=article_id, fetch_size=fetch_size):
            rows = sample_relevant_articles(self.db, article, fetch_size, rng=self.rng)
            return self.assembler.organize_articles(rows)

    # Feeds

    def get_broadcasts(self, page: int, page_size: int) -> list[dict]:
        with store_access("Gets broadcasts", page=page, page_size=page_size):
            rows = _page(
                self.db.query(Article)
                .filter(Article.client_article_id == self.settings.BROADCAST_CLIENT_ARTICLE_ID)
                .order_by(Article.create_time.desc()),
                page,
                page_size,
            ).all()

        ret = []
        for row in rows:
            data = row.to_dict()
            data["permalink"] = self.settings.SERVE_PATH + data["permalink"]
            del data["content"]
            ret.append(data)
        return ret

    def get_interests(self, page: int, page_size: int, tag_titles: Sequence[str]) -> list[dict]:
        """Articles of the given tags followed by the latest articles, as links."""
        tags = []
        for title in tag_titles:
            tag = get_tag_by_title(self.db, title)
            if tag is not None:
                tags.append(tag)

        ret = []
        if tags:
            for article in self.get_articles_by_tags(page, page_size, tags, fields=LINK_FIELDS):
                for field in INTEREST_STRIPPED_FIELDS:
                    article.pop(field, None)
                article["create_time"] = times.datetime_to_millis(article["create_time"])
                ret.append(article)

        seen = {article["id"] for article in ret}
        query = self.db.query(Article.id, *(getattr(Article, f) for f in LINK_FIELDS)).filter(
            _showing_filter()
        )
        if seen:
            query = query.filter(Article.id.notin_(seen))

        with store_access("Gets interests", page_size=page_size):
            rows = query.order_by(Article.id.desc()).limit(page_size).all()
        for row in rows:
            article = row._asdict()
            article["title"] = sanitize_title(article["title"])
            ret.append(article)

        for article in ret:
            article["permalink"] = self.settings.SERVE_PATH + article["permalink"]
        return ret

    def get_news(self, page: int, page_size: int) -> list[dict]:
        """Announcement-tagged articles written by the site administrator."""
        tag = get_tag_by_title(self.db, self.settings.NEWS_TAG_TITLE)
        if tag is None:
            return []

        with store_access("Gets news", page=page, page_size=page_size):
            article_ids = resolve_article_ids(self.db, [tag.id], page, page_size)
            admin = (
                self.db.query(User)
                .filter(User.role == ROLE_ADMIN)
                .order_by(User.id)
                .first()
            )
            if admin is None:
                logger.warning("No admin user found, news feed is empty")
                return []
            if not article_ids:
                return []
            rows = (
                self.db.query(Article.id, *(getattr(Article, f) for f in LINK_FIELDS))
                .filter(Article.id.in_(article_ids), Article.author_email == admin.email)
                .order_by(Article.create_time.desc())
                .all()
            )

        ret = []
        for row in rows:
            data = row._asdict()
            data["permalink"] = self.settings.SERVE_PATH + data["permalink"]
            ret.append(data)
        return ret

    def get_recent_stories(self, page: int, page_size: int) -> list[dict]:
        return self._stories(self._recent_query(), page, page_size)

    def get_top_stories(self, page: int, page_size: int) -> list[dict]:
        return self._stories(self._top_query(), page, page_size)

    # Single articles

    def get_article(self, article_id: int) -> Article | None:
        with store_access("Gets an article", article_id=article_id):
            return self.db.get(Article, article_id)

    def get_article_by_id(self, article_id: int) -> dict | None:
        article = self.get_article(article_id)
        if article is None:
            return None
        return self.assembler.organize_article(article)

    def get_article_by_client_article_id(self, author_id: int, client_article_id: str) -> dict | None:
        with store_access("Gets article by client article id", client_article_id=client_article_id):
            article = (
                self.db.query(Article)
                .filter(
                    Article.client_article_id == client_article_id,
                    Article.author_id == author_id,
                )
                .first()
            )
        return article.to_dict() if article else None

    def process_article_content(self, article: dict, viewer: dict | None) -> dict:
        with store_access("Processes article content", article_id=article.get("id")):
            return process_article_content(self.db, article, viewer, lang=self.lang)

    # Admin listing

    def get_articles(
        self, page: int, page_size: int, window_size: int, article_id: int | None = None
    ) -> dict:
        query = self.db.query(Article)
        if article_id is not None:
            query = query.filter(Article.id == article_id)

        with store_access("Gets articles", page=page, page_size=page_size):
            total = query.count()
            rows = _page(query.order_by(Article.update_time.desc()), page, page_size).all()
            articles = self.assembler.organize_articles(rows)

        count = page_count(total, page_size)
        return {
            "pagination": {
                "page_count": count,
                "page_nums": page_window(page, count, window_size),
            },
            "articles": articles,
        }

    # Helpers

    def _recent_query(self):
        return self.db.query(Article).filter(_showing_filter()).order_by(Article.id.desc())

    def _top_query(self):
        return (
            self.db.query(Article)
            .filter(_showing_filter())
            .order_by(
                Article.reddit_score.desc(),
                Article.latest_cmt_time.desc(),
                Article.id.desc(),
            )
        )

    def _project(self, article_ids: list[int], fields: Sequence[str]) -> list[dict]:
        if not article_ids:
            return []
        columns = [getattr(Article, f) for f in fields if f != "id"]
        rows = (
            self.db.query(Article.id, *columns)
            .filter(Article.id.in_(article_ids))
            .order_by(Article.id.desc())
            .all()
        )
        return [row._asdict() for row in rows]

    def _block_invalid_authors(self, articles: list[dict]) -> None:
        for article in articles:
            author = article.get("author")
            if author and author["status"] == USER_STATUS_INVALID:
                article["title"] = self.lang.get("article_title_block")

    def _stories(self, query, page: int, page_size: int) -> list[dict]:
        with store_access("Gets stories", page=page, page_size=page_size):
            rows = _page(query, page, page_size).all()
            articles = self.assembler.organize_articles(rows)

            stories = []
            for article in articles:
                author = article.get("author") or {}
                if author.get("status") == USER_STATUS_INVALID:
                    title = self.lang.get("article_title_block")
                else:
                    title = article["title"]
                tags = split_tags(article["tags"])
                stories.append({
                    "id": article["id"],
                    "title": title,
                    "url": self.settings.SERVE_PATH + article["permalink"],
                    "user_display_name": article.get("author_name", ""),
                    "user_job": author.get("intro", ""),
                    "comment_html": article["content"],
                    "comment_count": article["comment_count"],
                    "vote_count": article["good_count"],
                    "created_at": _story_date(article["create_time"]),
                    "user_portrait_url": article.get("author_thumbnail_url", ""),
                    "comments": self._story_comments(article["id"]),
                    "badge": tags[0] if tags else "",
                })
            attach_participants(self.db, stories, self.settings.INDEX_ARTICLE_PARTICIPANTS_CNT)
        return stories

    def _story_comments(self, article_id: int) -> list[dict]:
        comments = (
            self.db.query(Comment)
            .filter(Comment.on_article_id == article_id)
            .order_by(Comment.create_time.asc(), Comment.id.asc())
            .all()
        )
        ret = []
        for comment in comments:
            commenter = self.db.query(User).filter(User.email == comment.author_email).first()
            ret.append({
                "id": comment.id,
                "body_html": comment.content,
                "depth": 0,
                "user_display_name": commenter.name if commenter else "",
                "user_job": commenter.intro if commenter else "",
                "vote_count": 0,
                "created_at": _story_date(times.millis_to_datetime(comment.create_time)),
                "user_portrait_url": get_avatar_url(comment.author_email),
            })
        return ret
