"""Per-article enrichment applied to every listing before it is rendered.

Each stored article becomes a fresh dict carrying the stored fields plus the
transient display fields (dates, time ago, author, title emoji, heat, view
count display). Stored rows are never modified.
"""

import logging
from collections.abc import Callable, Iterable
from decimal import Decimal

from sqlalchemy.orm import Session

from agora.config import get_settings
from agora.errors import store_access
from agora.models.article import ARTICLE_STATUS_INVALID, Article
from agora.models.user import User
from agora.services import emotions, markdowns, times
from agora.services.avatar import get_avatar_url
from agora.services.heat import ViewCounter
from agora.services.lang import LangService, get_lang

logger = logging.getLogger(__name__)

TIME_FIELDS = ("create_time", "update_time", "latest_cmt_time")


def format_view_count(view_count: int, rounding: str = "ROUND_HALF_EVEN") -> str | None:
    """1000 -> "1K", 1500 -> "1.5K", 12345 -> "12.3K"; None below a thousand."""
    if view_count < 1000:
        return None
    value = (Decimal(view_count) / 1000).quantize(Decimal("0.1"), rounding=rounding)
    text = format(value, "f")
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}K"


def sanitize_title(title: str | None) -> str:
    title = (title or "").replace("<", "&lt;").replace(">", "&gt;")
    return markdowns.clean_text(title)


class ArticleAssembler:
    def __init__(
        self,
        db: Session,
        view_counter: ViewCounter,
        lang: LangService | None = None,
        clock: Callable[[], int] = times.now_millis,
    ):
        self.db = db
        self.view_counter = view_counter
        self.settings = get_settings()
        self.lang = lang or get_lang(self.settings.LOCALE)
        self.clock = clock

    def organize_articles(self, articles: Iterable[Article | dict]) -> list[dict]:
        return [self.organize_article(article) for article in articles]

    def organize_article(self, article: Article | dict) -> dict:
        data = article.to_dict() if isinstance(article, Article) else dict(article)

        self._to_dates(data)
        self._gen_author(data)

        if "title" in data:
            title = sanitize_title(data["title"])
            data["title"] = title
            data["title_emoji"] = emotions.convert(title)

        if data.get("status") == ARTICLE_STATUS_INVALID:
            data["title"] = self.lang.get("article_title_block")
            data["title_emoji"] = self.lang.get("article_title_block")
            data["content"] = self.lang.get("article_content_block")

        if "id" in data:
            data["heat"] = self.view_counter.get(data["id"])

        display = format_view_count(
            data.get("view_count", 0), self.settings.VIEW_COUNT_ROUNDING
        )
        if display is not None:
            data["view_count_display"] = display

        return data

    def _to_dates(self, data: dict) -> None:
        if "create_time" in data:
            data["time_ago"] = times.time_ago(data["create_time"], self.lang, now=self.clock())
        for field in TIME_FIELDS:
            if field in data:
                data[field] = times.millis_to_datetime(data[field] or 0)

    def _gen_author(self, data: dict) -> None:
        email = data.get("author_email")
        if not email:
            return

        with store_access("Gets article author", email=email):
            author = self.db.query(User).filter(User.email == email).first()

        data["author_thumbnail_url"] = get_avatar_url(email)
        if author is None:
            logger.warning("Author [email=%s] of article %s not found", email, data.get("id"))
            data["author"] = None
            data["author_name"] = ""
            return

        data["author"] = author.to_dict()
        data["author_name"] = author.name
