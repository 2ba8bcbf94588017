import html
import re

from sqlalchemy.orm import Session

from agora.errors import store_access
from agora.models.article import Article
from agora.models.tag import Tag

TAG_RE = re.compile(r"(?<![\w&/#])#([^\s#<>\[\]()'\",]+)")


def _article_re(serve_path: str) -> re.Pattern:
    # Bare URLs only; skips ones already inside href='...' or [..](...)
    return re.compile(
        rf"(?<![\w'\"(=/]){re.escape(serve_path)}/article/(\d+)(?![\w/])"
    )


def link_article(db: Session, content: str, serve_path: str) -> str:
    """Turn bare article URLs into anchors titled with the article title."""
    pattern = _article_re(serve_path)
    ids = {int(m) for m in pattern.findall(content)}
    if not ids:
        return content

    with store_access("Gets short link articles", ids=sorted(ids)):
        rows = db.query(Article.id, Article.title).filter(Article.id.in_(ids)).all()
    titles = {row.id: row.title for row in rows}

    def _replace(match: re.Match) -> str:
        article_id = int(match.group(1))
        if article_id not in titles:
            return match.group(0)
        url = f"{serve_path}/article/{article_id}"
        return f"<a href='{url}'>{html.escape(titles[article_id])}</a>"

    return pattern.sub(_replace, content)


def link_tag(db: Session, content: str, serve_path: str) -> str:
    """Turn ``#Title`` references to existing tags into tag page anchors."""
    titles = set(TAG_RE.findall(content))
    if not titles:
        return content

    with store_access("Gets short link tags", titles=sorted(titles)):
        rows = db.query(Tag.title).filter(Tag.title.in_(titles)).all()
    existing = {row.title for row in rows}

    def _replace(match: re.Match) -> str:
        title = match.group(1)
        if title not in existing:
            return match.group(0)
        return f"<a href='{serve_path}/tag/{title}'>#{title}</a>"

    return TAG_RE.sub(_replace, content)
