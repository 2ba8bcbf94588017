"""Decides what a viewer may read of a single article and renders it.

An article is in exactly one of three states for a given viewer:

* ``BLOCKED`` - the article or its author is invalid; fixed placeholders.
* ``DISCUSSION_RESTRICTED`` - a discussion the viewer was not invited to; an
  invitation message pointing at the author replaces the body.
* ``OPEN`` - mentions, short links and emoji are expanded, then the body is
  rendered (Markdown for most types, sanitized HTML for thoughts).
"""

import enum

from sqlalchemy.orm import Session

from agora.config import get_settings
from agora.models.article import (
    ARTICLE_STATUS_INVALID,
    ARTICLE_TYPE_DISCUSSION,
    ARTICLE_TYPE_THOUGHT,
)
from agora.models.user import ROLE_ADMIN, USER_STATUS_INVALID
from agora.services import emotions, markdowns, shortlinks
from agora.services.lang import LangService, get_lang
from agora.services.mentions import get_user_names, link_mentions


class Visibility(enum.Enum):
    BLOCKED = "blocked"
    DISCUSSION_RESTRICTED = "discussion_restricted"
    OPEN = "open"


def evaluate_visibility(article: dict, viewer: dict | None, mentioned: set[str]) -> Visibility:
    """Pure decision over (type, status, author status, viewer, mentions).

    ``viewer`` is ``{"name": ..., "role": ...}`` or None for anonymous readers.
    """
    author = article.get("author")
    if (author and author.get("status") == USER_STATUS_INVALID) or (
        article.get("status") == ARTICLE_STATUS_INVALID
    ):
        return Visibility.BLOCKED

    if article.get("type") == ARTICLE_TYPE_DISCUSSION:
        viewer_name = viewer.get("name") if viewer else None
        viewer_role = viewer.get("role") if viewer else None
        is_author = bool(viewer_name) and viewer_name == article.get("author_name")
        invited = bool(viewer_name) and viewer_name in mentioned
        if not (is_author or invited or viewer_role == ROLE_ADMIN):
            return Visibility.DISCUSSION_RESTRICTED

    return Visibility.OPEN


def process_article_content(
    db: Session,
    article: dict,
    viewer: dict | None,
    lang: LangService | None = None,
) -> dict:
    """Render an organized article for ``viewer``; returns a new dict."""
    settings = get_settings()
    lang = lang or get_lang(settings.LOCALE)
    data = dict(article)

    mentioned = set()
    if article.get("status") != ARTICLE_STATUS_INVALID:
        mentioned = get_user_names(db, data.get("content", ""))

    state = evaluate_visibility(data, viewer, mentioned)
    data["visibility"] = state.value
    data["discussion_viewable"] = state is not Visibility.DISCUSSION_RESTRICTED

    if state is Visibility.BLOCKED:
        data["title"] = lang.get("article_title_block")
        data["content"] = lang.get("article_content_block")
        _clear_reward(data)
        return data

    if state is Visibility.DISCUSSION_RESTRICTED:
        author_name = data.get("author_name", "")
        author_link = f"<a href='{settings.SERVE_PATH}/member/{author_name}'>{author_name}</a>"
        data["content"] = lang.get("article_discussion").replace("{user}", author_link)
        _clear_reward(data)
        return data

    serve_path = settings.SERVE_PATH
    content = link_mentions(data.get("content", ""), mentioned, serve_path)
    content = shortlinks.link_article(db, content, serve_path)
    content = shortlinks.link_tag(db, content, serve_path)
    data["content"] = emotions.convert(content)

    if data.get("reward_point", 0) > 0:
        reward = data.get("reward_content", "")
        reward = link_mentions(reward, get_user_names(db, reward), serve_path)
        data["reward_content"] = emotions.convert(reward)

    _render_markdown(data)
    return data


def _clear_reward(data: dict) -> None:
    data["reward_content"] = ""
    data["reward_point"] = 0


def _render_markdown(data: dict) -> None:
    if data.get("type") == ARTICLE_TYPE_THOUGHT:
        data["content"] = markdowns.clean_thought(data["content"])
    else:
        data["content"] = markdowns.clean(markdowns.to_html(data["content"]))

    if data.get("reward_point", 0) > 0:
        data["reward_content"] = markdowns.clean(markdowns.to_html(data["reward_content"]))
