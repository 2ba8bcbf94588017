import logging

from sqlalchemy.orm import Session

from agora.config import get_settings
from agora.errors import store_access
from agora.models.comment import Comment
from agora.models.user import DEFAULT_COMMENTER_EMAIL, User
from agora.services.avatar import get_avatar_url

logger = logging.getLogger(__name__)


def get_latest_participants(db: Session, article_id: int, fetch_size: int) -> list[dict]:
    """One entry per recent comment, newest first.

    The same commenter appears once per comment they wrote among the latest
    ``fetch_size`` comments.
    """
    if fetch_size <= 0:
        return []
    settings = get_settings()

    with store_access("Gets article participants", article_id=article_id, fetch_size=fetch_size):
        comments = (
            db.query(Comment.id, Comment.author_email)
            .filter(Comment.on_article_id == article_id)
            .order_by(Comment.create_time.desc(), Comment.id.desc())
            .limit(fetch_size)
            .all()
        )

        participants = []
        for comment in comments:
            email = comment.author_email
            commenter = db.query(User).filter(User.email == email).first()
            if commenter is None:
                logger.warning(
                    "Commenter [email=%s] of comment %d not found", email, comment.id
                )

            if email == DEFAULT_COMMENTER_EMAIL:
                thumbnail_url = settings.DEFAULT_THUMBNAIL_URL
            else:
                thumbnail_url = get_avatar_url(email)

            participants.append({
                "participant_name": commenter.name if commenter else "",
                "participant_thumbnail_url": thumbnail_url,
                "participant_thumbnail_update_time": commenter.update_time if commenter else 0,
                "participant_url": commenter.url if commenter else "",
                "comment_id": comment.id,
            })

    return participants


def attach_participants(db: Session, articles: list[dict], fetch_size: int) -> None:
    for article in articles:
        article["participants"] = get_latest_participants(db, article["id"], fetch_size)
        article["participant_name"] = ""
        article["participant_thumbnail_url"] = ""
