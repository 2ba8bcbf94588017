import re

from sqlalchemy.orm import Session

from agora.errors import store_access
from agora.models.user import User

MENTION_RE = re.compile(r"@([\w-]+)")


def get_user_names(db: Session, content: str) -> set[str]:
    """Names @-mentioned in ``content`` that belong to existing users."""
    if not content:
        return set()
    candidates = set(MENTION_RE.findall(content))
    if not candidates:
        return set()
    with store_access("Gets mentioned user names", candidates=len(candidates)):
        rows = db.query(User.name).filter(User.name.in_(candidates)).all()
    return {row.name for row in rows}


def link_mentions(content: str, user_names: set[str], serve_path: str) -> str:
    """Rewrite each ``@name`` into a link to the member's profile."""
    for name in sorted(user_names, key=len, reverse=True):
        pattern = re.compile(rf"@{re.escape(name)}(?![\w-])")
        anchor = f"@<a href='{serve_path}/member/{name}'>{name}</a>"
        content = pattern.sub(lambda _m: anchor, content)
    return content
