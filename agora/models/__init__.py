from agora.models.article import Article
from agora.models.comment import Comment
from agora.models.tag import Tag, TagArticle
from agora.models.user import User

__all__ = [
    "Article",
    "Comment",
    "Tag", "TagArticle",
    "User",
]
