from pathlib import Path

from fastapi import Depends, Request
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from agora.database import get_db
from agora.services.articles import ArticleQueryService
from agora.services.heat import InMemoryViewCounter

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def current_user(request: Request) -> dict | None:
    user_id = request.session.get("user_id")
    if not user_id:
        return None
    return {
        "id": user_id,
        "name": request.session.get("name", ""),
        "role": request.session.get("role", "member"),
    }


def require_login(request: Request):
    user = current_user(request)
    if not user:
        raise _LoginRequired()
    return user


def require_admin(request: Request):
    user = require_login(request)
    if user["role"] != "admin":
        raise _LoginRequired()
    return user


def get_view_counter(request: Request) -> InMemoryViewCounter:
    return request.app.state.view_counter


def get_article_service(
    db: Session = Depends(get_db),
    view_counter: InMemoryViewCounter = Depends(get_view_counter),
) -> ArticleQueryService:
    return ArticleQueryService(db, view_counter)


class _LoginRequired(Exception):
    pass
