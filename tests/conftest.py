import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["API_TOKEN"] = "test-token"

import itertools

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agora.database import Base, get_db
from agora.main import app
from agora.models import *  # noqa: register all models
from agora.models.article import Article
from agora.models.comment import Comment
from agora.models.tag import Tag, TagArticle
from agora.models.user import User
from agora.services import times

from fastapi.testclient import TestClient

# Fixed "now" shared by the factory and the services under test
NOW = 1_760_000_000_000


@pytest.fixture
def db_engine():
    # Use StaticPool to keep the same in-memory db across connections
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(bind=db_engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def client(db_engine):
    Session = sessionmaker(bind=db_engine)

    def _override():
        session = Session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override

    with TestClient(app) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def authed_client(client, db_session):
    """A client that is logged in as admin."""
    from passlib.hash import bcrypt

    user = User(
        name="testadmin",
        email="testadmin@example.com",
        password_hash=bcrypt.hash("testpass"),
        role="admin",
    )
    db_session.add(user)
    db_session.commit()

    client.post("/login", data={"name": "testadmin", "password": "testpass"})
    return client


class Factory:
    """Builds users, articles, tags and comments directly in the test database."""

    def __init__(self, db, now: int):
        self.db = db
        self.now = now
        self._seq = itertools.count()

    def user(self, name: str, **fields) -> User:
        fields.setdefault("email", f"{name}@example.com")
        user = User(name=name, **fields)
        self.db.add(user)
        self.db.commit()
        return user

    def article(self, title: str = "Article", days_ago: float = 0, author: User | None = None, **fields) -> Article:
        # Ids must be unique; step back one milli per article built
        article_id = self.now - int(days_ago * times.DAY_UNIT) - next(self._seq)
        fields.setdefault("create_time", article_id)
        fields.setdefault("update_time", article_id)
        fields.setdefault("latest_cmt_time", article_id)
        fields.setdefault("permalink", f"/article/{article_id}")
        if author is not None:
            fields.setdefault("author_id", author.id)
            fields.setdefault("author_email", author.email)
        article = Article(id=article_id, title=title, **fields)
        self.db.add(article)
        self.db.flush()

        for tag_title in [t.strip() for t in fields.get("tags", "").split(",") if t.strip()]:
            tag = self.tag(tag_title)
            self.db.add(TagArticle(tag_id=tag.id, article_id=article.id))
            tag.reference_count += 1
        self.db.commit()
        return article

    def tag(self, title: str) -> Tag:
        tag = self.db.query(Tag).filter(Tag.title == title).first()
        if tag is None:
            tag = Tag(title=title, reference_count=0)
            self.db.add(tag)
            self.db.flush()
        return tag

    def comment(self, article: Article, author: User | None = None, email: str = "", create_time: int | None = None) -> Comment:
        comment = Comment(
            on_article_id=article.id,
            author_id=author.id if author else None,
            author_email=author.email if author else email,
            content="a comment",
            create_time=create_time if create_time is not None else self.now - next(self._seq),
        )
        self.db.add(comment)
        self.db.commit()
        return comment


@pytest.fixture
def factory(db_session):
    return Factory(db_session, NOW)


@pytest.fixture
def clock():
    return lambda: NOW
