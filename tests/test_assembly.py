import pytest

from agora.models.article import ARTICLE_STATUS_INVALID
from agora.models.user import USER_STATUS_VALID
from agora.services import times
from agora.services.assembly import ArticleAssembler, format_view_count
from agora.services.heat import InMemoryViewCounter


@pytest.fixture
def counter():
    return InMemoryViewCounter()


@pytest.fixture
def assembler(db_session, counter, clock):
    return ArticleAssembler(db_session, counter, clock=clock)


@pytest.mark.parametrize(
    "count, expected",
    [(0, None), (999, None), (1000, "1K"), (1500, "1.5K"), (12345, "12.3K"), (2050, "2K")],
)
def test_format_view_count(count, expected):
    assert format_view_count(count) == expected


def test_format_view_count_rounding_mode():
    assert format_view_count(2050, "ROUND_HALF_UP") == "2.1K"


def test_organize_adds_display_fields(factory, assembler, counter, clock):
    alice = factory.user("alice", status=USER_STATUS_VALID)
    article = factory.article("Hello :thumbs_up:", days_ago=2, author=alice, view_count=1500)
    counter.increment(article.id)

    data = assembler.organize_article(article)
    assert data["time_ago"] == "2 days ago"
    assert data["create_time"] == times.millis_to_datetime(article.create_time)
    assert data["author_name"] == "alice"
    assert data["author"]["name"] == "alice"
    assert "password_hash" not in data["author"]
    assert data["author_thumbnail_url"].endswith("d=identicon")
    assert data["title_emoji"] == "Hello \U0001f44d"
    assert data["heat"] == 1
    assert data["view_count_display"] == "1.5K"


def test_organize_leaves_stored_row_untouched(factory, assembler):
    article = factory.article("<b>bold</b>")
    data = assembler.organize_article(article)
    assert data["title"] == "&lt;b&gt;bold&lt;/b&gt;"
    assert article.title == "<b>bold</b>"
    assert isinstance(article.create_time, int)


def test_organize_small_view_count_has_no_display(factory, assembler):
    data = assembler.organize_article(factory.article("quiet", view_count=999))
    assert "view_count_display" not in data


def test_organize_blocked_article(factory, assembler):
    data = assembler.organize_article(
        factory.article("bad", content="bad words", status=ARTICLE_STATUS_INVALID)
    )
    assert data["title"] == assembler.lang.get("article_title_block")
    assert data["title_emoji"] == assembler.lang.get("article_title_block")
    assert data["content"] == assembler.lang.get("article_content_block")


def test_organize_missing_author(factory, assembler):
    data = assembler.organize_article(factory.article("orphan", author_email="gone@example.com"))
    assert data["author"] is None
    assert data["author_name"] == ""


def test_organize_projection_keeps_missing_fields_missing(assembler):
    data = assembler.organize_article({"id": 1, "permalink": "/article/1"})
    assert "title" not in data
    assert "time_ago" not in data
    assert data["heat"] == 0
