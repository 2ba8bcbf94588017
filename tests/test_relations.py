from agora.services.relations import (
    count_tag_articles,
    fetch_articles,
    get_tag_by_title,
    resolve_article_ids,
)


def test_get_tag_by_title(factory, db_session):
    factory.article("A", tags="python")
    assert get_tag_by_title(db_session, "python").title == "python"
    assert get_tag_by_title(db_session, "missing") is None


def test_resolve_newest_first(factory, db_session):
    old = factory.article("old", days_ago=2, tags="python")
    new = factory.article("new", days_ago=1, tags="python")
    tag = get_tag_by_title(db_session, "python")
    assert resolve_article_ids(db_session, [tag.id], 1, 10) == [new.id, old.id]


def test_resolve_pages_over_distinct_articles(factory, db_session):
    both = factory.article("both", days_ago=1, tags="a,b")
    only_a = factory.article("a", days_ago=2, tags="a")
    only_b = factory.article("b", days_ago=3, tags="b")
    tag_ids = [get_tag_by_title(db_session, t).id for t in ("a", "b")]

    first = resolve_article_ids(db_session, tag_ids, 1, 2)
    second = resolve_article_ids(db_session, tag_ids, 2, 2)
    assert first == [both.id, only_a.id]
    assert second == [only_b.id]
    assert count_tag_articles(db_session, tag_ids) == 3


def test_resolve_skips_and_records_fetched(factory, db_session):
    first = factory.article("1", days_ago=1, tags="t")
    second = factory.article("2", days_ago=2, tags="t")
    tag = get_tag_by_title(db_session, "t")

    fetched = {first.id}
    assert resolve_article_ids(db_session, [tag.id], 1, 5, fetched) == [second.id]
    assert fetched == {first.id, second.id}
    assert resolve_article_ids(db_session, [tag.id], 1, 5, fetched) == []


def test_resolve_empty_inputs(db_session):
    assert resolve_article_ids(db_session, [], 1, 10) == []
    assert resolve_article_ids(db_session, [1], 1, 0) == []
    assert count_tag_articles(db_session, []) == 0


def test_fetch_articles_orders_by_id(factory, db_session):
    a = factory.article("a", days_ago=2)
    b = factory.article("b", days_ago=1)
    assert [x.id for x in fetch_articles(db_session, [a.id, b.id])] == [b.id, a.id]
    assert fetch_articles(db_session, []) == []
