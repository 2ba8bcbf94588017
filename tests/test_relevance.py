import random

from agora.services.relevance import sample_relevant_articles, split_tags


def test_split_tags():
    assert split_tags("a, b,,c ") == ["a", "b", "c"]
    assert split_tags("") == []
    assert split_tags(None) == []


def test_no_tags_no_candidates(factory, db_session):
    source = factory.article("lonely")
    factory.article("other", tags="x")
    assert sample_relevant_articles(db_session, source, 9, rng=random.Random(1)) == []


def test_excludes_source_and_duplicates(factory, db_session):
    source = factory.article("source", tags="a,b,c,d")
    for i in range(12):
        factory.article(f"shared {i}", days_ago=i + 1, tags="a,b,c,d")

    for seed in range(10):
        found = sample_relevant_articles(db_session, source, 9, rng=random.Random(seed))
        found_ids = [a.id for a in found]
        assert source.id not in found_ids
        assert len(found_ids) == len(set(found_ids))
        assert len(found_ids) <= 9


def test_budget_split_between_three_tags(factory, db_session):
    source = factory.article("source", tags="a,b,c,d")
    for title in ("a", "b", "c", "d"):
        for i in range(5):
            factory.article(f"{title}{i}", days_ago=i + 1, tags=title)

    found = sample_relevant_articles(db_session, source, 9, rng=random.Random(42))
    assert len(found) == 9

    per_tag = {}
    for article in found:
        per_tag[article.tags] = per_tag.get(article.tags, 0) + 1
    assert len(per_tag) == 3
    assert set(per_tag.values()) == {3}


def test_results_grouped_per_tag_in_pick_order(factory, db_session):
    source = factory.article("source", tags="a,b")
    for title in ("a", "b"):
        for i in range(3):
            factory.article(f"{title}{i}", days_ago=i + 1, tags=title)

    found = sample_relevant_articles(db_session, source, 4, rng=random.Random(0))
    tags = [a.tags for a in found]
    assert len(found) == 4
    assert tags[0] == tags[1]
    assert tags[2] == tags[3]
    assert tags[0] != tags[2]


def test_sparse_tags_return_fewer(factory, db_session):
    source = factory.article("source", tags="rare")
    factory.article("only sibling", days_ago=1, tags="rare")
    found = sample_relevant_articles(db_session, source, 9, rng=random.Random(5))
    assert [a.title for a in found] == ["only sibling"]


def test_unknown_tag_skipped(factory, db_session):
    source = factory.article("source", tags="known")
    sibling = factory.article("sibling", days_ago=1, tags="known")
    data = {"id": source.id, "tags": "known,ghost"}
    found = sample_relevant_articles(db_session, data, 4, rng=random.Random(2))
    assert [a.id for a in found] == [sibling.id]


def test_same_seed_same_result(factory, db_session):
    source = factory.article("source", tags="a,b,c,d,e")
    for title in "abcde":
        for i in range(4):
            factory.article(f"{title}{i}", days_ago=i + 1, tags=title)
    first = sample_relevant_articles(db_session, source, 6, rng=random.Random(9))
    second = sample_relevant_articles(db_session, source, 6, rng=random.Random(9))
    assert [a.id for a in first] == [a.id for a in second]
