from agora.services import emotions, markdowns, shortlinks
from agora.services.avatar import get_avatar_url
from agora.services.mentions import get_user_names, link_mentions

SERVE = "https://forum.example.com"


def test_markdown_and_clean():
    html = markdowns.clean(markdowns.to_html("# Title\n\n<img src=x onerror=alert(1)>"))
    assert "<h1>Title</h1>" in html
    assert "onerror" not in html


def test_clean_text_drops_tags():
    assert markdowns.clean_text("<b>hi</b> there") == "hi there"


def test_empty_inputs():
    assert markdowns.to_html("") == ""
    assert markdowns.clean("") == ""
    assert markdowns.clean_thought("") == ""
    assert emotions.convert("") == ""


def test_emoji_aliases():
    assert emotions.convert("ok :+1:") == "ok \U0001f44d"


def test_avatar_url():
    url = get_avatar_url(" Alice@Example.com ", size=48)
    assert url == get_avatar_url("alice@example.com", size=48)
    assert url.endswith("?s=48&d=identicon")


def test_mentions_only_real_users(factory, db_session):
    factory.user("bob")
    factory.user("bob-smith")
    assert get_user_names(db_session, "hi @bob and @bob-smith and @nobody") == {"bob", "bob-smith"}
    assert get_user_names(db_session, "no mentions") == set()


def test_link_mentions_respects_name_boundaries():
    content = link_mentions("@bob and @bob-smith", {"bob", "bob-smith"}, SERVE)
    assert content.count(f"{SERVE}/member/bob'>bob</a>") == 1
    assert content.count(f"{SERVE}/member/bob-smith'>bob-smith</a>") == 1


def test_link_article(factory, db_session):
    target = factory.article("A <title>")
    content = f"see {SERVE}/article/{target.id} and {SERVE}/article/1"
    linked = shortlinks.link_article(db_session, content, SERVE)
    assert f"<a href='{SERVE}/article/{target.id}'>A &lt;title&gt;</a>" in linked
    # Unknown articles stay as plain URLs
    assert linked.endswith(f"{SERVE}/article/1")


def test_link_article_skips_existing_anchor(factory, db_session):
    target = factory.article("T")
    content = f"<a href='{SERVE}/article/{target.id}'>x</a>"
    assert shortlinks.link_article(db_session, content, SERVE) == content


def test_link_tag(factory, db_session):
    factory.article("A", tags="python")
    linked = shortlinks.link_tag(db_session, "#python and #missing and a&#39;b", SERVE)
    assert f"<a href='{SERVE}/tag/python'>#python</a>" in linked
    assert "#missing" in linked
    assert "a&#39;b" in linked


def test_clean_thought_escapes_for_script_string():
    escaped = markdowns.clean_thought("<p>a\\b</p>\n\u2028\"")
    assert escaped == "<p>a\\\\b<\\/p>\\n\\u2028\\\""
