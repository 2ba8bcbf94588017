from agora.services.lang import LangService, get_lang


def test_english_bundle():
    assert LangService("en_US").get("just_now") == "just now"


def test_chinese_bundle():
    assert LangService("zh_CN").get("just_now") == "刚刚"


def test_unknown_locale_uses_english():
    assert LangService("fr_FR").get("hot") == "Hot"


def test_unknown_key_returns_key():
    assert LangService("en_US").get("no_such_label") == "no_such_label"


def test_get_lang_is_cached():
    assert get_lang("en_US") is get_lang("en_US")
