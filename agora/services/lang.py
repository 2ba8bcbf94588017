from functools import lru_cache

DEFAULT_LOCALE = "en_US"

BUNDLES: dict[str, dict[str, str]] = {
    "en_US": {
        "article_title_block": "This article has been blocked",
        "article_content_block": "The content of this article has been blocked by the administrator.",
        "article_discussion": (
            "This is a private discussion started by {user}, visible only to the "
            "author and the members it mentions."
        ),
        "years_ago": "years ago",
        "months_ago": "months ago",
        "weeks_ago": "weeks ago",
        "days_ago": "days ago",
        "hours_ago": "hours ago",
        "minutes_ago": "minutes ago",
        "just_now": "just now",
        "mon": "Monday",
        "tue": "Tuesday",
        "wed": "Wednesday",
        "thu": "Thursday",
        "fri": "Friday",
        "sat": "Saturday",
        "sun": "Sunday",
        "recent": "Recent",
        "hot": "Hot",
        "random": "Random",
        "relevant": "Relevant",
    },
    "zh_CN": {
        "article_title_block": "该帖子已被屏蔽",
        "article_content_block": "该帖子内容已被管理员屏蔽。",
        "article_discussion": "这是由 {user} 发起的讨论，仅作者和被 @ 的成员可见。",
        "years_ago": "年前",
        "months_ago": "个月前",
        "weeks_ago": "周前",
        "days_ago": "天前",
        "hours_ago": "小时前",
        "minutes_ago": "分钟前",
        "just_now": "刚刚",
        "mon": "星期一",
        "tue": "星期二",
        "wed": "星期三",
        "thu": "星期四",
        "fri": "星期五",
        "sat": "星期六",
        "sun": "星期日",
        "recent": "最近",
        "hot": "热议",
        "random": "随便看看",
        "relevant": "相关帖子",
    },
}


class LangService:
    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = locale if locale in BUNDLES else DEFAULT_LOCALE

    def get(self, key: str) -> str:
        bundle = BUNDLES[self.locale]
        if key in bundle:
            return bundle[key]
        return BUNDLES[DEFAULT_LOCALE].get(key, key)


@lru_cache
def get_lang(locale: str = DEFAULT_LOCALE) -> LangService:
    return LangService(locale)
