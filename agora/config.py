from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    SECRET_KEY: str = "change-me"
    DATABASE_URL: str = "sqlite:///./agora.db"

    APP_TITLE: str = "Agora"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Absolute base URL for permalinks and profile links
    SERVE_PATH: str = "http://localhost:8000"
    LOCALE: str = "en_US"

    # API auth
    API_TOKEN: str = ""

    # Listing sizes
    LATEST_ARTICLES_CNT: int = 20
    LATEST_ARTICLES_WINDOW_SIZE: int = 10
    INDEX_ARTICLES_CNT: int = 30
    HOT_ARTICLES_CNT: int = 10
    HOT_ARTICLE_DAYS: int = 15
    RANDOM_ARTICLES_CNT: int = 10
    RELEVANT_ARTICLES_CNT: int = 9
    TAG_ARTICLES_CNT: int = 20
    TAG_ARTICLES_WINDOW_SIZE: int = 10
    USER_ARTICLES_CNT: int = 20

    # Participants shown per listing
    LATEST_ARTICLE_PARTICIPANTS_CNT: int = 5
    INDEX_ARTICLE_PARTICIPANTS_CNT: int = 5
    TAG_ARTICLE_PARTICIPANTS_CNT: int = 5
    CITY_ARTICLE_PARTICIPANTS_CNT: int = 5

    DEFAULT_THUMBNAIL_URL: str = "/static/images/user-thumbnail.png"
    AVATAR_BASE_URL: str = "https://secure.gravatar.com/avatar"

    NEWS_TAG_TITLE: str = "Announcement"
    BROADCAST_CLIENT_ARTICLE_ID: str = "aBroadcast"

    # Any decimal module rounding mode, e.g. ROUND_HALF_UP
    VIEW_COUNT_ROUNDING: str = "ROUND_HALF_EVEN"

    # External search index
    SEARCH_SERVER: str = "http://localhost:9200"
    SEARCH_INDEX_NAME: str = "agora"
    SEARCH_TIMEOUT: float = 10.0


@lru_cache
def get_settings() -> Settings:
    return Settings()
