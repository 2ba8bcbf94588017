from fastapi import APIRouter, Depends, HTTPException, Request

from agora.api.v1.auth import require_api_token
from agora.config import get_settings
from agora.deps import current_user, get_article_service
from agora.schemas.article import ArticleLinkOut, ArticleListOut, ArticleOut, StoryOut
from agora.services.articles import ArticleQueryService
from agora.services.pagination import normalize_page, paginate
from agora.services.relations import count_tag_articles, get_tag_by_title

router = APIRouter(dependencies=[Depends(require_api_token)])


@router.get("/articles/recent", response_model=ArticleListOut)
async def recent_articles(
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    """Recent articles with the pagination window."""
    settings = get_settings()
    page_num = normalize_page(page)
    page_size = settings.LATEST_ARTICLES_CNT
    return {
        "items": service.get_recent_articles(page_num, page_size),
        "pagination": paginate(
            page_num,
            page_size,
            service.count_recent_articles(),
            settings.LATEST_ARTICLES_WINDOW_SIZE,
        ).to_dict(),
    }


@router.get("/articles/hot", response_model=ArticleListOut)
async def hot_articles(service: ArticleQueryService = Depends(get_article_service)):
    return {"items": service.get_hot_articles(get_settings().HOT_ARTICLES_CNT)}


@router.get("/articles/top", response_model=ArticleListOut)
async def top_articles(
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    settings = get_settings()
    return {"items": service.get_top_articles(normalize_page(page), settings.INDEX_ARTICLES_CNT)}


@router.get("/articles/random", response_model=ArticleListOut)
async def random_articles(service: ArticleQueryService = Depends(get_article_service)):
    return {"items": service.get_random_articles(get_settings().RANDOM_ARTICLES_CNT)}


@router.get("/articles/broadcasts")
async def broadcasts(
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    """Broadcast articles (no content)."""
    items = service.get_broadcasts(normalize_page(page), get_settings().LATEST_ARTICLES_CNT)
    return {"items": items}


@router.get("/articles/news", response_model=list[ArticleLinkOut])
async def news(
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    return service.get_news(normalize_page(page), get_settings().LATEST_ARTICLES_CNT)


@router.get("/articles/interests", response_model=list[ArticleLinkOut])
async def interests(
    tags: str = "",
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    """Articles of the comma separated ``tags`` followed by the latest ones."""
    titles = [t.strip() for t in tags.split(",") if t.strip()]
    return service.get_interests(normalize_page(page), get_settings().LATEST_ARTICLES_CNT, titles)


@router.get("/articles/{article_id}", response_model=ArticleOut)
async def get_article(
    request: Request,
    article_id: int,
    service: ArticleQueryService = Depends(get_article_service),
):
    """A single article as the current session user may see it."""
    article = service.get_article_by_id(article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return service.process_article_content(article, current_user(request))


@router.get("/articles/{article_id}/relevant", response_model=ArticleListOut)
async def relevant_articles(
    article_id: int,
    service: ArticleQueryService = Depends(get_article_service),
):
    article = service.get_article(article_id)
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return {"items": service.get_relevant_articles(article, get_settings().RELEVANT_ARTICLES_CNT)}


@router.get("/tags/{title}/articles", response_model=ArticleListOut)
async def tag_articles(
    title: str,
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    settings = get_settings()
    tag = get_tag_by_title(service.db, title)
    if tag is None:
        raise HTTPException(status_code=404, detail="Tag not found")

    page_num = normalize_page(page)
    page_size = settings.TAG_ARTICLES_CNT
    return {
        "items": service.get_articles_by_tag(tag, page_num, page_size),
        "pagination": paginate(
            page_num,
            page_size,
            count_tag_articles(service.db, [tag.id]),
            settings.TAG_ARTICLES_WINDOW_SIZE,
        ).to_dict(),
    }


@router.get("/cities/{city}/articles", response_model=ArticleListOut)
async def city_articles(
    city: str,
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    items = service.get_articles_by_city(city, normalize_page(page), get_settings().LATEST_ARTICLES_CNT)
    return {"items": items}


@router.get("/users/{user_id}/articles", response_model=ArticleListOut)
async def user_articles(
    user_id: int,
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    items = service.get_user_articles(user_id, normalize_page(page), get_settings().USER_ARTICLES_CNT)
    return {"items": items}


@router.get("/stories/recent", response_model=list[StoryOut])
async def recent_stories(
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    return service.get_recent_stories(normalize_page(page), get_settings().LATEST_ARTICLES_CNT)


@router.get("/stories/top", response_model=list[StoryOut])
async def top_stories(
    page: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    return service.get_top_stories(normalize_page(page), get_settings().INDEX_ARTICLES_CNT)
