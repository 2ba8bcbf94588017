from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from agora.config import get_settings
from agora.deps import current_user, get_article_service, templates
from agora.services.articles import ArticleQueryService
from agora.services.pagination import normalize_page, paginate
from agora.services.relations import count_tag_articles, get_tag_by_title

router = APIRouter(tags=["articles"])


def _sidebars(service: ArticleQueryService) -> dict:
    settings = get_settings()
    return {
        "hot_articles": service.get_hot_articles(settings.HOT_ARTICLES_CNT),
        "random_articles": service.get_random_articles(settings.RANDOM_ARTICLES_CNT),
    }


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    service: ArticleQueryService = Depends(get_article_service),
):
    settings = get_settings()
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "user": current_user(request),
            "articles": service.get_index_articles(settings.INDEX_ARTICLES_CNT),
            **_sidebars(service),
        },
    )


@router.get("/recent", response_class=HTMLResponse)
async def recent_articles(
    request: Request,
    p: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    settings = get_settings()
    page = normalize_page(p)
    page_size = settings.LATEST_ARTICLES_CNT

    articles = service.get_recent_articles(page, page_size)
    pagination = paginate(
        page, page_size, service.count_recent_articles(), settings.LATEST_ARTICLES_WINDOW_SIZE
    )
    return templates.TemplateResponse(
        request,
        "recent.html",
        {
            "user": current_user(request),
            "articles": articles,
            "pagination": pagination,
            "page_path": "/recent",
            **_sidebars(service),
        },
    )


@router.get("/tag/{title}", response_class=HTMLResponse)
async def tag_articles(
    request: Request,
    title: str,
    p: str | None = None,
    service: ArticleQueryService = Depends(get_article_service),
):
    settings = get_settings()
    user = current_user(request)
    tag = get_tag_by_title(service.db, title)
    if tag is None:
        return templates.TemplateResponse(
            request, "404.html", {"user": user}, status_code=404
        )

    page = normalize_page(p)
    page_size = settings.TAG_ARTICLES_CNT
    articles = service.get_articles_by_tag(tag, page, page_size)
    pagination = paginate(
        page,
        page_size,
        count_tag_articles(service.db, [tag.id]),
        settings.TAG_ARTICLES_WINDOW_SIZE,
    )
    return templates.TemplateResponse(
        request,
        "tag.html",
        {
            "user": user,
            "tag": tag,
            "articles": articles,
            "pagination": pagination,
            "page_path": f"/tag/{tag.title}",
        },
    )


@router.get("/article/{article_id}", response_class=HTMLResponse)
async def article_detail(
    request: Request,
    article_id: int,
    service: ArticleQueryService = Depends(get_article_service),
):
    settings = get_settings()
    user = current_user(request)
    article = service.get_article_by_id(article_id)
    if article is None:
        return templates.TemplateResponse(
            request, "404.html", {"user": user}, status_code=404
        )

    relevant = service.get_relevant_articles(article, settings.RELEVANT_ARTICLES_CNT)
    article = service.process_article_content(article, user)
    return templates.TemplateResponse(
        request,
        "article.html",
        {
            "user": user,
            "article": article,
            "relevant_articles": relevant,
        },
    )
