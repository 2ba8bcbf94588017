import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from agora.clients.search import SearchIndexClient, get_search_client
from agora.config import get_settings
from agora.deps import get_article_service, require_admin, templates
from agora.services.articles import ArticleQueryService
from agora.services.pagination import normalize_page

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin"])

PER_PAGE = 20


@router.get("/articles", response_class=HTMLResponse)
async def admin_articles(
    request: Request,
    p: str | None = None,
    user=Depends(require_admin),
    service: ArticleQueryService = Depends(get_article_service),
):
    settings = get_settings()
    page = normalize_page(p)
    result = service.get_articles(page, PER_PAGE, settings.LATEST_ARTICLES_WINDOW_SIZE)
    return templates.TemplateResponse(
        request,
        "admin/articles.html",
        {
            "user": user,
            "articles": result["articles"],
            "pagination": result["pagination"],
            "page": page,
            "indexed": request.query_params.get("indexed"),
        },
    )


@router.post("/articles/{article_id}/reindex")
async def reindex_article(
    article_id: int,
    user=Depends(require_admin),
    service: ArticleQueryService = Depends(get_article_service),
    search: SearchIndexClient = Depends(get_search_client),
):
    article = service.get_article(article_id)
    if article is None:
        return RedirectResponse("/admin/articles", status_code=303)

    ok = search.update_document(article.to_dict(), "article", article.id)
    logger.info("Reindexed article %d: %s", article.id, "ok" if ok else "failed")
    return RedirectResponse(f"/admin/articles?indexed={int(ok)}", status_code=303)
