import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
from starlette.responses import RedirectResponse

from agora.config import get_settings
from agora.deps import _LoginRequired, templates
from agora.errors import ServiceError
from agora.services.heat import InMemoryViewCounter

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title=settings.APP_TITLE)
    app.state.view_counter = InMemoryViewCounter()

    static_dir = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    # Register routes
    from agora.api.v1 import api_router
    from agora.routes.admin import router as admin_router
    from agora.routes.articles import router as articles_router
    from agora.routes.auth import router as auth_router
    from agora.routes.channel import router as channel_router

    app.include_router(auth_router)
    app.include_router(articles_router)
    app.include_router(channel_router)
    app.include_router(admin_router, prefix="/admin")
    app.include_router(api_router)

    @app.exception_handler(_LoginRequired)
    async def login_required_handler(request: Request, exc: _LoginRequired):
        return RedirectResponse("/login", status_code=303)

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        return JSONResponse({"detail": str(exc)}, status_code=500)

    templates.env.globals["app_title"] = settings.APP_TITLE
    templates.env.globals["serve_path"] = settings.SERVE_PATH

    # Add SessionMiddleware last so it wraps everything
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SECRET_KEY,
        session_cookie="agora_session",
        max_age=86400 * 7,
    )

    return app


app = create_app()
