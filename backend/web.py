from contextlib import asynccontextmanager
from typing import Callable

from fastapi import FastAPI

from apis.article import router as article_router
from apis.auth import router as auth_router
from apis.pages import router as pages_router
from core.common.app_settings import settings
from core.common.base import API_BASE, VERSION
from core.context import AppContext, create_app_context


def create_app(context_factory: Callable[[], AppContext] = create_app_context) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        context = context_factory()
        await context.startup()
        app.state.context = context
        try:
            yield
        finally:
            await context.shutdown()

    app = FastAPI(title=settings.app_name, version=VERSION, lifespan=lifespan)
    app.include_router(auth_router, prefix=API_BASE)
    app.include_router(article_router, prefix=API_BASE)
    app.include_router(pages_router)
    return app


app = create_app()
