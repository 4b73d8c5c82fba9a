from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from core.articles import ArticleRepository, ArticleStore
from core.auth import SessionStore
from core.common.app_settings import AppSettings, settings as app_settings
from core.common.log import logger
from core.integrations.supabase import (
    FileSessionStorage,
    SupabaseAuthBackend,
    SupabaseClient,
    SupabaseStorage,
    create_supabase,
    load_supabase_settings,
)
from core.navigation import NavigationGuard


@dataclass
class AppContext:
    """应用上下文：持有会话、文章、导航守卫等全部组件，随应用启动创建、关闭时释放"""

    session_store: SessionStore
    article_store: ArticleStore
    guard: NavigationGuard
    storage: Any = None

    async def startup(self) -> None:
        await self.session_store.initialize()

    async def shutdown(self) -> None:
        self.article_store.dispose()
        self.session_store.close()
        if self.storage is not None:
            await self.storage.aclose()
        logger.info("应用上下文已关闭")


def build_context(auth_backend: Any, record_client: Any, storage: Any, table: Optional[str] = None) -> AppContext:
    """用给定的后端组件装配上下文"""
    session_store = SessionStore(auth_backend)
    repo = ArticleRepository(record_client, storage, table=table)
    return AppContext(
        session_store=session_store,
        article_store=ArticleStore(repo, session_store),
        guard=NavigationGuard(session_store),
        storage=storage,
    )


def create_app_context(settings: Optional[AppSettings] = None) -> AppContext:
    """按环境配置创建基于 Supabase 的上下文，缺少必需配置时抛出 ConfigError"""
    settings = settings or app_settings
    supabase_settings = load_supabase_settings()

    client = create_supabase(
        supabase_settings, storage=FileSessionStorage(settings.session_file)
    )
    auth_backend = SupabaseAuthBackend(client)
    storage = SupabaseStorage(supabase_settings, token_provider=auth_backend.access_token)

    return build_context(
        auth_backend,
        SupabaseClient(client),
        storage,
        table=supabase_settings.articles_table,
    )
