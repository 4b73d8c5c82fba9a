from contextlib import asynccontextmanager
from typing import Any, List, Optional

from core.articles.model import Article, DisplayArticle, ImageUpload, OperationStatus
from core.auth.model import SessionChange
from core.auth.store import SessionStore
from core.common.errors import ERROR_MESSAGES, AuthError
from core.common.log import logger


class ArticleStore:
    """文章状态：本地文章列表 + 操作状态，结果以服务端确认的数据为准

    本地列表只在后端成功后更新；创建成功的文章插入到列表头部，与"最新在前"的排序一致。
    会话身份变化时重新计算所有文章的 author_label。
    """

    def __init__(self, repo: Any, session_store: SessionStore) -> None:
        self.repo = repo
        self.session_store = session_store
        self._articles: List[DisplayArticle] = []
        self._status = OperationStatus()
        self._in_flight = 0
        self._disposed = False
        self._subscription = session_store.changes.subscribe(self._on_session_change)

    @property
    def articles(self) -> List[DisplayArticle]:
        return list(self._articles)

    @property
    def status(self) -> OperationStatus:
        return self._status.model_copy()

    @property
    def loading(self) -> bool:
        return self._status.loading

    @property
    def error(self) -> Optional[str]:
        return self._status.error

    @property
    def disposed(self) -> bool:
        return self._disposed

    def enrich(self, article: Article) -> DisplayArticle:
        """根据当前会话补充作者展示名"""
        user = self.session_store.current_user
        if user is not None and article.user_id == user.user_id:
            label = user.email or "User"
        else:
            label = f"User {article.user_id[:8]}"
        data = article.model_dump(exclude={"author_label"})
        return DisplayArticle(**data, author_label=label)

    def is_owner(self, article: Article) -> bool:
        user = self.session_store.current_user
        return user is not None and user.user_id == article.user_id

    def _on_session_change(self, change: SessionChange) -> None:
        if self._disposed:
            return
        self._articles = [self.enrich(article) for article in self._articles]

    @asynccontextmanager
    async def _operation(self, fallback_message: str):
        """统一的操作状态：开始时置 loading 并清空 error，失败记录 error 后继续抛出

        并发操作按计数维护 loading，最后一个操作结束才清除
        """
        self._in_flight += 1
        if not self._disposed:
            self._status = OperationStatus(loading=True, error=None)
        try:
            yield
        except Exception as e:
            message = getattr(e, "message", None) or str(e) or fallback_message
            logger.error(f"{fallback_message}: {message}")
            if not self._disposed:
                self._status.error = message
            raise
        finally:
            self._in_flight -= 1
            if not self._disposed:
                self._status.loading = self._in_flight > 0

    async def fetch_all(self) -> List[DisplayArticle]:
        """拉取全部文章并整体替换本地列表"""
        async with self._operation(ERROR_MESSAGES["ARTICLE_FETCH_FAILED"]):
            articles = await self.repo.list_articles()
            enriched = [self.enrich(article) for article in articles]
            if not self._disposed:
                self._articles = enriched
            return enriched

    async def create(self, content: str, image: Optional[ImageUpload] = None) -> DisplayArticle:
        """创建文章，必须已登录；成功后插入列表头部"""
        user = self.session_store.current_user
        if user is None:
            raise AuthError(ERROR_MESSAGES["AUTH_REQUIRED"])

        async with self._operation(ERROR_MESSAGES["ARTICLE_CREATE_FAILED"]):
            article = await self.repo.create_article(user.user_id, content, image)
            enriched = self.enrich(article)
            if not self._disposed:
                self._articles.insert(0, enriched)
            return enriched

    async def update(self, article_id: str, content: str) -> DisplayArticle:
        """更新文章并原位替换；本地找不到对应文章时忽略，不插入"""
        async with self._operation(ERROR_MESSAGES["ARTICLE_UPDATE_FAILED"]):
            article = await self.repo.update_article(article_id, content)
            enriched = self.enrich(article)
            if not self._disposed:
                for index, item in enumerate(self._articles):
                    if item.id == article_id:
                        self._articles[index] = enriched
                        break
                else:
                    logger.debug(f"本地列表中没有文章 id={article_id}，跳过更新")
            return enriched

    async def delete(self, article_id: str, image_url: Optional[str] = None) -> None:
        """删除文章并从本地列表移除"""
        async with self._operation(ERROR_MESSAGES["ARTICLE_DELETE_FAILED"]):
            await self.repo.remove_article(article_id, image_url)
            if not self._disposed:
                self._articles = [a for a in self._articles if a.id != article_id]

    def dispose(self) -> None:
        """视图销毁后调用：取消订阅，之后完成的操作不再修改本地状态"""
        self._disposed = True
        self._subscription.unsubscribe()
