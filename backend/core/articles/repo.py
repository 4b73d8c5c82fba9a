import time
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional, Type

from pydantic import ValidationError

from core.articles.model import Article, ImageUpload
from core.common.errors import (
    BoardError,
    CreateError,
    DeleteError,
    FetchError,
    NotFoundError,
    UpdateError,
    UploadError,
)
from core.common.log import logger


def build_image_path(owner_id: str, filename: str, now_ms: int) -> str:
    """图片按用户分目录存放：{owner_id}/{毫秒时间戳}.{扩展名}"""
    extension = filename.rsplit(".", 1)[-1]
    return f"{owner_id}/{now_ms}.{extension}"


def image_path_from_url(image_url: str, bucket: str) -> Optional[str]:
    """从公开 URL 还原存储路径，URL 中找不到桶名时返回 None"""
    marker = f"/{bucket}/"
    if marker not in image_url:
        return None
    path = image_url.split(marker, 1)[1]
    return path or None


def _to_article(row: Any, error_cls: Type[BoardError]) -> Article:
    """把数据行转换为 Article，字段不合法时按所属操作的错误类型抛出"""
    try:
        return Article.model_validate(row)
    except ValidationError as e:
        logger.error(f"文章数据格式不合法: {e}")
        raise error_cls(str(e)) from e


class ArticleRepository:
    """文章数据访问层，负责记录增删改查以及与文章生命周期绑定的图片上传/删除"""

    ARTICLE_TABLE = "articles"

    def __init__(
        self,
        client: Any,
        storage: Any,
        table: Optional[str] = None,
        clock_ms: Optional[Callable[[], int]] = None,
    ):
        self.client = client
        self.storage = storage
        self.table = table or self.ARTICLE_TABLE
        self._clock_ms = clock_ms or (lambda: int(time.time() * 1000))

    async def list_articles(self) -> List[Article]:
        """获取全部文章，按创建时间倒序"""
        try:
            rows = await self.client.select(self.table, order="created_at.desc")
        except Exception as e:
            logger.error(f"获取文章列表失败: {e}")
            raise FetchError(str(e)) from e
        return [_to_article(row, FetchError) for row in rows]

    async def upload_image(self, owner_id: str, image: ImageUpload) -> str:
        """上传文章图片，返回公开 URL"""
        path = build_image_path(owner_id, image.filename, self._clock_ms())
        try:
            return await self.storage.upload_bytes(path, image.data, image.content_type)
        except Exception as e:
            logger.error(f"上传文章图片失败 path={path}: {e}")
            raise UploadError(str(e)) from e

    async def delete_image(self, image_url: str) -> None:
        """删除文章图片；失败只记录日志，不影响调用方"""
        path = image_path_from_url(image_url, self.storage.bucket)
        if not path:
            return
        try:
            await self.storage.remove([path])
        except Exception as e:
            logger.warning(f"删除文章图片失败 path={path}: {e}")

    async def create_article(
        self, owner_id: str, content: str, image: Optional[ImageUpload] = None
    ) -> Article:
        """创建文章；有图片时先上传，上传失败则不创建记录"""
        image_url = None
        if image is not None:
            image_url = await self.upload_image(owner_id, image)

        try:
            row = await self.client.insert(
                self.table,
                {"user_id": owner_id, "content": content, "image_url": image_url},
            )
        except Exception as e:
            logger.error(f"创建文章失败: {e}")
            if image_url:
                await self.delete_image(image_url)
            raise CreateError(str(e)) from e

        if not row:
            if image_url:
                await self.delete_image(image_url)
            raise CreateError()
        return _to_article(row, CreateError)

    async def update_article(self, article_id: str, content: str) -> Article:
        """更新文章内容，并刷新 updated_at"""
        try:
            rows = await self.client.update(
                self.table,
                {
                    "content": content,
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                },
                filters={"id": article_id},
            )
        except Exception as e:
            logger.error(f"更新文章失败 id={article_id}: {e}")
            raise UpdateError(str(e)) from e

        if not rows:
            raise NotFoundError(f"Article {article_id} not found")
        return _to_article(rows[0], UpdateError)

    async def remove_article(self, article_id: str, image_url: Optional[str] = None) -> None:
        """删除文章：先尽力删除图片，再删除记录，只有记录删除失败才报错"""
        if image_url:
            await self.delete_image(image_url)

        try:
            await self.client.delete(self.table, {"id": article_id})
        except Exception as e:
            logger.error(f"删除文章失败 id={article_id}: {e}")
            raise DeleteError(str(e)) from e
