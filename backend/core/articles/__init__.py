"""文章领域模块。"""

from core.articles.model import Article, DisplayArticle, ImageUpload, OperationStatus
from core.articles.repo import ArticleRepository, build_image_path, image_path_from_url
from core.articles.store import ArticleStore

__all__ = [
    "Article",
    "DisplayArticle",
    "ImageUpload",
    "OperationStatus",
    "ArticleRepository",
    "ArticleStore",
    "build_image_path",
    "image_path_from_url",
]
