from schemas.base import success_response, error_response, view_response
from schemas.article import ArticleUpdate, serialize_article


__all__ = [
    "success_response",
    "error_response",
    "view_response",
    "ArticleUpdate",
    "serialize_article",
]
