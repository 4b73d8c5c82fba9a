from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from core.articles.model import DisplayArticle
from core.common.utils.dates import format_relative_time


class ArticleUpdate(BaseModel):
    content: str = Field(..., min_length=1, description="文章内容")


def serialize_article(
    article: DisplayArticle, is_owner: bool, now: Optional[datetime] = None
) -> Dict[str, Any]:
    """文章输出结构：在展示字段之外附带相对时间和是否本人发布"""
    data = article.model_dump(mode="json")
    data["created_label"] = format_relative_time(article.created_at, now)
    data["is_owner"] = is_owner
    return data
