from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class Article(BaseModel):
    # 兼容 bigint 主键
    model_config = ConfigDict(coerce_numbers_to_str=True)

    id: str
    user_id: str
    content: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class DisplayArticle(Article):
    """展示用文章，author_label 由当前会话推导，不落库"""
    author_label: str


class ImageUpload(BaseModel):
    """随文章一起创建的图片"""
    filename: str
    data: bytes
    content_type: str = "application/octet-stream"


class OperationStatus(BaseModel):
    """单次操作的瞬时状态"""
    loading: bool = False
    error: Optional[str] = None
