import os
from dataclasses import dataclass

from dotenv import load_dotenv

from core.common.errors import ConfigError

load_dotenv()


@dataclass(frozen=True)
class SupabaseSettings:
    url: str
    anon_key: str
    images_bucket: str
    articles_table: str


def load_supabase_settings() -> SupabaseSettings:
    """读取 Supabase 连接配置，URL 与 anon key 缺失时直接报错，拒绝半配置启动"""
    url = os.getenv("SUPABASE_URL", "").rstrip("/")
    anon_key = os.getenv("SUPABASE_ANON_KEY", "")

    missing = [
        name
        for name, value in (("SUPABASE_URL", url), ("SUPABASE_ANON_KEY", anon_key))
        if not value
    ]
    if missing:
        raise ConfigError(f"缺少 Supabase 环境变量: {', '.join(missing)}")

    return SupabaseSettings(
        url=url,
        anon_key=anon_key,
        images_bucket=os.getenv("STORAGE_ARTICLE_IMAGES_BUCKET", "article-images"),
        articles_table=os.getenv("SUPABASE_ARTICLES_TABLE", "articles"),
    )
