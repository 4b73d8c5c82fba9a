from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from apis.deps import get_context, http_error
from core.articles import ImageUpload
from core.common.errors import BoardError
from core.context import AppContext
from schemas import ArticleUpdate, serialize_article, success_response

router = APIRouter(prefix="/articles", tags=["文章管理"])


@router.get("", summary="获取文章列表")
async def get_articles(ctx: AppContext = Depends(get_context)):
    store = ctx.article_store
    try:
        articles = await store.fetch_all()
    except BoardError as e:
        raise http_error(e)

    return success_response(
        {
            "list": [serialize_article(a, store.is_owner(a)) for a in articles],
            "total": len(articles),
        }
    )


@router.post("", summary="发布文章")
async def create_article(
    content: str = Form(..., min_length=1),
    image: Optional[UploadFile] = File(None),
    ctx: AppContext = Depends(get_context),
):
    upload = None
    if image is not None and image.filename:
        upload = ImageUpload(
            filename=image.filename,
            data=await image.read(),
            content_type=image.content_type or "application/octet-stream",
        )

    store = ctx.article_store
    try:
        article = await store.create(content, upload)
    except BoardError as e:
        raise http_error(e)
    return success_response(serialize_article(article, store.is_owner(article)))


@router.put("/{article_id}", summary="更新文章")
async def update_article(
    article_id: str,
    body: ArticleUpdate,
    ctx: AppContext = Depends(get_context),
):
    store = ctx.article_store
    try:
        article = await store.update(article_id, body.content)
    except BoardError as e:
        raise http_error(e)
    return success_response(serialize_article(article, store.is_owner(article)))


@router.delete("/{article_id}", summary="删除文章")
async def delete_article(
    article_id: str,
    image_url: Optional[str] = Query(None),
    ctx: AppContext = Depends(get_context),
):
    store = ctx.article_store
    # 未显式传入时使用本地列表里记录的图片地址
    if image_url is None:
        image_url = next(
            (a.image_url for a in store.articles if a.id == article_id), None
        )
    try:
        await store.delete(article_id, image_url)
    except BoardError as e:
        raise http_error(e)
    return success_response(message="删除成功")
