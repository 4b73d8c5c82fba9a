from typing import Callable, Optional

import httpx

from core.integrations.supabase.settings import SupabaseSettings


class StorageApiError(Exception):
    """Storage REST 接口返回非成功状态"""

    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text
        super().__init__(f"storage api error {status_code}: {text}")


class SupabaseStorage:
    def __init__(
        self,
        settings: SupabaseSettings,
        bucket: Optional[str] = None,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.url = settings.url
        self.key = settings.anon_key
        self.bucket = bucket or settings.images_bucket
        # 登录后使用用户 token，存储桶的 RLS 策略按用户生效
        self._token_provider = token_provider or (lambda: None)
        self._client = client or httpx.AsyncClient(timeout=30.0)

    def valid(self) -> bool:
        return bool(self.url and self.key and self.bucket)

    def _headers(self, content_type: str | None = None) -> dict[str, str]:
        token = self._token_provider() or self.key
        h = {"Authorization": f"Bearer {token}", "apikey": self.key}
        if content_type:
            h["Content-Type"] = content_type
        return h

    async def upload_bytes(
        self,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
    ) -> str:
        """上传对象并返回公开访问 URL"""
        url = f"{self.url}/storage/v1/object/{self.bucket}/{path}"
        resp = await self._client.post(
            url,
            headers=self._headers(content_type),
            content=data,
        )
        if resp.status_code not in (200, 201):
            raise StorageApiError(resp.status_code, resp.text)
        return self.public_url(path)

    def public_url(self, path: str) -> str:
        return f"{self.url}/storage/v1/object/public/{self.bucket}/{path}"

    async def remove(self, paths: list[str]) -> None:
        """批量删除对象"""
        url = f"{self.url}/storage/v1/object/{self.bucket}"
        resp = await self._client.request(
            "DELETE",
            url,
            headers=self._headers("application/json"),
            json={"prefixes": paths},
        )
        if resp.status_code != 200:
            raise StorageApiError(resp.status_code, resp.text)

    async def aclose(self) -> None:
        await self._client.aclose()
