"""仓库列表分页拉取."""

import logging

import httpx
from pydantic import ValidationError

from autopull.core.platforms import Platform
from autopull.errors import FetchError
from autopull.models.repository import RepositoryRecord

logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class RepositoryFetcher:
    """按页拉取用户的全部仓库."""

    def __init__(
        self,
        platform: Platform,
        client: httpx.AsyncClient | None = None,
        per_page: int = PAGE_SIZE,
    ) -> None:
        self.platform = platform
        self.per_page = per_page
        self._client = client
        self._owns_client = client is None

    async def fetch_all(self) -> list[RepositoryRecord]:
        """
        拉取全部仓库记录.

        从第 1 页开始顺序请求，遇到空页或不满一页即停止。
        任意一页失败都会抛出 FetchError，不返回部分结果。

        Returns:
            list[RepositoryRecord]: 按页顺序拼接的仓库记录
        """
        client = self._client or httpx.AsyncClient(timeout=30.0)
        try:
            records: list[RepositoryRecord] = []
            page = 1
            while True:
                items = await self._fetch_page(client, page)
                records.extend(items)
                if len(items) < self.per_page:
                    break
                page += 1
        finally:
            if self._owns_client:
                await client.aclose()

        logger.info(f"共拉取 {len(records)} 个仓库（{page} 页）")
        return records

    async def _fetch_page(
        self,
        client: httpx.AsyncClient,
        page: int,
    ) -> list[RepositoryRecord]:
        """拉取单页."""
        url, params = self.platform.list_request(page, self.per_page)
        try:
            response = await client.get(
                url,
                params=params,
                headers=self.platform.auth_headers(),
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            msg = f"拉取仓库列表失败（第 {page} 页）: HTTP {e.response.status_code}"
            raise FetchError(msg) from e
        except httpx.HTTPError as e:
            msg = f"拉取仓库列表失败（第 {page} 页）: {e}"
            raise FetchError(msg) from e
        except ValueError as e:
            msg = f"仓库列表响应不是合法 JSON（第 {page} 页）"
            raise FetchError(msg) from e

        if not isinstance(data, list):
            msg = f"仓库列表响应格式错误（第 {page} 页）: 期望数组"
            raise FetchError(msg)

        try:
            return [RepositoryRecord.model_validate(item) for item in data]
        except ValidationError as e:
            msg = f"仓库记录缺少 name/full_name 字段（第 {page} 页）"
            raise FetchError(msg) from e
