"""通过 GitHub REST API 获取仓库列表"""

import json
from typing import Optional, Protocol

import httpx
from loguru import logger

from ..models.repo import Repo, decode_repos
from .config import DEFAULT_API_URL
from .errors import BadStatusError, DecodingError, TransportError


class RepoAPIClient(Protocol):
    """仓库列表数据源, 测试时可替换为 MockRepoAPIClient"""

    async def get_repos(self) -> list[Repo]: ...


class GitHubRepoAPIClient:
    """从 GitHub 获取仓库列表"""

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        use_cache: bool = True,
        user_agent: str = "gh-repo-list/0.1",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_url = api_url
        self.timeout = timeout
        self.use_cache = use_cache
        self.user_agent = user_agent
        self._transport = transport
        # url -> 最近一次成功解码的响应体
        self._cache: dict[str, bytes] = {}

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.user_agent,
        }

    def clear_cache(self) -> None:
        self._cache.clear()

    async def get_repos(self) -> list[Repo]:
        """
        获取仓库列表

        有缓存时直接返回缓存数据, 没有缓存才请求网络

        Raises:
            TransportError: 连接或超时失败
            BadStatusError: 状态码不是 200
            DecodingError: 响应内容不符合预期结构
        """
        url = self.api_url
        if self.use_cache and url in self._cache:
            logger.debug(f"Cache hit for {url}")
            return self._decode(self._cache[url])

        logger.debug(f"GET {url}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(url, headers=self._headers())
        except httpx.TransportError as e:
            logger.warning(f"Request to {url} failed: {e!r}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        if resp.status_code != 200:
            logger.warning(f"GitHub API returned status={resp.status_code} for {url}")
            raise BadStatusError(resp.status_code, resp.text)

        repos = self._decode(resp.content)
        if self.use_cache:
            self._cache[url] = resp.content
        logger.debug(f"Fetched {len(repos)} repos from {url}")
        return repos

    @staticmethod
    def _decode(body: bytes) -> list[Repo]:
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise DecodingError(f"响应不是合法的 JSON: {e}") from e
        return decode_repos(payload)
