"""预览和测试用的仓库数据源"""

import asyncio
from typing import Awaitable, Callable, Iterable

from ..models.repo import Repo

MOCK_REPOS = [
    Repo(
        id=1,
        name="swift",
        full_name="apple/swift",
        owner="apple",
        description="The Swift Programming Language",
        stargazers_count=67000,
        html_url="https://github.com/apple/swift",
        language="C++",
    ),
    Repo(
        id=2,
        name="cpython",
        full_name="python/cpython",
        owner="python",
        description="The Python programming language",
        stargazers_count=62000,
        html_url="https://github.com/python/cpython",
        language="Python",
    ),
    Repo(
        id=3,
        name="rich",
        full_name="Textualize/rich",
        owner="Textualize",
        description="Rich is a Python library for rich text and beautiful formatting in the terminal.",
        stargazers_count=49000,
        html_url="https://github.com/Textualize/rich",
        language="Python",
    ),
    Repo(
        id=4,
        name="httpx",
        full_name="encode/httpx",
        owner="encode",
        description="A next generation HTTP client for Python.",
        stargazers_count=13000,
        html_url="https://github.com/encode/httpx",
        language="Python",
    ),
    Repo(
        id=5,
        name="dotfiles",
        full_name="octocat/dotfiles",
        owner="octocat",
        description=None,
        stargazers_count=0,
        html_url="https://github.com/octocat/dotfiles",
    ),
]


class MockRepoAPIClient:
    """把任意协程函数包装成仓库数据源"""

    def __init__(self, get_repos: Callable[[], Awaitable[list[Repo]]]):
        self._get_repos = get_repos
        self.calls = 0

    async def get_repos(self) -> list[Repo]:
        self.calls += 1
        return await self._get_repos()


def returning(repos: Iterable[Repo] = MOCK_REPOS) -> MockRepoAPIClient:
    """总是返回固定数据"""
    fixed = list(repos)

    async def get_repos() -> list[Repo]:
        return list(fixed)

    return MockRepoAPIClient(get_repos)


def failing(error: Exception) -> MockRepoAPIClient:
    """总是抛出同一个错误"""

    async def get_repos() -> list[Repo]:
        raise error

    return MockRepoAPIClient(get_repos)


def never_resolving() -> MockRepoAPIClient:
    """永远不返回, 用于展示加载状态"""

    async def get_repos() -> list[Repo]:
        await asyncio.get_running_loop().create_future()
        return []

    return MockRepoAPIClient(get_repos)


PREVIEWS: dict[str, Callable[[], MockRepoAPIClient]] = {
    "default": returning,
    "loading": never_resolving,
    "error": lambda: failing(RuntimeError("preview error")),
}
