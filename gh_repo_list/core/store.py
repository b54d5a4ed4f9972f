"""仓库列表状态: 加载中 / 已加载 / 失败"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Union

from loguru import logger

from ..models.repo import Repo
from .client import RepoAPIClient


@dataclass(frozen=True)
class Loading:
    name = "loading"


@dataclass(frozen=True)
class Loaded:
    repos: tuple[Repo, ...]

    name = "loaded"


@dataclass(frozen=True)
class Failed:
    error: Exception

    name = "failed"


FetchState = Union[Loading, Loaded, Failed]


class Action(Enum):
    ON_APPEAR = "on_appear"
    ON_RETRY_BUTTON_TAPPED = "on_retry_button_tapped"


class ReposStore:
    """
    持有当前的 FetchState, 并在每次变化时通知订阅者

    同时发起多次加载时不做取消, 最后完成的一次决定最终状态
    """

    def __init__(self, repo_api_client: RepoAPIClient):
        self.repo_api_client = repo_api_client
        self._state: FetchState = Loading()
        self._subscribers: list[Callable[[FetchState], None]] = []

    @property
    def state(self) -> FetchState:
        return self._state

    def subscribe(self, callback: Callable[[FetchState], None]) -> Callable[[], None]:
        """注册状态回调, 返回取消订阅函数"""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, state: FetchState) -> None:
        logger.debug(f"State -> {state.name}")
        self._state = state
        for callback in list(self._subscribers):
            callback(state)

    async def send(self, action: Action) -> FetchState:
        """处理界面发来的动作: 首次出现和点击重试都会重新加载"""
        if action in (Action.ON_APPEAR, Action.ON_RETRY_BUTTON_TAPPED):
            return await self.load()
        raise ValueError(f"未知动作: {action!r}")

    async def load(self) -> FetchState:
        self._publish(Loading())
        try:
            repos = await self.repo_api_client.get_repos()
        except Exception as e:
            logger.warning(f"Failed to load repos: {e!r}")
            state: FetchState = Failed(e)
        else:
            state = Loaded(tuple(repos))
        self._publish(state)
        return state

    def find(self, repo_id: int) -> Optional[Repo]:
        """在已加载的列表中查找仓库"""
        if not isinstance(self._state, Loaded):
            return None
        for repo in self._state.repos:
            if repo.id == repo_id:
                return repo
        return None
