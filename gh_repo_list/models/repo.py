"""GitHub 仓库数据模型"""

from dataclasses import dataclass
from typing import Any, Optional

from ..core.errors import DecodingError


def _require(data: dict, key: str, kind: type) -> Any:
    if key not in data:
        raise DecodingError(f"缺少字段: {key}")
    value = data[key]
    # bool 是 int 的子类
    if isinstance(value, bool) or not isinstance(value, kind):
        raise DecodingError(
            f"字段 {key} 类型错误: 期望 {kind.__name__}, 实际 {type(value).__name__}"
        )
    return value


def _optional(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise DecodingError(f"字段 {key} 类型错误: 期望 str 或 null")
    return value


@dataclass(frozen=True)
class Repo:
    """仓库数据 (解码后不可变)"""

    id: int
    name: str
    full_name: str
    owner: str
    description: Optional[str] = None
    stargazers_count: int = 0
    html_url: Optional[str] = None
    language: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Repo":
        """
        从 API 返回的单个 JSON 对象创建实例

        字段不存在或类型不符时抛出 DecodingError
        """
        if not isinstance(data, dict):
            raise DecodingError(f"仓库数据必须是对象, 实际 {type(data).__name__}")

        full_name = _require(data, "full_name", str)
        stargazers_count = _require(data, "stargazers_count", int)
        if stargazers_count < 0:
            raise DecodingError(f"stargazers_count 不能为负数: {stargazers_count}")

        owner = data.get("owner")
        if isinstance(owner, dict) and isinstance(owner.get("login"), str):
            owner_login = owner["login"]
        else:
            owner_login = full_name.split("/", 1)[0]

        return cls(
            id=_require(data, "id", int),
            name=_require(data, "name", str),
            full_name=full_name,
            owner=owner_login,
            description=_optional(data, "description"),
            stargazers_count=stargazers_count,
            html_url=_optional(data, "html_url"),
            language=_optional(data, "language"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "full_name": self.full_name,
            "owner": self.owner,
            "description": self.description,
            "stargazers_count": self.stargazers_count,
            "html_url": self.html_url,
            "language": self.language,
        }


def decode_repos(payload: Any) -> list[Repo]:
    """解码整个响应, 保持服务端返回的顺序"""
    if not isinstance(payload, list):
        raise DecodingError(f"响应必须是 JSON 数组, 实际 {type(payload).__name__}")
    return [Repo.from_dict(item) for item in payload]
