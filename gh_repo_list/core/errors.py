"""仓库列表 API 的错误类型"""


class RepoAPIError(Exception):
    """获取仓库列表失败"""


class NetworkError(RepoAPIError):
    """网络层失败: 传输错误或非 200 响应"""


class TransportError(NetworkError):
    """连接、超时等底层 HTTP 错误"""


class BadStatusError(NetworkError):
    """HTTP 状态码不是 200"""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"GitHub API error status={status_code} body={body[:200]}")


class DecodingError(RepoAPIError):
    """响应内容与预期的 JSON 结构不符"""
