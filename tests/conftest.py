import pytest

from gh_repo_list.core.config import get_settings
from gh_repo_list.core.logging import setup_logging
from gh_repo_list.core.mocks import MOCK_REPOS


@pytest.fixture
def repo_payload():
    """API 返回的原始 JSON 数组"""
    return [
        {
            "id": repo.id,
            "name": repo.name,
            "full_name": repo.full_name,
            "owner": {"login": repo.owner},
            "description": repo.description,
            "stargazers_count": repo.stargazers_count,
            "html_url": repo.html_url,
            "language": repo.language,
        }
        for repo in MOCK_REPOS
    ]


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging():
    # CliRunner 会替换 sys.stderr, 测试结束后恢复默认 sink
    yield
    setup_logging("WARNING")
