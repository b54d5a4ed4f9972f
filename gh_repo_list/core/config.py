"""运行配置 (环境变量前缀 GH_REPO_LIST_)"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_URL = "https://api.github.com/orgs/github/repos"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GH_REPO_LIST_", env_file=".env", extra="ignore"
    )

    api_url: str = DEFAULT_API_URL
    timeout: float = 30.0
    use_cache: bool = True
    user_agent: str = "gh-repo-list/0.1"
    log_level: str = "WARNING"


@lru_cache
def get_settings() -> Settings:
    return Settings()
