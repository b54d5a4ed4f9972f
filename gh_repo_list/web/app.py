"""Web 界面 - FastAPI"""

from html import escape
from typing import Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse

from ..core.client import RepoAPIClient
from ..core.store import Action, Failed, FetchState, Loaded, Loading, ReposStore
from ..models.repo import Repo

# HTML 模板
PAGE_HTML = """
<!DOCTYPE html>
<html lang="zh-CN">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <script src="https://unpkg.com/htmx.org@1.9.10"></script>
    <script src="https://cdn.tailwindcss.com"></script>
    <style>
        .htmx-indicator {{ display: none; }}
        .htmx-request.htmx-indicator {{ display: block; }}
        #repos.htmx-request {{ display: none; }}
    </style>
</head>
<body class="bg-gray-100 min-h-screen">
    <div class="container mx-auto px-4 py-8 max-w-4xl">
        <h1 class="text-3xl font-bold text-center mb-8 text-gray-800">
            {title}
        </h1>
        {body}
    </div>
</body>
</html>
"""

LIST_BODY_HTML = """
<div id="loading" class="htmx-indicator">
    {loading}
</div>
<div id="repos" hx-post="/repos/load" hx-trigger="load" hx-swap="innerHTML" hx-indicator="#loading"></div>
"""

LOADING_HTML = """
<div class="text-center py-8">
    <div class="inline-block animate-spin rounded-full h-8 w-8 border-b-2 border-blue-500"></div>
    <p class="mt-2 text-gray-600">加载中...</p>
</div>
"""

FAILED_HTML = """
<div class="text-center py-8">
    <p class="text-gray-700">仓库列表加载失败</p>
    <p class="text-gray-400 text-sm">{error}</p>
    <button
        hx-post="/repos/retry"
        hx-target="#repos"
        hx-indicator="#loading, #repos"
        class="mt-4 px-6 py-2 bg-blue-500 text-white rounded-lg hover:bg-blue-600"
    >
        Retry
    </button>
</div>
"""

ROW_HTML = """
<a href="/repos/{id}" class="block bg-white rounded-lg shadow-md p-4 hover:shadow-lg transition-shadow">
    <div class="flex justify-between items-start mb-2">
        <span class="text-lg font-semibold text-blue-600">{full_name}</span>
        <span class="text-sm text-gray-500">⭐ {stargazers_count}</span>
    </div>
    <p class="text-gray-600 text-sm">{description}</p>
</a>
"""

DETAIL_HTML = """
<div class="bg-white rounded-lg shadow-md p-6 space-y-2">
    <p><span class="font-semibold">名称:</span> {name}</p>
    <p><span class="font-semibold">所有者:</span> {owner}</p>
    <p><span class="font-semibold">描述:</span> {description}</p>
    <p><span class="font-semibold">Stars:</span> {stargazers_count}</p>
    {link}
</div>
<p class="mt-6"><a href="/" class="text-blue-600 hover:underline">返回列表</a></p>
"""


def render_state_html(state: FetchState) -> str:
    """把当前状态渲染成 HTML 片段"""
    if isinstance(state, Loading):
        return LOADING_HTML

    if isinstance(state, Failed):
        return FAILED_HTML.format(error=escape(str(state.error)))

    if not state.repos:
        return '<div class="text-center text-gray-500 py-8">没有仓库</div>'

    html_parts = ['<div class="space-y-4">']
    for repo in state.repos:
        html_parts.append(
            ROW_HTML.format(
                id=repo.id,
                full_name=escape(repo.full_name),
                stargazers_count=repo.stargazers_count,
                description=escape(repo.description or "无描述"),
            )
        )
    html_parts.append("</div>")
    return "".join(html_parts)


def render_repo_detail_html(repo: Repo) -> str:
    link = ""
    if repo.html_url:
        url = escape(repo.html_url)
        link = f'<p><a href="{url}" target="_blank" class="text-blue-600 hover:underline">{url}</a></p>'
    return DETAIL_HTML.format(
        name=escape(repo.name),
        owner=escape(repo.owner),
        description=escape(repo.description or "无描述"),
        stargazers_count=repo.stargazers_count,
        link=link,
    )


def state_to_dict(state: FetchState) -> dict:
    data: dict = {"state": state.name}
    if isinstance(state, Loaded):
        data["repos"] = [repo.to_dict() for repo in state.repos]
    elif isinstance(state, Failed):
        data["error"] = str(state.error)
        data["error_type"] = type(state.error).__name__
    return data


def create_app(repo_api_client: Optional[RepoAPIClient] = None) -> FastAPI:
    """创建 FastAPI 应用"""
    if repo_api_client is None:
        from ..core.client import GitHubRepoAPIClient
        from ..core.config import get_settings

        settings = get_settings()
        repo_api_client = GitHubRepoAPIClient(
            api_url=settings.api_url,
            timeout=settings.timeout,
            use_cache=settings.use_cache,
            user_agent=settings.user_agent,
        )

    app = FastAPI(title="Repositories")
    store = ReposStore(repo_api_client)
    app.state.store = store

    @app.get("/", response_class=HTMLResponse)
    async def index():
        """列表页, 由 htmx 在页面加载后触发请求"""
        body = LIST_BODY_HTML.format(loading=LOADING_HTML)
        return PAGE_HTML.format(title="Repositories", body=body)

    @app.post("/repos/load", response_class=HTMLResponse)
    async def load():
        state = await store.send(Action.ON_APPEAR)
        return render_state_html(state)

    @app.post("/repos/retry", response_class=HTMLResponse)
    async def retry():
        state = await store.send(Action.ON_RETRY_BUTTON_TAPPED)
        return render_state_html(state)

    @app.get("/repos/{repo_id}", response_class=HTMLResponse)
    async def detail(repo_id: int):
        """详情页"""
        repo = store.find(repo_id)
        if repo is None:
            raise HTTPException(status_code=404, detail=f"Repo {repo_id} not found")
        return PAGE_HTML.format(
            title=escape(repo.full_name), body=render_repo_detail_html(repo)
        )

    @app.get("/api/state")
    async def api_state():
        """当前状态 - 返回 JSON"""
        return state_to_dict(store.state)

    @app.post("/api/load")
    async def api_load():
        """重新加载 - 返回 JSON"""
        return state_to_dict(await store.send(Action.ON_APPEAR))

    return app
