"""GitHub 仓库列表 CLI"""

import asyncio
from typing import Optional

import typer
from rich.console import Console, RenderableType
from rich.markup import escape
from rich.panel import Panel
from rich.spinner import Spinner
from rich.style import Style
from rich.table import Table
from rich.text import Text

from .core.store import Action, Failed, FetchState, Loaded, Loading, ReposStore
from .models.repo import Repo

app = typer.Typer(name="ghrepos", help="GitHub 仓库列表查看工具")
console = Console()


def build_client(preview: Optional[str] = None):
    """根据配置创建数据源, preview 不为空时使用预览数据"""
    if preview:
        from .core.mocks import PREVIEWS

        if preview not in PREVIEWS:
            raise typer.BadParameter(
                f"可选值: {', '.join(PREVIEWS)}", param_hint="--preview"
            )
        return PREVIEWS[preview]()

    from .core.client import GitHubRepoAPIClient
    from .core.config import get_settings

    settings = get_settings()
    return GitHubRepoAPIClient(
        api_url=settings.api_url,
        timeout=settings.timeout,
        use_cache=settings.use_cache,
        user_agent=settings.user_agent,
    )


def render_state(state: FetchState) -> RenderableType:
    """把当前状态渲染成 rich 组件"""
    if isinstance(state, Loading):
        return Spinner("dots", text="加载中...")

    if isinstance(state, Failed):
        return Panel(
            f"[red]仓库列表加载失败[/red]\n[dim]{escape(str(state.error))}[/dim]",
            title="错误",
            border_style="red",
        )

    table = Table(title="Repositories")
    table.add_column("#", justify="right", style="dim")
    table.add_column("项目", style="cyan", no_wrap=True)
    table.add_column("描述", max_width=50)
    table.add_column("Stars", justify="right")

    for index, repo in enumerate(state.repos, start=1):
        desc = repo.description or ""
        if len(desc) > 50:
            desc = desc[:47] + "..."
        table.add_row(
            str(index), escape(repo.full_name), escape(desc), str(repo.stargazers_count)
        )
    return table


def render_repo_detail(repo: Repo) -> RenderableType:
    lines = [
        f"[bold]名称:[/bold] {escape(repo.name)}",
        f"[bold]所有者:[/bold] {escape(repo.owner)}",
        f"[bold]描述:[/bold] {escape(repo.description or '无描述')}",
        f"[bold]Stars:[/bold] {repo.stargazers_count}",
    ]
    if repo.language:
        lines.append(f"[bold]语言:[/bold] {escape(repo.language)}")
    content = Text.from_markup("\n".join(lines))
    if repo.html_url:
        # 链接不经过 markup 解析
        content.append("\n链接: ", style="bold")
        content.append(repo.html_url, style=Style(link=repo.html_url))
    return Panel(content, title=escape(repo.full_name), border_style="cyan")


def _send(store: ReposStore, action: Action) -> FetchState:
    # 请求期间显示 spinner, 由 rich 在独立线程刷新
    with console.status("[bold green]加载中..."):
        return asyncio.run(store.send(action))


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="日志级别"),
):
    from .core.config import get_settings
    from .core.logging import setup_logging

    setup_logging(log_level or get_settings().log_level)


@app.command(name="list")
def list_repos(
    preview: Optional[str] = typer.Option(
        None, "--preview", help="使用预览数据: default/loading/error"
    ),
    interactive: bool = typer.Option(
        True, "--interactive/--no-interactive", help="失败时提示重试, 加载后可选择查看详情"
    ),
):
    """
    获取并显示仓库列表

    加载失败时可以重试, 加载成功后输入序号查看详情
    """
    store = ReposStore(build_client(preview))
    state = _send(store, Action.ON_APPEAR)

    while isinstance(state, Failed):
        console.print(render_state(state))
        if not interactive or not typer.confirm("重试?", default=True):
            raise typer.Exit(code=1)
        state = _send(store, Action.ON_RETRY_BUTTON_TAPPED)

    console.print(render_state(state))
    if not interactive or not isinstance(state, Loaded) or not state.repos:
        return

    while True:
        choice = typer.prompt(
            "输入序号查看详情 (回车退出)", default="", show_default=False
        ).strip()
        if not choice:
            return
        if not choice.isdigit() or not 1 <= int(choice) <= len(state.repos):
            console.print(f"[yellow]序号需在 1-{len(state.repos)} 之间[/yellow]")
            continue
        console.print(render_repo_detail(state.repos[int(choice) - 1]))


@app.command()
def show(
    repo_id: int = typer.Argument(..., help="仓库 ID"),
    preview: Optional[str] = typer.Option(None, "--preview", help="使用预览数据"),
):
    """
    显示单个仓库的详情
    """
    store = ReposStore(build_client(preview))
    state = _send(store, Action.ON_APPEAR)

    if isinstance(state, Failed):
        console.print(render_state(state))
        raise typer.Exit(code=1)

    repo = store.find(repo_id)
    if repo is None:
        console.print(f"[red]未找到仓库: {repo_id}[/red]")
        raise typer.Exit(code=1)
    console.print(render_repo_detail(repo))


@app.command()
def web(
    port: int = typer.Option(8000, "--port", "-p", help="端口号"),
    host: str = typer.Option("127.0.0.1", "--host", "-h", help="主机地址"),
    preview: Optional[str] = typer.Option(None, "--preview", help="使用预览数据"),
):
    """
    启动 Web 界面
    """
    import uvicorn

    from .web.app import create_app

    console.print(f"启动 Web 服务: http://{host}:{port}")
    uvicorn_app = create_app(build_client(preview))
    uvicorn.run(uvicorn_app, host=host, port=port)


if __name__ == "__main__":
    app()
