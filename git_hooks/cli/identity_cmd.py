"""
git-hooks identity - 仓库身份

仓库身份是第一个提交的 hash，excludes.json 以它为键。
"""

import typer
from rich.console import Console
from rich.markup import escape

from git_hooks.config import get_config
from git_hooks.services.git import GitClient, GitError

console = Console()


def identity_command():
    """显示当前仓库的身份（第一个提交的 hash）"""
    git = GitClient(get_config().git_executable)
    try:
        identity = git.first_commit()
    except GitError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(identity)
