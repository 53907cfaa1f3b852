"""
git-hooks list - 列出所有作用域的 hook

目录 hook：作用域 → trigger → hook
manifest hook：作用域 → trigger → 仓库 → hook
"""

from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from git_hooks.config import get_config
from git_hooks.hooks import (
    DirectoryHookIndex,
    PathResolver,
    list_hooks_in_config,
    matches_trigger,
)
from git_hooks.services.git import GitClient

console = Console()


def list_command(
    trigger: Optional[str] = typer.Option(
        None,
        "--trigger", "-t",
        help="只显示指定 trigger（含 semi scope）",
    ),
):
    """
    列出 project / user / global 作用域下的目录 hook 与 manifest hook。
    """
    config = get_config()
    git = GitClient(config.git_executable)
    resolver = PathResolver(git, config)
    index = DirectoryHookIndex(git, config)

    hook_dirs = resolver.hook_dirs()
    hook_configs = resolver.hook_configs()
    if not hook_dirs and not hook_configs:
        console.print("[dim]No hooks found[/dim]")
        return

    for scope, directory in hook_dirs.items():
        tree = Tree(f"[bold cyan]{scope.value} hooks[/bold cyan] [dim]{escape(str(directory))}[/dim]")
        for name, hooks in index.build(scope, directory).items():
            if trigger and not matches_trigger(name, trigger):
                continue
            branch = tree.add(escape(name))
            for hook in hooks:
                branch.add(f"[green]{escape(hook)}[/green]")
        console.print(tree)

    for scope, manifest in hook_configs.items():
        tree = Tree(f"[bold magenta]{scope.value} contrib hooks[/bold magenta] [dim]{escape(str(manifest))}[/dim]")
        for name, repositories in list_hooks_in_config(manifest).items():
            if trigger and name != trigger:
                continue
            branch = tree.add(escape(name))
            for repository, hooks in repositories.items():
                repo_branch = branch.add(f"[blue]{escape(repository)}[/blue]")
                for hook in hooks:
                    repo_branch.add(f"[green]{escape(hook)}[/green]")
        console.print(tree)
