"""
Git Hooks CLI - 命令行工具

提供主要命令：
- git-hooks run <trigger> [args...]: 执行 hook（trampoline 调用）
- git-hooks list: 列出所有作用域的 hook（不带子命令时默认执行）
- git-hooks identity: 显示仓库身份
"""

import logging
import sys

import typer

from git_hooks.cli.identity_cmd import identity_command
from git_hooks.cli.list_cmd import list_command
from git_hooks.cli.run_cmd import run_command
from git_hooks.config import NAME, VERSION, get_config

app = typer.Typer(
    name=NAME,
    help="git-hooks - 管理 project / user / global 作用域的 Git hooks",
    add_completion=False,
    rich_markup_mode="rich",
)


def configure_logging(level: str) -> None:
    """配置 stderr 日志（只用于诊断，用户可见输出走 Reporter）"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )


def _version_callback(value: bool):
    if value:
        typer.echo(f"{NAME} {VERSION}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def root(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="输出调试日志",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="显示版本",
    ),
):
    configure_logging("DEBUG" if verbose else get_config().log_level)
    if ctx.invoked_subcommand is None:
        list_command(trigger=None)


# 注册子命令
app.command(
    name="run",
    help="执行绑定到 trigger 的所有 hook",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)(run_command)
app.command(name="list", help="列出所有作用域的 hook")(list_command)
app.command(name="identity", help="显示仓库身份（第一个提交的 hash）")(identity_command)


def main():
    """CLI 入口点"""
    app()


if __name__ == "__main__":
    main()


__all__ = ["app", "configure_logging", "main"]
