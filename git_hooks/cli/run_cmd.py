"""
git-hooks run - 执行 hook

由安装到 .git/hooks/<trigger> 的 trampoline 调用：
    git-hooks run "$0" "$@"
"""

from typing import List, Optional

import typer

from git_hooks.config import get_config
from git_hooks.hooks import HookRunner


def run_command(
    trigger: str = typer.Argument(
        ...,
        help="Hook 事件名（如 pre-commit），也可以是 hook 文件路径",
    ),
    args: Optional[List[str]] = typer.Argument(
        None,
        help="原样传给每个 hook 的参数",
    ),
):
    """
    执行 project / user / global 作用域下绑定到 TRIGGER 的所有 hook。

    任何 hook 失败时，以第一个失败的状态码退出。
    """
    runner = HookRunner(config=get_config())
    result = runner.run(trigger, args or [])
    raise typer.Exit(result.exit_code)
