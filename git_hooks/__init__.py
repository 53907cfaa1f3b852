"""
git-hooks - 管理 project / user / global 作用域的 Git hooks

用法：
    from git_hooks import HookRunner

    result = HookRunner().run("pre-commit", [])
"""

from git_hooks.config import NAME, TRIGGERS, VERSION
from git_hooks.hooks import HookRunner, RunResult, Scope

__version__ = VERSION

__all__ = ["HookRunner", "NAME", "RunResult", "Scope", "TRIGGERS", "VERSION"]
