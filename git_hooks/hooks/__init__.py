"""
Git Hooks Engine - hook 解析与执行

组件（由底向上）：
1. PathResolver - 定位 project / user / global 的 hook 目录与 manifest
2. DirectoryHookIndex - 扫描目录，应用 excludes.json
3. list_hooks_in_config - 解析 manifest（trigger → 仓库 → hook）
4. ContribManager（services）- clone / pull 远程 hook 仓库
5. HookRunner - 合并所有来源并逐个执行

用法：
    from git_hooks.hooks import HookRunner

    result = HookRunner().run("pre-commit", ["--flag"])
"""

from git_hooks.hooks.base import (
    ContribHook,
    DirectoryHook,
    HookFailure,
    HookIndex,
    HookOutcome,
    HookReference,
    ManifestIndex,
    RunResult,
    Scope,
    is_known_trigger,
    matches_trigger,
    normalize_trigger,
)
from git_hooks.hooks.directory_index import (
    DirectoryHookIndex,
    is_executable,
    scan_hook_dir,
)
from git_hooks.hooks.exclude import load_excludes, prune
from git_hooks.hooks.manifest_index import list_hooks_in_config, load_manifest
from git_hooks.hooks.paths import PathResolver
from git_hooks.hooks.reporter import ConsoleReporter, MemoryReporter, Reporter
from git_hooks.hooks.runner import HookRunner

__all__ = [
    # Base
    "Scope",
    "HookIndex",
    "ManifestIndex",
    "DirectoryHook",
    "ContribHook",
    "HookReference",
    "HookOutcome",
    "HookFailure",
    "RunResult",
    "is_known_trigger",
    "matches_trigger",
    "normalize_trigger",
    # Reporter
    "Reporter",
    "ConsoleReporter",
    "MemoryReporter",
    # Resolution
    "PathResolver",
    "DirectoryHookIndex",
    "is_executable",
    "scan_hook_dir",
    "load_excludes",
    "prune",
    "list_hooks_in_config",
    "load_manifest",
    # Execution
    "HookRunner",
]
