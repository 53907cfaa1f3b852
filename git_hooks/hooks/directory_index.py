"""
Directory Hook Index - 扫描作用域 hook 目录

    <scope-dir>/<trigger>/<hook>

- trigger 子目录下的可执行文件即为 hook，标识为文件名
- trigger 子目录下的目录，只有包含与 trigger 同名（去掉扩展名）的可执行文件时
  才算 hook，标识为 `<subdir>/<entrypoint>`
- user / global 作用域会应用同目录下的 excludes.json

目录无法读取时返回空索引，从不向上抛出。
"""

from __future__ import annotations

import getpass
import logging
import os
import stat
from pathlib import Path

from git_hooks.config import GitHooksConfig, get_config
from git_hooks.hooks.base import HookIndex, Scope
from git_hooks.hooks.exclude import load_excludes, prune
from git_hooks.services.git import GitClient, GitError

logger = logging.getLogger(__name__)


def is_executable(path: Path) -> bool:
    """普通文件且任一执行位被设置（跟随符号链接）"""
    try:
        mode = path.stat().st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) and bool(mode & 0o111)


def _sorted_entries(directory: Path) -> list[Path]:
    return sorted(directory.iterdir(), key=lambda p: p.name)


def _entrypoints(trigger: str, hook_dir: Path) -> list[str]:
    try:
        entries = _sorted_entries(hook_dir)
    except OSError:
        return []
    return [
        f"{hook_dir.name}/{entry.name}"
        for entry in entries
        if os.path.splitext(entry.name)[0] == trigger and is_executable(entry)
    ]


def scan_hook_dir(directory: Path) -> HookIndex:
    """扫描目录，不做任何 exclude 处理"""
    hooks: HookIndex = {}
    try:
        triggers = [p for p in _sorted_entries(directory) if p.is_dir()]
    except OSError as e:
        logger.debug(f"Cannot list hook directory {directory}: {e}")
        return hooks

    for trigger_dir in triggers:
        try:
            entries = _sorted_entries(trigger_dir)
        except OSError as e:
            logger.debug(f"Cannot list trigger directory {trigger_dir}: {e}")
            continue

        trigger = trigger_dir.name
        hooks[trigger] = []
        for entry in entries:
            if entry.is_dir():
                hooks[trigger].extend(_entrypoints(trigger, entry))
            elif is_executable(entry):
                hooks[trigger].append(entry.name)

    return hooks


def _current_username() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


class DirectoryHookIndex:
    """构建作用域目录的 trigger → hook 索引"""

    def __init__(self, git: GitClient, config: GitHooksConfig | None = None):
        self.git = git
        self.config = config or get_config()

    def repo_identity(self) -> str:
        """仓库第一个提交的 hash；不在仓库或无提交时为空串"""
        try:
            return self.git.first_commit()
        except GitError:
            return ""

    def build(self, scope: Scope, directory: Path) -> HookIndex:
        hooks = scan_hook_dir(directory)
        if not scope.excludable:
            return hooks

        excludes = load_excludes(directory / self.config.excludes_filename)
        if excludes is None:
            return hooks
        return self.apply_excludes(scope, hooks, excludes)

    def apply_excludes(self, scope: Scope, hooks: HookIndex, excludes) -> HookIndex:
        """把索引包在仓库身份（global 再包一层用户名）下裁剪，然后解包

        裁剪掉整个键时视为空索引。
        """
        repo_id = self.repo_identity()
        if scope == Scope.USER:
            pruned = prune({repo_id: hooks}, excludes) or {}
            result = pruned.get(repo_id)
        else:
            username = _current_username()
            pruned = prune({username: {repo_id: hooks}}, excludes) or {}
            result = (pruned.get(username) or {}).get(repo_id)

        logger.debug(f"Applied {scope.value} excludes for repo {repo_id or '<none>'}")
        return result if isinstance(result, dict) else {}


__all__ = ["DirectoryHookIndex", "is_executable", "scan_hook_dir"]
