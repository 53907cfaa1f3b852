"""
Path Resolver - 定位各作用域的 hook 目录与 manifest

| 作用域  | 目录                          | manifest                            |
|---------|-------------------------------|-------------------------------------|
| project | <repo-root>/githooks          | <repo-root>/githooks.json           |
| user    | <home>/.githooks              | <home>/.githooks.json               |
| global  | git config --system hooks.global | git config --system hooks.globalconfig |

只返回磁盘上存在的路径；无法解析的作用域（不在 Git 仓库、无 home、
未配置 global）直接省略，不报错。
"""

from __future__ import annotations

import logging
from pathlib import Path

from git_hooks.config import GIT_CONFIG_KEYS, GitHooksConfig, get_config
from git_hooks.hooks.base import Scope
from git_hooks.services.git import GitClient, GitError

logger = logging.getLogger(__name__)


class PathResolver:
    """按作用域解析 hook 目录和 manifest 路径"""

    def __init__(self, git: GitClient, config: GitHooksConfig | None = None):
        self.git = git
        self.config = config or get_config()

    def _repo_root(self) -> Path | None:
        try:
            return self.git.repo_root()
        except GitError as e:
            logger.debug(f"Not inside a git repository: {e}")
            return None

    def _system_config(self, key: str) -> Path | None:
        try:
            value = self.git.config_get(key, system=True)
        except GitError:
            return None
        return Path(value).expanduser() if value else None

    def _candidates(self, kind: str) -> list[tuple[Scope, Path | None]]:
        root = self._repo_root()
        home = self.config.home_dir
        if kind == "dir":
            return [
                (Scope.PROJECT, root / self.config.project_hooks_dirname if root else None),
                (Scope.USER, home / self.config.user_hooks_dirname if home else None),
                (Scope.GLOBAL, self._system_config(GIT_CONFIG_KEYS["global"])),
            ]
        return [
            (Scope.PROJECT, root / self.config.project_manifest_name if root else None),
            (Scope.USER, home / self.config.user_manifest_name if home else None),
            (Scope.GLOBAL, self._system_config(GIT_CONFIG_KEYS["globalconfig"])),
        ]

    @staticmethod
    def _existing(candidates: list[tuple[Scope, Path | None]]) -> dict[Scope, Path]:
        found: dict[Scope, Path] = {}
        for scope, path in candidates:
            if path is not None and path.exists():
                found[scope] = path
            else:
                logger.debug(f"Scope {scope.value} skipped (path={path})")
        return found

    def hook_dirs(self) -> dict[Scope, Path]:
        """存在的 hook 目录，按 project → user → global 排序"""
        return self._existing(self._candidates("dir"))

    def hook_configs(self) -> dict[Scope, Path]:
        """存在的 manifest 文件，按 project → user → global 排序"""
        return self._existing(self._candidates("config"))


__all__ = ["PathResolver"]
