"""
Contrib Repository Manager - 远程 hook 仓库管理

manifest（githooks.json）引用的远程仓库会被 clone 到本地缓存目录：
    ~/.githooks-contrib/<cache-key>
或者（配置了 git config hooks.contrib 时）
    <hooks.contrib>/githooks-contrib/<cache-key>

仓库名规范化规则（find_protocol）：
- ssh://user@host:path  → clone 地址 user@host:path，缓存键 host/path
- http(s)://[user@]rest → clone 地址为原 URL，缓存键 rest
- 其他                   → clone 地址 https://<name>，缓存键 <name>

refresh（git pull）只作为 hook 返回 126 时的补救步骤，从不主动执行。
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import TYPE_CHECKING

from git_hooks.config import GIT_CONFIG_KEYS, GitHooksConfig, get_config
from git_hooks.services.git import GitClient, GitError

if TYPE_CHECKING:
    from git_hooks.hooks.reporter import Reporter

logger = logging.getLogger(__name__)

_SSH_SCP_PATTERN = re.compile(r"^ssh://(?:(?P<user>[^@/]+)@)?(?P<host>[^:/]+):(?P<path>.+)$")
_SSH_URL_PATTERN = re.compile(r"^ssh://(?:[^@/]+@)?(?P<host>[^:/]+)(?::\d+)?/(?P<path>.+)$")
_HTTP_PATTERN = re.compile(r"^(?P<scheme>https?)://(?:[^@/]+@)?(?P<rest>.+)$")


class ContribError(Exception):
    """Contrib 仓库操作错误"""

    def __init__(self, repository: str, message: str):
        self.repository = repository
        super().__init__(message)


class ContribCloneError(ContribError):
    """clone 失败，该仓库的 hook 本次跳过"""

    pass


class ContribRefreshError(ContribError):
    """pull 失败"""

    pass


def find_protocol(name: str) -> tuple[str, str]:
    """规范化 manifest 中的仓库名

    Args:
        name: manifest 中的仓库名

    Returns:
        (clone 地址, 本地缓存键)
    """
    # 带端口的 ssh://host:22/path 必须先于 scp 形式匹配
    match = _SSH_URL_PATTERN.match(name)
    if match:
        return name, f"{match.group('host')}/{match.group('path')}"

    match = _SSH_SCP_PATTERN.match(name)
    if match:
        return name[len("ssh://"):], f"{match.group('host')}/{match.group('path')}"

    match = _HTTP_PATTERN.match(name)
    if match:
        return name, match.group("rest")

    return f"https://{name}", name


class ContribManager:
    """管理本地 contrib 仓库缓存

    Attributes:
        git: Git 客户端
        config: 配置
        reporter: 可选，用于提示 clone 进度
    """

    def __init__(
        self,
        git: GitClient,
        config: GitHooksConfig | None = None,
        reporter: "Reporter | None" = None,
    ):
        self.git = git
        self.config = config or get_config()
        self.reporter = reporter

    def contrib_dir(self) -> Path:
        """本地缓存根目录

        git config hooks.contrib 指向存在的目录时使用 <path>/<contrib_dirname>，
        否则回退到 ~/.<contrib_dirname>。
        """
        try:
            configured = self.git.config_get(GIT_CONFIG_KEYS["contrib"])
        except GitError:
            configured = ""

        if configured:
            configured_path = Path(configured).expanduser()
            if configured_path.exists():
                return configured_path / self.config.contrib_dirname
            logger.debug(f"hooks.contrib does not exist: {configured_path}")

        home = self.config.home_dir or Path("~")
        return home / f".{self.config.contrib_dirname}"

    def repo_dir(self, repository: str) -> Path:
        _, cache_key = find_protocol(repository)
        return self.contrib_dir() / cache_key

    def ensure_cloned(self, repository: str) -> Path:
        """确保仓库已 clone 到本地缓存

        Returns:
            本地仓库目录

        Raises:
            ContribCloneError: clone 失败
        """
        url, cache_key = find_protocol(repository)
        target = self.contrib_dir() / cache_key
        if target.exists():
            return target

        if self.reporter is not None:
            self.reporter.info(f"Cloning repo {repository}")
        logger.info(f"Cloning {url} into {target}")
        try:
            self.git.clone(url, target)
        except GitError as e:
            raise ContribCloneError(repository, f"Clone {url} failed: {e}") from e
        return target

    def refresh(self, repository: str) -> Path:
        """在已 clone 的仓库中拉取最新内容

        Raises:
            ContribRefreshError: pull 失败
        """
        target = self.repo_dir(repository)
        logger.info(f"Refreshing contrib repo {repository} ({target})")
        try:
            self.git.pull(target, self.config.contrib_remote, self.config.contrib_branch)
        except GitError as e:
            raise ContribRefreshError(repository, f"Pull {repository} failed: {e}") from e
        return target


__all__ = [
    "ContribCloneError",
    "ContribError",
    "ContribManager",
    "ContribRefreshError",
    "find_protocol",
]
