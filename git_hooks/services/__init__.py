"""
Git Hooks Services - 外部协作者

- git: Git plumbing 命令
- process: hook 子进程调用
- contrib: 远程 contrib 仓库缓存
"""

from git_hooks.services.contrib import (
    ContribCloneError,
    ContribError,
    ContribManager,
    ContribRefreshError,
    find_protocol,
)
from git_hooks.services.git import GitClient, GitError
from git_hooks.services.process import ProcessResult, ProcessRunner, run_process

__all__ = [
    "ContribCloneError",
    "ContribError",
    "ContribManager",
    "ContribRefreshError",
    "find_protocol",
    "GitClient",
    "GitError",
    "ProcessResult",
    "ProcessRunner",
    "run_process",
]
