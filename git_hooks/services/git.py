"""
Git Service - Git 命令封装

所有 Git plumbing 调用都经过 GitClient：
- rev-parse --show-toplevel / --git-dir
- config --get [--system] <key>
- rev-list --max-parents=0 HEAD（仓库身份）
- clone <url> <dest>
- pull <remote> <branch>（在 contrib 仓库目录内执行）
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from git_hooks.config import GIT

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Git 命令执行失败"""

    def __init__(self, args: list[str], returncode: int | None, stderr: str = ""):
        self.args_list = args
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or f"exit status {returncode}"
        super().__init__(f"git {' '.join(args)}: {detail}")


class GitClient:
    """Git 命令客户端

    Attributes:
        executable: git 可执行文件
        cwd: 默认工作目录（None 表示调用方的当前目录）
    """

    def __init__(self, executable: str = "git", cwd: Path | None = None):
        self.executable = executable
        self.cwd = cwd

    def run(self, *args: str, cwd: Path | None = None) -> str:
        """执行 git 命令并返回去掉首尾换行的 stdout

        Raises:
            GitError: git 不存在或返回非零
        """
        command = [self.executable, *args]
        workdir = cwd or self.cwd
        logger.debug(f"Running {' '.join(command)} (cwd={workdir or '.'})")
        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                cwd=workdir,
            )
        except OSError as e:
            raise GitError(list(args), None, str(e)) from e

        if result.returncode != 0:
            raise GitError(list(args), result.returncode, result.stderr)
        return result.stdout.strip("\n")

    def repo_root(self) -> Path:
        return Path(self.run(*GIT["RepoRoot"]))

    def git_dir(self) -> Path:
        return Path(self.run(*GIT["GitDir"]))

    def first_commit(self) -> str:
        """仓库身份：第一个提交的 hash，与 clone 位置无关"""
        return self.run(*GIT["FirstCommit"])

    def config_get(self, key: str, system: bool = False) -> str:
        args = ["config", "--get"]
        if system:
            args.append("--system")
        args.append(key)
        return self.run(*args)

    def clone(self, url: str, dest: Path) -> None:
        self.run("clone", url, str(dest))

    def pull(self, repo_dir: Path, remote: str = "origin", branch: str = "master") -> None:
        self.run("pull", remote, branch, cwd=repo_dir)


__all__ = ["GitClient", "GitError"]
