"""
Pytest configuration and fixtures for git-hooks tests.

This module ensures proper test isolation by:
1. Clearing GIT_HOOKS_* environment variables and pointing HOME to a temp dir
2. Resetting the config singleton between tests
3. Providing an in-memory Git fake and helpers to write hook scripts
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from git_hooks.config import GitHooksConfig, reset_config
from git_hooks.services.git import GitError

ENV_KEYS = (
    "GIT_HOOKS_CONFIG_DIR",
    "GIT_HOOKS_GIT",
    "GIT_HOOKS_CONTRIB_BRANCH",
    "GIT_HOOKS_HOOK_TIMEOUT",
    "GIT_HOOKS_LOG_LEVEL",
    "GIT_HOOKS_DEBUG",
)


class FakeGit:
    """内存中的 GitClient 替身，记录 clone / pull 调用"""

    def __init__(
        self,
        root: Path | None = None,
        identity: str = "",
        system_config: dict[str, str] | None = None,
        config: dict[str, str] | None = None,
        on_clone: Callable[[str, Path], None] | None = None,
        on_pull: Callable[[Path], None] | None = None,
        fail_clone: bool = False,
        fail_pull: bool = False,
    ):
        self.root = root
        self.identity = identity
        self.system_config = system_config or {}
        self.config = config or {}
        self.on_clone = on_clone
        self.on_pull = on_pull
        self.fail_clone = fail_clone
        self.fail_pull = fail_pull
        self.clones: list[tuple[str, Path]] = []
        self.pulls: list[tuple[Path, str, str]] = []

    def repo_root(self) -> Path:
        if self.root is None:
            raise GitError(["rev-parse", "--show-toplevel"], 128, "not a git repository")
        return self.root

    def first_commit(self) -> str:
        if not self.identity:
            raise GitError(["rev-list", "--max-parents=0", "HEAD"], 128, "no commits")
        return self.identity

    def config_get(self, key: str, system: bool = False) -> str:
        source = self.system_config if system else self.config
        if key not in source:
            raise GitError(["config", "--get", key], 1)
        return source[key]

    def clone(self, url: str, dest: Path) -> None:
        self.clones.append((url, dest))
        if self.fail_clone:
            raise GitError(["clone", url, str(dest)], 128, "repository not found")
        dest.mkdir(parents=True)
        if self.on_clone:
            self.on_clone(url, dest)

    def pull(self, repo_dir: Path, remote: str = "origin", branch: str = "master") -> None:
        self.pulls.append((repo_dir, remote, branch))
        if self.fail_pull:
            raise GitError(["pull", remote, branch], 1, "network unreachable")
        if self.on_pull:
            self.on_pull(repo_dir)


def write_hook(path: Path, body: str = "exit 0", executable: bool = True) -> Path:
    """写入 /bin/sh 脚本"""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"#!/bin/sh\n{body}\n", encoding="utf-8")
    path.chmod(0o755 if executable else 0o644)
    return path


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, tmp_path_factory, monkeypatch):
    """隔离环境变量与 home 目录

    home 放在 tmp_path 之外，扫描 tmp_path 的测试不会看到它。
    """
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_HOOKS_CONFIG_DIR", str(tmp_path / "config"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    yield home


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset config singleton before and after each test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def home(isolated_env) -> Path:
    return isolated_env


@pytest.fixture
def config(home) -> GitHooksConfig:
    return GitHooksConfig(home_dir=home)


@pytest.fixture
def make_git() -> Callable[..., FakeGit]:
    return FakeGit


@pytest.fixture
def hook_writer() -> Callable[..., Path]:
    return write_hook


@pytest.fixture
def hook_log(tmp_path) -> Path:
    """hook 脚本追加调用记录的日志文件"""
    return tmp_path / "hooks.log"


@pytest.fixture
def logging_hook(hook_log) -> Callable[..., Path]:
    """写入一个把 `<label> <args>` 追加到 hook_log 的脚本"""

    def _write(path: Path, label: str, status: int = 0) -> Path:
        return write_hook(path, f'echo "{label} $*" >> "{hook_log}"\nexit {status}')

    return _write


def read_log(path: Path) -> list[str]:
    if not path.exists():
        return []
    return [line.rstrip() for line in path.read_text(encoding="utf-8").splitlines()]


@pytest.fixture
def log_lines(hook_log) -> Callable[[], list[str]]:
    return lambda: read_log(hook_log)


@pytest.fixture
def in_tmp_dir(tmp_path, monkeypatch) -> Path:
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    return workdir
