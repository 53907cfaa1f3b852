"""
Git Hooks Engine - 基础类型

术语（以下面的目录为例）：

    githooks
    ├── _pre-commit
    │   └── test
    └── pre-commit
        ├── dir
        │   └── pre-commit
        └── whitespace

trigger: pre-commit（Git hook 事件）
hook: whitespace、dir/pre-commit（可执行入口）
semi scope: _pre-commit，与 pre-commit 一同执行，约定为仅提示
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from git_hooks.config import SEMI_PREFIX, TRIGGERS
from git_hooks.services.process import ProcessResult

# trigger → 有序 hook 标识列表
HookIndex = dict[str, list[str]]

# trigger → 仓库名 → 有序 hook 名列表
ManifestIndex = dict[str, dict[str, list[str]]]


class Scope(Enum):
    """Hook 作用域

    所有作用域都会执行；作用域只决定 excludes.json 是否生效
    （仅 user 和 global）。
    """
    PROJECT = "project"
    USER = "user"
    GLOBAL = "global"

    @property
    def excludable(self) -> bool:
        return self in (Scope.USER, Scope.GLOBAL)


def normalize_trigger(value: str) -> str:
    """trampoline 传入的是 $0（如 .git/hooks/pre-commit），只取 base name"""
    return Path(value).name


def is_known_trigger(trigger: str) -> bool:
    return trigger in TRIGGERS


def matches_trigger(candidate: str, trigger: str) -> bool:
    """目录名是否属于 trigger（字面量或 semi scope 变体）"""
    return candidate == trigger or candidate == SEMI_PREFIX + trigger


@dataclass(frozen=True)
class DirectoryHook:
    """目录发现的 hook

    Attributes:
        scope: 作用域
        root: 作用域 hook 目录
        trigger_dir: trigger 子目录名（可能带 `_` 前缀）
        name: 相对 trigger 子目录的标识（`file` 或 `subdir/entrypoint`）
    """
    scope: Scope
    root: Path
    trigger_dir: str
    name: str

    @property
    def path(self) -> Path:
        return self.root / self.trigger_dir / self.name

    @property
    def identity(self) -> str:
        return f"{self.scope.value}:{self.trigger_dir}/{self.name}"


@dataclass(frozen=True)
class ContribHook:
    """manifest 引用的 contrib hook

    Attributes:
        scope: manifest 所在作用域
        repository: manifest 中的仓库名
        name: 仓库内的 hook 名
        repo_dir: 本地缓存目录
    """
    scope: Scope
    repository: str
    name: str
    repo_dir: Path

    @property
    def path(self) -> Path:
        return self.repo_dir / self.name

    @property
    def identity(self) -> str:
        return f"{self.scope.value}:{self.repository}/{self.name}"


HookReference = DirectoryHook | ContribHook


@dataclass(frozen=True)
class HookOutcome:
    """单个 hook 的执行结果"""
    hook: HookReference
    result: ProcessResult
    retried: bool = False

    @property
    def ok(self) -> bool:
        return self.result.ok


@dataclass(frozen=True)
class HookFailure:
    """已上报的失败

    hook 为 None 表示失败发生在调用之前（如 clone 失败）。
    """
    identity: str
    status: int
    message: str
    hook: HookReference | None = None


@dataclass
class RunResult:
    """一次 run(trigger, args) 的汇总

    失败在发生时已经通过 Reporter 上报；这里只是供调用方决定退出码。
    """
    trigger: str
    executed: list[HookOutcome] = field(default_factory=list)
    failures: list[HookFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def exit_code(self) -> int:
        return self.failures[0].status if self.failures else 0


__all__ = [
    "ContribHook",
    "DirectoryHook",
    "HookFailure",
    "HookIndex",
    "HookOutcome",
    "HookReference",
    "ManifestIndex",
    "RunResult",
    "Scope",
    "is_known_trigger",
    "matches_trigger",
    "normalize_trigger",
]
