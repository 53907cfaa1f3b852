"""
Git Hooks Runner - 执行引擎

run(trigger, args) 的执行顺序：
1. 目录 hook：project → user → global，匹配 `trigger` 与 `_trigger`（semi scope）
2. manifest hook：project → user → global，只精确匹配 `trigger`；
   仓库不存在时先 clone，clone 失败则跳过该仓库

失败策略：
- 任何 hook 失败都立即上报，继续执行下一个，不短路
- manifest hook 返回 126（无法定位/执行）时，对所属仓库 pull 一次并重试该 hook 一次；
  这个补救在一次 run 中全局最多发生一次（Fresh → RefreshAttempted）

用法：
    from git_hooks.hooks import HookRunner

    runner = HookRunner()
    result = runner.run("pre-commit", [])
    if not result.ok:
        ...
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from git_hooks.config import NOT_EXECUTABLE_STATUS, GitHooksConfig, get_config
from git_hooks.hooks.base import (
    ContribHook,
    DirectoryHook,
    HookFailure,
    HookOutcome,
    HookReference,
    RunResult,
    is_known_trigger,
    matches_trigger,
    normalize_trigger,
)
from git_hooks.hooks.directory_index import DirectoryHookIndex
from git_hooks.hooks.manifest_index import load_manifest
from git_hooks.hooks.paths import PathResolver
from git_hooks.hooks.reporter import ConsoleReporter, Reporter
from git_hooks.services.contrib import ContribError, ContribManager
from git_hooks.services.git import GitClient
from git_hooks.services.process import ProcessResult, ProcessRunner, run_process

logger = logging.getLogger(__name__)


class HookRunner:
    """执行引擎

    所有协作者均可注入；未注入时使用默认实现。索引每次 run 都重新构建。
    """

    def __init__(
        self,
        *,
        config: GitHooksConfig | None = None,
        git: GitClient | None = None,
        reporter: Reporter | None = None,
        resolver: PathResolver | None = None,
        directory_index: DirectoryHookIndex | None = None,
        contrib: ContribManager | None = None,
        process_runner: ProcessRunner | None = None,
        cwd: Path | None = None,
    ):
        self.config = config or get_config()
        self.git = git or GitClient(self.config.git_executable)
        self.reporter = reporter or ConsoleReporter()
        self.resolver = resolver or PathResolver(self.git, self.config)
        self.directory_index = directory_index or DirectoryHookIndex(self.git, self.config)
        self.contrib = contrib or ContribManager(self.git, self.config, self.reporter)
        self.process_runner = process_runner or run_process
        self.cwd = cwd

    def run(self, trigger: str, args: Sequence[str] = ()) -> RunResult:
        """执行 trigger 绑定的所有 hook

        Args:
            trigger: hook 事件名，或 trampoline 传入的 hook 路径
            args: 传给每个 hook 的位置参数

        Returns:
            RunResult（失败已逐个上报）
        """
        name = normalize_trigger(trigger)
        result = RunResult(trigger=name)
        if not is_known_trigger(name):
            self.reporter.warn(f"Unknown trigger {name}, no hooks executed")
            return result

        args = list(args)
        self._run_directory_hooks(name, args, result)
        self._run_manifest_hooks(name, args, result)
        logger.debug(
            f"Trigger {name} finished: {len(result.executed)} executed, {len(result.failures)} failed"
        )
        return result

    def _invoke(self, hook: HookReference, args: list[str]) -> ProcessResult:
        logger.debug(f"Execute hook {hook.identity} {args}")
        command = [str(hook.path), *args]
        if self.config.hook_timeout is not None:
            return self.process_runner(command, self.cwd, timeout=self.config.hook_timeout)
        return self.process_runner(command, self.cwd)

    def _fail(self, result: RunResult, failure: HookFailure) -> None:
        result.failures.append(failure)
        self.reporter.error(failure.message, failure.status)

    def _record(self, result: RunResult, outcome: HookOutcome) -> None:
        result.executed.append(outcome)
        if outcome.ok:
            return
        status = outcome.result
        if status.timed_out:
            detail = "timed out"
        elif status.was_signaled:
            detail = f"was killed by a signal (status {status.exit_code})"
        elif status.error:
            detail = f"could not be executed: {status.error}"
        else:
            detail = f"exited with status {status.exit_code}"
        self._fail(
            result,
            HookFailure(
                identity=outcome.hook.identity,
                status=status.exit_code,
                message=f"Hook {outcome.hook.identity} {detail}",
                hook=outcome.hook,
            ),
        )

    def _run_directory_hooks(self, trigger: str, args: list[str], result: RunResult) -> None:
        for scope, directory in self.resolver.hook_dirs().items():
            index = self.directory_index.build(scope, directory)
            for trigger_dir, hooks in index.items():
                if not matches_trigger(trigger_dir, trigger):
                    continue
                for name in hooks:
                    hook = DirectoryHook(scope=scope, root=directory, trigger_dir=trigger_dir, name=name)
                    self._record(result, HookOutcome(hook=hook, result=self._invoke(hook, args)))

    def _run_manifest_hooks(self, trigger: str, args: list[str], result: RunResult) -> None:
        refresh_attempted = False
        for scope, manifest_path in self.resolver.hook_configs().items():
            repositories = load_manifest(manifest_path).repositories(trigger)
            for repository, hooks in repositories.items():
                try:
                    repo_dir = self.contrib.ensure_cloned(repository)
                except ContribError as e:
                    self._fail(
                        result,
                        HookFailure(identity=f"{scope.value}:{repository}", status=1, message=str(e)),
                    )
                    continue

                for name in hooks:
                    hook = ContribHook(scope=scope, repository=repository, name=name, repo_dir=repo_dir)
                    status = self._invoke(hook, args)
                    retried = False
                    if status.exit_code == NOT_EXECUTABLE_STATUS and not refresh_attempted:
                        refresh_attempted = True
                        retried = True
                        try:
                            self.contrib.refresh(repository)
                        except ContribError as e:
                            self.reporter.warn(str(e))
                        status = self._invoke(hook, args)
                    self._record(result, HookOutcome(hook=hook, result=status, retried=retried))


__all__ = ["HookRunner"]
