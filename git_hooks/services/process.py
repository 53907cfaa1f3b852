"""
Process Service - hook 子进程调用

把底层的 returncode / 信号 / OSError 统一为 ProcessResult：
- 正常退出：exit_code = returncode
- 被信号终止：was_signaled=True，exit_code = 128 + signum
- 无法启动（文件不存在、无执行权限、格式错误）：exit_code = 126
- 超时（仅在配置了 timeout 时）：timed_out=True，exit_code = 124

stdout/stderr 不捕获，直接继承调用方的流。
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from git_hooks.config import NOT_EXECUTABLE_STATUS

logger = logging.getLogger(__name__)

TIMEOUT_STATUS = 124


@dataclass(frozen=True)
class ProcessResult:
    """跨平台的进程结果"""

    exit_code: int
    was_signaled: bool = False
    timed_out: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.exit_code == 0 and not self.timed_out

    @property
    def not_executable(self) -> bool:
        return self.exit_code == NOT_EXECUTABLE_STATUS


ProcessRunner = Callable[..., ProcessResult]


def run_process(
    command: Sequence[str],
    cwd: Path | None = None,
    timeout: float | None = None,
) -> ProcessResult:
    """执行命令并阻塞等待其退出

    Args:
        command: 可执行文件路径 + 参数
        cwd: 工作目录（None 表示继承当前目录）
        timeout: 超时秒数（None 表示不限时）

    Returns:
        ProcessResult
    """
    try:
        completed = subprocess.run(list(command), cwd=cwd, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.warning(f"Process timed out after {timeout}s: {command[0]}")
        return ProcessResult(exit_code=TIMEOUT_STATUS, timed_out=True, error="timeout")
    except OSError as e:
        logger.debug(f"Cannot execute {command[0]}: {e}")
        return ProcessResult(exit_code=NOT_EXECUTABLE_STATUS, error=str(e))

    if completed.returncode < 0:
        return ProcessResult(exit_code=128 - completed.returncode, was_signaled=True)
    return ProcessResult(exit_code=completed.returncode)


__all__ = ["ProcessResult", "ProcessRunner", "TIMEOUT_STATUS", "run_process"]
