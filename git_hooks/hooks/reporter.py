"""
Git Hooks Reporter - 上报接口

引擎不依赖全局 logger 单例，而是通过注入的 Reporter 上报：
- info: 一般信息（如 clone 进度）
- warn: 警告（如 pull 失败、未知 trigger）
- error: 带状态码的失败（hook 非零退出、clone 失败）

error 只是上报，不会退出进程；是否以非零退出由调用方决定。
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class Reporter(ABC):
    """Reporter 基类"""

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def warn(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str, status: int = 1) -> None:
        pass


class ConsoleReporter(Reporter):
    """输出到终端（info → stdout，warn/error → stderr）"""

    def __init__(self, console: Console | None = None, err_console: Console | None = None):
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def info(self, message: str) -> None:
        logger.debug(message)
        self.console.print(escape(message))

    def warn(self, message: str) -> None:
        logger.debug(message)
        self.err_console.print(f"[yellow]{escape(message)}[/yellow]")

    def error(self, message: str, status: int = 1) -> None:
        logger.debug(f"{message} (status={status})")
        self.err_console.print(f"[red]{escape(message)}[/red]")


class MemoryReporter(Reporter):
    """收集所有上报内容（测试及嵌入调用使用）"""

    def __init__(self):
        self.infos: list[str] = []
        self.warns: list[str] = []
        self.errors: list[tuple[str, int]] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warn(self, message: str) -> None:
        self.warns.append(message)

    def error(self, message: str, status: int = 1) -> None:
        self.errors.append((message, status))

    def clear(self) -> None:
        self.infos.clear()
        self.warns.clear()
        self.errors.clear()


__all__ = ["ConsoleReporter", "MemoryReporter", "Reporter"]
