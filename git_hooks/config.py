"""
Git Hooks Configuration - 配置管理模块

支持三种配置来源（优先级从高到低）：
1. 环境变量（覆盖所有配置）
2. 配置文件（~/.git-hooks/config.yaml，可由 GIT_HOOKS_CONFIG_DIR 指定目录）
3. 默认值

注意：hooks.global / hooks.globalconfig / hooks.contrib 仍然从 Git 配置读取，
不在此文件中配置。

用法：
    from git_hooks.config import get_config
    config = get_config()
    print(config.contrib_dirname)
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

NAME = "git-hooks"
VERSION = "v1.2.0"

# Git 支持的 hook 事件
TRIGGERS = (
    "applypatch-msg",
    "commit-msg",
    "post-applypatch",
    "post-checkout",
    "post-commit",
    "post-merge",
    "post-receive",
    "pre-applypatch",
    "pre-auto-gc",
    "pre-commit",
    "prepare-commit-msg",
    "pre-rebase",
    "pre-receive",
    "update",
    "pre-push",
    "post-rewrite",
    "post-update",
    "pre-merge-commit",
    "push-to-checkout",
)

# semi scope：`_pre-commit` 与 `pre-commit` 一同执行
SEMI_PREFIX = "_"

CONTRIB_DIRNAME = "githooks-contrib"
EXCLUDES_FILENAME = "excludes.json"

# hook 无法定位/执行时的保留状态码
NOT_EXECUTABLE_STATUS = 126

GIT = {
    "RepoRoot": ("rev-parse", "--show-toplevel"),
    "GitDir": ("rev-parse", "--git-dir"),
    "FirstCommit": ("rev-list", "--max-parents=0", "HEAD"),
}

GIT_CONFIG_KEYS = {
    "global": "hooks.global",
    "globalconfig": "hooks.globalconfig",
    "contrib": "hooks.contrib",
}

DEFAULT_CONFIG_DIR = Path("~/.git-hooks")


class ConfigLoadError(Exception):
    """配置加载错误"""

    pass


def _resolve_home() -> Optional[Path]:
    """解析用户 home 目录，无法解析时返回 None（user scope 将被跳过）"""
    try:
        return Path.home()
    except (KeyError, RuntimeError) as e:
        logger.debug(f"Cannot resolve home directory: {e}")
        return None


@dataclass
class GitHooksConfig:
    """git-hooks 配置"""

    # === Git ===
    git_executable: str = "git"

    # === 路径 ===
    home_dir: Optional[Path] = field(default_factory=_resolve_home)
    project_hooks_dirname: str = "githooks"
    project_manifest_name: str = "githooks.json"
    user_hooks_dirname: str = ".githooks"
    user_manifest_name: str = ".githooks.json"
    excludes_filename: str = EXCLUDES_FILENAME

    # === Contrib 仓库 ===
    contrib_dirname: str = CONTRIB_DIRNAME
    contrib_remote: str = "origin"
    contrib_branch: str = "master"

    # === 执行 ===
    hook_timeout: Optional[float] = None  # None 表示一直等待 hook 退出
    log_level: str = "WARNING"


def _load_yaml_config(path: Path) -> dict:
    """
    加载 YAML 配置文件。

    Args:
        path: 配置文件路径

    Returns:
        配置字典，如果文件不存在则返回空字典

    Raises:
        ConfigLoadError: YAML 解析失败或内容不是映射
    """
    if not path.exists():
        logger.debug(f"Config file not found: {path}")
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        logger.debug(f"Config file disappeared: {path}")
        return {}
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {path}: {e}")
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        logger.error(f"Failed to load config from {path}: {e}")
        raise ConfigLoadError(f"Failed to load config from {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigLoadError(f"Config in {path} must be a mapping")
    return content


def _parse_timeout(value) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid hook timeout: {value}")
        return None
    return timeout if timeout > 0 else None


def load_config(config_dir: Optional[Path] = None) -> GitHooksConfig:
    """
    加载配置

    Args:
        config_dir: 配置目录（默认 ~/.git-hooks 或 GIT_HOOKS_CONFIG_DIR）

    Returns:
        配置对象
    """
    env_dir = os.getenv("GIT_HOOKS_CONFIG_DIR")
    directory = config_dir or (Path(env_dir) if env_dir else DEFAULT_CONFIG_DIR)
    merged = _load_yaml_config(directory.expanduser() / "config.yaml")

    env_overrides = {
        "git_executable": os.getenv("GIT_HOOKS_GIT"),
        "contrib_branch": os.getenv("GIT_HOOKS_CONTRIB_BRANCH"),
        "hook_timeout": os.getenv("GIT_HOOKS_HOOK_TIMEOUT"),
        "log_level": os.getenv("GIT_HOOKS_LOG_LEVEL"),
    }
    for key, value in env_overrides.items():
        if value:
            merged[key] = value

    # GIT_HOOKS_DEBUG 优先于 log_level
    debug_env = os.getenv("GIT_HOOKS_DEBUG")
    if debug_env is not None and debug_env.lower() in ("true", "1", "yes"):
        merged["log_level"] = "DEBUG"

    defaults = GitHooksConfig()
    home_value = merged.get("home_dir")
    home_dir = Path(str(home_value)).expanduser() if home_value else defaults.home_dir

    return GitHooksConfig(
        git_executable=str(merged.get("git_executable", defaults.git_executable)),
        home_dir=home_dir,
        project_hooks_dirname=merged.get("project_hooks_dirname", defaults.project_hooks_dirname),
        project_manifest_name=merged.get("project_manifest_name", defaults.project_manifest_name),
        user_hooks_dirname=merged.get("user_hooks_dirname", defaults.user_hooks_dirname),
        user_manifest_name=merged.get("user_manifest_name", defaults.user_manifest_name),
        excludes_filename=merged.get("excludes_filename", defaults.excludes_filename),
        contrib_dirname=merged.get("contrib_dirname", defaults.contrib_dirname),
        contrib_remote=merged.get("contrib_remote", defaults.contrib_remote),
        contrib_branch=merged.get("contrib_branch", defaults.contrib_branch),
        hook_timeout=_parse_timeout(merged.get("hook_timeout")),
        log_level=str(merged.get("log_level", defaults.log_level)).upper(),
    )


# === 全局单例 ===
_config: Optional[GitHooksConfig] = None


def get_config(force_reload: bool = False) -> GitHooksConfig:
    """
    获取配置单例

    Args:
        force_reload: 强制重新加载

    Returns:
        配置对象
    """
    global _config

    if _config is None or force_reload:
        _config = load_config()

    return _config


def reset_config():
    """重置配置单例（用于测试）"""
    global _config
    _config = None
