"""Manifest Hook Index - 解析 githooks.json"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from git_hooks.hooks.base import ManifestIndex
from git_hooks.models.manifest import HookManifest

logger = logging.getLogger(__name__)


def load_manifest(path: Path) -> HookManifest:
    """读取并校验 manifest；不可读或格式错误时返回空 manifest"""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
        return HookManifest.model_validate(payload)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring manifest {path}: {e}")
        return HookManifest({})


def list_hooks_in_config(path: Path) -> ManifestIndex:
    """trigger → 仓库名 → hook 列表"""
    return load_manifest(path).root


__all__ = ["list_hooks_in_config", "load_manifest"]
