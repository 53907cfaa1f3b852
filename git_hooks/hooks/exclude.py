"""
Exclude - 按 excludes.json 裁剪 hook 索引

excludes.json 是任意嵌套的 JSON，按路径段与目标结构匹配：

    {
        "<repo-identity>": {
            "pre-commit": ["whitespace"],
            "commit-msg": true
        }
    }

规则（prune(tree, pattern)）：
- pattern 为 true / null：删除整个节点
- 映射 vs 映射：对 tree 的每个键，应用所有匹配的 pattern 键（fnmatch 通配，
  字面量键精确匹配），未匹配的键保持不变
- 映射 vs 列表/字符串：删除匹配的键
- 列表 vs 列表/字符串：删除匹配的元素（列表本身保留，可能为空）
"""

from __future__ import annotations

import fnmatch
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_REMOVE = object()


def _matches(value: Any, pattern: Any) -> bool:
    if isinstance(value, str) and isinstance(pattern, str):
        return fnmatch.fnmatchcase(value, pattern)
    return value == pattern


def _as_patterns(pattern: Any) -> list[Any]:
    return pattern if isinstance(pattern, list) else [pattern]


def _prune(tree: Any, pattern: Any) -> Any:
    if pattern is True or pattern is None:
        return _REMOVE

    if isinstance(tree, dict):
        if isinstance(pattern, dict):
            result: dict[str, Any] = {}
            for key, value in tree.items():
                pruned = value
                for pattern_key, sub_pattern in pattern.items():
                    if not _matches(key, pattern_key):
                        continue
                    pruned = _prune(pruned, sub_pattern)
                    if pruned is _REMOVE:
                        break
                if pruned is not _REMOVE:
                    result[key] = pruned
            return result
        patterns = _as_patterns(pattern)
        return {
            key: value
            for key, value in tree.items()
            if not any(_matches(key, p) for p in patterns)
        }

    if isinstance(tree, list):
        patterns = _as_patterns(pattern)
        return [item for item in tree if not any(_matches(item, p) for p in patterns)]

    if _matches(tree, pattern):
        return _REMOVE
    return tree


def prune(tree: Any, pattern: Any) -> Any:
    """从 tree 中裁剪 pattern 描述的部分，返回新结构（不修改入参）

    整个 tree 被删除时返回 None。
    """
    result = _prune(tree, pattern)
    return None if result is _REMOVE else result


def load_excludes(path: Path) -> Any | None:
    """读取 excludes.json；不存在或格式错误时返回 None（不做裁剪）"""
    if not path.exists():
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable excludes file {path}: {e}")
        return None


__all__ = ["load_excludes", "prune"]
