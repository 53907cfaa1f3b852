"""
Tests for Manifest Hook Index.
"""

import json

from git_hooks.hooks.manifest_index import list_hooks_in_config, load_manifest
from git_hooks.models.manifest import HookManifest


def _write(path, payload):
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


class TestListHooksInConfig:
    """测试 list_hooks_in_config()"""

    def test_parses_nested_structure(self, tmp_path):
        path = _write(
            tmp_path / "githooks.json",
            {"pre-commit": {"github.com/x/y": ["lint", "fmt"]}},
        )

        assert list_hooks_in_config(path) == {"pre-commit": {"github.com/x/y": ["lint", "fmt"]}}

    def test_preserves_file_order(self, tmp_path):
        """仓库和 hook 的顺序与文件一致"""
        path = tmp_path / "githooks.json"
        path.write_text(
            '{"pre-push": {"z.org/b": ["second", "first"], "a.org/a": ["only"]}}',
            encoding="utf-8",
        )

        index = list_hooks_in_config(path)
        assert list(index["pre-push"]) == ["z.org/b", "a.org/a"]
        assert index["pre-push"]["z.org/b"] == ["second", "first"]

    def test_missing_file_is_empty(self, tmp_path):
        assert list_hooks_in_config(tmp_path / "missing.json") == {}

    def test_malformed_json_is_empty(self, tmp_path):
        """格式错误的 manifest 贡献零个 hook"""
        path = tmp_path / "githooks.json"
        path.write_text("{not json", encoding="utf-8")

        assert list_hooks_in_config(path) == {}

    def test_wrong_shape_is_empty(self, tmp_path):
        path = _write(tmp_path / "githooks.json", {"pre-commit": ["lint"]})

        assert list_hooks_in_config(path) == {}


class TestHookManifest:
    """测试 HookManifest 模型"""

    def test_repositories_for_trigger(self, tmp_path):
        manifest = load_manifest(
            _write(tmp_path / "githooks.json", {"pre-commit": {"x/y": ["a"]}})
        )

        assert manifest.repositories("pre-commit") == {"x/y": ["a"]}

    def test_repositories_exact_match_only(self):
        """manifest 不支持 semi scope"""
        manifest = HookManifest({"_pre-commit": {"x/y": ["a"]}})

        assert manifest.repositories("pre-commit") == {}

    def test_triggers(self):
        manifest = HookManifest({"pre-commit": {}, "commit-msg": {}})

        assert manifest.triggers() == ["pre-commit", "commit-msg"]


class TestUnreadableManifest:
    """无法解码的 manifest 不能中断执行"""

    def test_invalid_utf8_is_empty(self, tmp_path):
        path = tmp_path / "githooks.json"
        path.write_bytes(b'{"pre-commit": {"\xff\xfe": ["x"]}}')

        assert list_hooks_in_config(path) == {}
