"""
Tests for the command line interface.
"""

import shutil
import subprocess

import pytest
from typer.testing import CliRunner

from git_hooks.cli import app
from git_hooks.config import VERSION
from git_hooks.hooks.base import HookFailure, RunResult

runner = CliRunner()

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")


@pytest.fixture
def outside_repo(in_tmp_dir, tmp_path, monkeypatch):
    """工作目录不在任何 Git 仓库中"""
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    return in_tmp_dir


class FakeRunner:
    """替换 HookRunner，记录调用并返回预设结果"""

    calls = []
    result = RunResult(trigger="pre-commit")

    def __init__(self, **kwargs):
        pass

    def run(self, trigger, args=()):
        FakeRunner.calls.append((trigger, list(args)))
        return FakeRunner.result


@pytest.fixture
def fake_runner(monkeypatch):
    FakeRunner.calls = []
    FakeRunner.result = RunResult(trigger="pre-commit")
    monkeypatch.setattr("git_hooks.cli.run_cmd.HookRunner", FakeRunner)
    return FakeRunner


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert result.output.strip() == f"git-hooks {VERSION}"


class TestRunCommand:
    """测试 git-hooks run"""

    def test_success_exit_code(self, fake_runner):
        result = runner.invoke(app, ["run", "pre-commit"])

        assert result.exit_code == 0
        assert fake_runner.calls == [("pre-commit", [])]

    def test_first_failure_status(self, fake_runner):
        fake_runner.result = RunResult(
            trigger="pre-commit",
            failures=[
                HookFailure(identity="project:pre-commit/a", status=3, message="a"),
                HookFailure(identity="project:pre-commit/b", status=1, message="b"),
            ],
        )

        result = runner.invoke(app, ["run", "pre-commit"])

        assert result.exit_code == 3

    def test_arguments_forwarded(self, fake_runner):
        """trampoline 转发的参数原样传递，包括选项形式的参数"""
        result = runner.invoke(app, ["run", ".git/hooks/pre-push", "origin", "--force"])

        assert result.exit_code == 0
        assert fake_runner.calls == [(".git/hooks/pre-push", ["origin", "--force"])]

    @requires_git
    def test_end_to_end(self, tmp_path, monkeypatch, hook_writer):
        """真实仓库中执行 project hook"""
        repo = tmp_path / "repo"
        subprocess.run(["git", "init", "-q", str(repo)], check=True)
        hook_writer(repo / "githooks" / "pre-commit" / "fail", "exit 3")
        monkeypatch.chdir(repo)

        result = runner.invoke(app, ["run", "pre-commit"])

        assert result.exit_code == 3


class TestListCommand:
    """测试 git-hooks list"""

    def test_no_hooks(self, outside_repo):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No hooks found" in result.output

    def test_default_command_is_list(self, outside_repo):
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        assert "No hooks found" in result.output

    def test_user_hooks(self, outside_repo, home, hook_writer):
        hook_writer(home / ".githooks" / "pre-commit" / "whitespace")
        hook_writer(home / ".githooks" / "commit-msg" / "signed-off")
        (home / ".githooks.json").write_text('{"pre-commit": {"github.com/acme/hooks": ["lint"]}}')

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "user hooks" in result.output
        assert "whitespace" in result.output
        assert "signed-off" in result.output
        assert "github.com/acme/hooks" in result.output
        assert "lint" in result.output

    def test_trigger_filter(self, outside_repo, home, hook_writer):
        hook_writer(home / ".githooks" / "pre-commit" / "whitespace")
        hook_writer(home / ".githooks" / "_pre-commit" / "advice")
        hook_writer(home / ".githooks" / "commit-msg" / "signed-off")

        result = runner.invoke(app, ["list", "--trigger", "pre-commit"])

        assert "whitespace" in result.output
        assert "advice" in result.output
        assert "signed-off" not in result.output


class TestIdentityCommand:
    """测试 git-hooks identity"""

    def test_outside_repository(self, outside_repo):
        result = runner.invoke(app, ["identity"])

        assert result.exit_code == 1

    @requires_git
    def test_first_commit(self, tmp_path, monkeypatch):
        repo = tmp_path / "repo"
        subprocess.run(["git", "init", "-q", str(repo)], check=True)
        monkeypatch.chdir(repo)
        for key in ("AUTHOR", "COMMITTER"):
            monkeypatch.setenv(f"GIT_{key}_NAME", "Test")
            monkeypatch.setenv(f"GIT_{key}_EMAIL", "test@example.com")
        subprocess.run(["git", "commit", "-q", "--allow-empty", "-m", "root"], check=True)
        expected = subprocess.run(
            ["git", "rev-parse", "HEAD"], check=True, capture_output=True, text=True
        ).stdout.strip()

        result = runner.invoke(app, ["identity"])

        assert result.exit_code == 0
        assert result.output.strip() == expected
