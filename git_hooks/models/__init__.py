"""Data models for git-hooks."""

from git_hooks.models.manifest import HookManifest

__all__ = ["HookManifest"]
