"""Git data models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class GitRepoStatus:
    """Repository facts for one directory."""

    is_repo: bool
    branch: str | None
    has_changes: bool
    remote_url: str | None

    @classmethod
    def not_a_repo(cls) -> GitRepoStatus:
        return cls(is_repo=False, branch=None, has_changes=False, remote_url=None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_repo": self.is_repo,
            "branch": self.branch,
            "has_changes": self.has_changes,
            "remote_url": self.remote_url,
        }
