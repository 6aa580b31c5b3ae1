"""Point-in-time repository facts for a single directory, read via pygit2."""

from __future__ import annotations

from pathlib import Path

import pygit2
import structlog

from envscout.git.models import GitRepoStatus

log = structlog.get_logger()

_BRANCH_PREFIX = "refs/heads/"


def _current_branch(repo: pygit2.Repository) -> str | None:
    if repo.head_is_unborn:
        try:
            target = getattr(repo.references["HEAD"], "target", None)
        except KeyError:
            # HEAD reference missing in unborn repo; no branch name available
            return None
        if isinstance(target, str) and target.startswith(_BRANCH_PREFIX):
            return target[len(_BRANCH_PREFIX) :]
        return None
    if repo.head_is_detached:
        return None
    return repo.head.shorthand


def _has_changes(repo: pygit2.Repository) -> bool:
    if repo.is_bare:
        return False
    return any(
        flags != pygit2.GIT_STATUS_IGNORED for flags in repo.status(ignored=False).values()
    )


def _remote_url(repo: pygit2.Repository) -> str | None:
    remotes = list(repo.remotes)
    for remote in remotes:
        if remote.name == "origin":
            return remote.url
    return remotes[0].url if remotes else None


def get_git_repo_status(path: str | Path) -> GitRepoStatus:
    """Report whether ``path`` is inside a repository, and its branch, changes and remote.

    Not cached: every call reads the repository afresh. A directory outside
    any repository, or one that cannot be read, yields ``is_repo=False``.
    """
    directory = Path(path).expanduser()
    if not directory.is_dir():
        return GitRepoStatus.not_a_repo()

    try:
        repo_path = pygit2.discover_repository(str(directory))
        if repo_path is None:
            return GitRepoStatus.not_a_repo()
        repo = pygit2.Repository(repo_path)
        return GitRepoStatus(
            is_repo=True,
            branch=_current_branch(repo),
            has_changes=_has_changes(repo),
            remote_url=_remote_url(repo),
        )
    except (pygit2.GitError, OSError) as e:
        log.warning("git_repo_status_failed", path=str(directory), error=str(e))
        return GitRepoStatus.not_a_repo()
