"""Git repository queries."""

from envscout.git.models import GitRepoStatus
from envscout.git.repo_status import get_git_repo_status

__all__ = ["GitRepoStatus", "get_git_repo_status"]
