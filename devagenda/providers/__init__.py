"""Source-control providers for commit history."""

from devagenda.providers.base import (
    SourceControlProvider,
    Repository,
    RemoteCommit,
    CommitStats,
    Profile,
)
from devagenda.providers.github import GitHubProvider

__all__ = [
    "SourceControlProvider",
    "Repository",
    "RemoteCommit",
    "CommitStats",
    "Profile",
    "GitHubProvider",
]
