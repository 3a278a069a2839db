"""Base source-control provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional


@dataclass
class Repository:
    """Repository visible to the authenticated account."""

    id: int
    name: str
    full_name: str
    owner: str
    description: Optional[str]
    private: bool
    url: str
    updated_at: Optional[str]


@dataclass
class RemoteCommit:
    """Commit as listed by the provider, before diff stats are fetched."""

    sha: str
    message: str
    author_name: Optional[str]
    author_email: Optional[str]
    date: datetime  # naive UTC
    url: Optional[str]


@dataclass
class CommitStats:
    """Diff statistics of a single commit."""

    additions: int = 0
    deletions: int = 0
    files_changed: int = 0


@dataclass
class Profile:
    """Profile of the authenticated account."""

    id: int
    login: str
    name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None


class SourceControlProvider(ABC):
    """Base class for source-control providers.

    Implementations raise UpstreamError on any remote failure; callers decide
    whether a failure is fatal.
    """

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def list_repositories(self) -> List[Repository]:
        pass

    @abstractmethod
    def list_commits(
        self,
        owner: str,
        repo: str,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[RemoteCommit]:
        pass

    @abstractmethod
    def get_commit_stats(self, owner: str, repo: str, sha: str) -> CommitStats:
        pass

    @abstractmethod
    def get_profile(self) -> Profile:
        pass
