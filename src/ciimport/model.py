# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .auth import AuthServer, UserAuth
    from .providers.base import GitProvider

DEFAULT_CREDENTIALS = "jenkins-x-github"


@dataclass
class ImportContext:
    """
    State of one import run.

    Built from the CLI input and handed to each phase in turn; phases update
    it in place (directory after a clone or discovery, repo_url once known).
    """
    directory: Path
    repo_url: Optional[str] = None
    git_config: Optional[Path] = None
    organisation: Optional[str] = None
    repository: Optional[str] = None
    credentials: str = DEFAULT_CREDENTIALS
    batch_mode: bool = False


@dataclass(frozen=True)
class GitInfo:
    """A remote git URL split into host / organisation / repository name."""
    host: str
    organisation: str
    name: str
    url: str

    @property
    def full_name(self) -> str:
        return f"{self.organisation}/{self.name}"


@dataclass(frozen=True)
class RemoteCandidate:
    name: str
    urls: tuple[str, ...] = ()


@dataclass(frozen=True)
class GitRepository:
    """A repository as returned by a git provider."""
    name: str
    clone_url: str
    html_url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GitRepository:
        return cls(
            name=data["name"],
            clone_url=data["clone_url"],
            html_url=data.get("html_url", ""),
        )


@dataclass
class ProviderSession:
    """Everything needed to create a repository on one provider."""
    server: AuthServer
    user: UserAuth
    provider: GitProvider
    owner: str = ""


@dataclass(frozen=True)
class JenkinsJob:
    name: str
    url: str
    class_name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> JenkinsJob:
        return cls(
            name=data.get("name", ""),
            url=data.get("url", ""),
            class_name=data.get("_class", ""),
        )


@dataclass(frozen=True)
class BuildJobDescriptor:
    folder: str
    name: str
    xml: str = field(repr=False)

    @property
    def full_name(self) -> str:
        return f"{self.folder}/{self.name}"
