# providers/base.py
from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import List

from ciimport.auth import AuthServer, UserAuth
from ciimport.errors import ProviderError
from ciimport.http_client import HTTPClient
from ciimport.model import GitRepository

_VALID_NAME = re.compile(r"^[A-Za-z0-9._-]+$")


class GitProvider(HTTPClient, ABC):
    """A hosted git service we can create repositories on."""

    kind: str = ""
    error_class = ProviderError

    def __init__(self, server: AuthServer, user: UserAuth):
        self.server = server
        self.user = user
        super().__init__(self.api_url(server.url))

    @classmethod
    @abstractmethod
    def api_url(cls, server_url: str) -> str:
        """REST endpoint for a server's web URL."""

    @classmethod
    @abstractmethod
    def token_url(cls, server_url: str) -> str:
        """Page where the user can create an API token."""

    def _auth_headers(self) -> dict:
        return {"Authorization": f"token {self.user.api_token}"}

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    @abstractmethod
    def list_organisations(self) -> List[str]:
        ...

    def repository_exists(self, owner: str, name: str) -> bool:
        try:
            self._request("GET", f"/repos/{owner}/{name}")
        except ProviderError as e:
            if e.not_found:
                return False
            raise
        return True

    def validate_repository_name(self, owner: str, name: str) -> None:
        """
        Reject names the server would refuse or that are already taken.

        Raises:
            ValueError: With a message suitable for re-prompting
            ProviderError: If the server could not be asked
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Repository name is required")
        if name in (".", "..") or not _VALID_NAME.match(name):
            raise ValueError(
                f"Repository name {name!r} may only contain letters, digits, '.', '-' and '_'"
            )
        if self.repository_exists(owner, name):
            raise ValueError(f"Repository {owner}/{name} already exists on {self.server.label()}")

    def create_repository(self, org: str, name: str, private: bool = False) -> GitRepository:
        """
        Create a repository in `org`, or in the user's namespace when `org` is empty.
        """
        path = f"/orgs/{org}/repos" if org else "/user/repos"
        data = self._request("POST", path, data={"name": name, "private": private})
        return GitRepository.from_dict(data)
