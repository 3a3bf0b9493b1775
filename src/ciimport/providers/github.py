# providers/github.py
from __future__ import annotations

from typing import List
from urllib.parse import urlsplit

from .base import GitProvider

GITHUB_API = "https://api.github.com"


class GitHubProvider(GitProvider):
    kind = "github"

    @classmethod
    def api_url(cls, server_url: str) -> str:
        host = urlsplit(server_url).hostname or server_url
        if host == "github.com":
            return GITHUB_API
        # GitHub Enterprise
        return server_url.rstrip("/") + "/api/v3"

    @classmethod
    def token_url(cls, server_url: str) -> str:
        return (
            server_url.rstrip("/")
            + "/settings/tokens/new?scopes=repo,read:user,user:email,write:repo_hook"
        )

    def _auth_headers(self) -> dict:
        headers = super()._auth_headers()
        headers["Accept"] = "application/vnd.github+json"
        return headers

    def list_organisations(self) -> List[str]:
        return [o["login"] for o in self._request("GET", "/user/orgs")]
