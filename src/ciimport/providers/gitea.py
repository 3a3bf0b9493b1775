# providers/gitea.py
from __future__ import annotations

from typing import List

from .base import GitProvider


class GiteaProvider(GitProvider):
    kind = "gitea"

    @classmethod
    def api_url(cls, server_url: str) -> str:
        return server_url.rstrip("/") + "/api/v1"

    @classmethod
    def token_url(cls, server_url: str) -> str:
        return server_url.rstrip("/") + "/user/settings/applications"

    def list_organisations(self) -> List[str]:
        # Gitea calls the login "username" on organisations
        return [o.get("username") or o["name"] for o in self._request("GET", "/user/orgs")]
