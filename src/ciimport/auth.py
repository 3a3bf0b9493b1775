# auth.py
from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import ImportFailure
from .prompter import Prompter

GITHUB_URL = "https://github.com"


class UserAuth(BaseModel):
    username: str = ""
    api_token: str = ""

    def is_invalid(self) -> bool:
        return not self.username.strip() or not self.api_token.strip()


class AuthServer(BaseModel):
    url: str
    name: str = ""
    kind: str = "github"  # github | gitea
    users: List[UserAuth] = Field(default_factory=list)
    current_user: str = ""

    def label(self) -> str:
        return self.name or self.url

    def description(self) -> str:
        return f"{self.label()} at {self.url}"

    def get_user(self, username: str) -> Optional[UserAuth]:
        for u in self.users:
            if u.username == username:
                return u
        return None


class AuthConfig(BaseModel):
    """Contents of the git credential file."""
    servers: List[AuthServer] = Field(default_factory=list)
    current_server: str = ""
    default_username: str = ""

    def get_server(self, url: str) -> Optional[AuthServer]:
        key = url.rstrip("/")
        for s in self.servers:
            if s.url.rstrip("/") == key:
                return s
        return None

    def get_or_create_server(self, url: str, name: str = "", kind: str = "github") -> AuthServer:
        server = self.get_server(url)
        if server is None:
            server = AuthServer(url=url.rstrip("/"), name=name, kind=kind)
            self.servers.append(server)
        return server


def default_server() -> AuthServer:
    return AuthServer(url=GITHUB_URL, name="GitHub", kind="github")


class AuthConfigService:
    """
    Loads, edits and saves the git credential file.

    Args:
        path: Location of the JSON credential file
        prompter: Used whenever a server or user has to be chosen or entered
    """

    def __init__(self, path: str | Path, prompter: Prompter):
        self.path = Path(path)
        self.prompter = prompter
        self._config: Optional[AuthConfig] = None

    @property
    def config(self) -> AuthConfig:
        if self._config is None:
            self._config = self.load()
        return self._config

    def load(self) -> AuthConfig:
        if not self.path.exists():
            return AuthConfig()
        try:
            return AuthConfig.model_validate_json(self.path.read_text(encoding="utf-8"))
        except ValidationError as e:
            raise ImportFailure(
                kind="user_input",
                step="load git credentials",
                message=f"Git credential file {self.path} is not valid",
                details={"error": str(e).splitlines()[0]},
                suggestion=f"Fix or remove {self.path} and try again.",
            ) from e

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(self.config.model_dump_json(indent=2), encoding="utf-8")
        # holds API tokens
        os.chmod(self.path, 0o600)

    # ------------------------------------------------------------------
    # Interactive selection
    # ------------------------------------------------------------------

    def pick_server(self, message: str = "Which git provider?") -> AuthServer:
        config = self.config
        if not config.servers:
            config.servers.append(default_server())
        if len(config.servers) == 1:
            return config.servers[0]

        by_description = {s.description(): s for s in config.servers}
        current = config.get_server(config.current_server) if config.current_server else None
        choice = self.prompter.select(
            message,
            list(by_description),
            default=current.description() if current else None,
        )
        return by_description[choice]

    def pick_user_auth(self, url: str, message: str = "Which user name?") -> UserAuth:
        """
        Return the stored credentials for `url`.

        An empty (invalid) UserAuth is returned when none are stored yet.
        """
        server = self.config.get_server(url)
        if server is None or not server.users:
            return UserAuth()
        if len(server.users) == 1:
            return server.users[0]

        names = [u.username for u in server.users]
        default = server.current_user if server.current_user in names else None
        choice = self.prompter.select(message, names, default=default)
        return server.get_user(choice) or UserAuth()

    def edit_user_auth(self, user: UserAuth, default_username: str = "") -> UserAuth:
        username = self.prompter.input(
            "Git user name:",
            default=user.username or default_username or self.config.default_username,
        )
        api_token = self.prompter.input("API Token:", hide=True)
        return UserAuth(username=username.strip(), api_token=api_token.strip())

    def save_user_auth(self, url: str, user: UserAuth) -> None:
        server = self.config.get_or_create_server(url)
        existing = server.get_user(user.username)
        if existing is not None:
            existing.api_token = user.api_token
        else:
            server.users.append(user)
        server.current_user = user.username
        self.config.current_server = server.url
        self.save()
