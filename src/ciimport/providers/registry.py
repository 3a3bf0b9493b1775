# providers/registry.py
from __future__ import annotations

from typing import Dict, Type

from ciimport.auth import AuthServer, UserAuth
from ciimport.errors import ImportFailure
from ciimport.prompter import Prompter

from .base import GitProvider
from .gitea import GiteaProvider
from .github import GitHubProvider

PROVIDERS: Dict[str, Type[GitProvider]] = {
    GitHubProvider.kind: GitHubProvider,
    GiteaProvider.kind: GiteaProvider,
}


def provider_class(kind: str) -> Type[GitProvider]:
    try:
        return PROVIDERS[kind]
    except KeyError:
        raise ImportFailure(
            kind="user_input",
            step="create git provider",
            message=f"Unknown git provider kind {kind!r}",
            details={"supported": ", ".join(sorted(PROVIDERS))},
        )


def create_provider(server: AuthServer, user: UserAuth) -> GitProvider:
    return provider_class(server.kind)(server, user)


def pick_organisation(provider: GitProvider, username: str, prompter: Prompter) -> str:
    """
    Ask which organisation should own the new repository.

    Returns:
        The organisation name, or "" when the user's own namespace is chosen
        (or the user belongs to no organisations).
    """
    orgs = sorted(provider.list_organisations())
    if not orgs:
        return ""
    choice = prompter.select(
        "Which organisation do you want to use?",
        [username, *orgs],
        default=username,
    )
    return "" if choice == username else choice
