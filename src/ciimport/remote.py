# remote.py
from __future__ import annotations

from pathlib import Path

from .auth import AuthConfigService, AuthServer, UserAuth
from .errors import ImportFailure
from .git_facts import git
from .model import ImportContext, ProviderSession
from .prompter import Prompter
from .providers.registry import create_provider, pick_organisation, provider_class
from .ui.console import get_console
from .util import MAXIMUM_NEW_DIRECTORY_ATTEMPTS, create_unique_directory


# ----------------------------------------------------------------------
# Clone path
# ----------------------------------------------------------------------

def clone_repository(url: str, base_dir: Path) -> Path:
    """
    Clone `url` into a fresh directory under `base_dir`.

    The directory is named after the repository, with a numeric suffix when
    that name is taken.

    Returns:
        The new clone's directory
    """
    if not url:
        raise ImportFailure(kind="orchestration", step="clone", message="No git repository URL defined!")
    try:
        info = git.parse_git_url(url)
    except ValueError as e:
        raise ImportFailure(
            kind="user_input",
            step="clone",
            message=f"Failed to parse git URL {url} due to: {e}",
        ) from e

    try:
        clone_dir = create_unique_directory(base_dir, info.name, MAXIMUM_NEW_DIRECTORY_ATTEMPTS)
    except FileExistsError as e:
        raise ImportFailure(kind="orchestration", step="clone", message=str(e)) from e
    get_console().print_info(f"Cloning {url} into {clone_dir}")
    git.clone(url, clone_dir)
    return clone_dir


# ----------------------------------------------------------------------
# Create-and-push path
# ----------------------------------------------------------------------

def resolve_user_auth(auth_service: AuthConfigService, server: AuthServer) -> UserAuth:
    """
    Return working credentials for `server`, asking for (and saving) new ones
    when none are stored.

    Raises:
        ImportFailure: If the credentials are still incomplete after asking
    """
    console = get_console()
    user = auth_service.pick_user_auth(server.url)
    if not user.is_invalid():
        return user

    token_url = provider_class(server.kind).token_url(server.url)
    console.print_info(f"To be able to create a repository on {server.label()} we need an API Token")
    console.print_info(f"Please click this URL {token_url}\n")
    console.print_info("Then COPY the token and enter in into the form below:\n")

    user = auth_service.edit_user_auth(user)
    if user.is_invalid():
        raise ImportFailure(
            kind="user_input",
            step="git credentials",
            message="You did not properly define the user authentication!",
            details={"server": server.url},
            suggestion=f"Create a token at {token_url} and re-run the import.",
        )
    auth_service.save_user_auth(server.url, user)
    return user


def open_provider_session(
    ctx: ImportContext,
    auth_service: AuthConfigService,
    prompter: Prompter,
) -> ProviderSession:
    console = get_console()
    server = auth_service.pick_server()
    console.print_info(f"Using git provider {server.description()}")

    user = resolve_user_auth(auth_service, server)
    console.print_info(f"About to create a repository on server {server.url} with user {user.username}")

    provider = create_provider(server, user)
    org = ctx.organisation or pick_organisation(provider, user.username, prompter)
    return ProviderSession(server=server, user=user, provider=provider, owner=org)


def ask_repository_name(ctx: ImportContext, session: ProviderSession, prompter: Prompter) -> str:
    """
    Choose the new repository's name.

    A name given up front is validated without prompting; otherwise the user
    is asked, defaulting to the directory's name.
    """
    provider = session.provider
    owner = session.owner or session.user.username

    def validator(value: str) -> None:
        if not value.strip():
            raise ValueError("Repository name is required")
        provider.validate_repository_name(owner, value.strip())

    if ctx.repository:
        try:
            validator(ctx.repository)
        except ValueError as e:
            raise ImportFailure(
                kind="user_input",
                step="repository name",
                message=str(e),
                details={"server": session.server.url, "owner": owner},
            ) from e
        return ctx.repository.strip()

    name = prompter.input(
        "Enter the new repository name:",
        default=ctx.directory.name,
        validator=validator,
    ).strip()
    if not name:
        raise ImportFailure(kind="user_input", step="repository name", message="No repository name specified!")
    return name


def create_new_remote_repository(
    ctx: ImportContext,
    auth_service: AuthConfigService,
    prompter: Prompter,
) -> str:
    """
    Create a repository on a git provider and push the project to it.

    Returns:
        The new repository's clone URL (without credentials)
    """
    console = get_console()
    session = open_provider_session(ctx, auth_service, prompter)
    name = ask_repository_name(ctx, session, prompter)

    full_name = f"{session.owner}/{name}" if session.owner else name
    console.print_info(f"\nCreating repository {full_name}")
    repo = session.provider.create_repository(session.owner, name, private=False)
    console.print_created("repository", repo.html_url or repo.clone_url)

    push_url = git.create_push_url(repo.clone_url, session.user.username, session.user.api_token)
    git.remote_add(ctx.directory, "origin", push_url)
    branch = git.current_branch(ctx.directory)
    git.push_branch(ctx.directory, "origin", branch)
    console.print_info(f"Pushed git repository to {session.server.description()}\n")
    return repo.clone_url
