# discovery.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Tuple

from .errors import ImportFailure
from .git_facts import git
from .model import RemoteCandidate
from .prompter import Prompter
from .templates import DEFAULT_GITIGNORE
from .ui.console import get_console
from .util import write_file_if_absent

DEFAULT_COMMIT_MESSAGE = "Initial import"

# Remotes that win over any other, in order of preference.
PREFERRED_REMOTES = ("upstream", "origin")


# ----------------------------------------------------------------------
# Local repository discovery
# ----------------------------------------------------------------------

def discover_git(directory: Path, prompter: Prompter) -> Tuple[Path, Path]:
    """
    Find the git repository containing `directory`, or offer to create one.

    An existing repository is returned untouched. Otherwise the user is
    asked for consent, and on consent the directory is initialised, given a
    default .gitignore (if it has none) and committed (if anything is staged).

    Returns:
        (root, path to .git/config)

    Raises:
        ImportFailure: If the user declines to initialise git
    """
    console = get_console()

    root, config_path = git.find_git_root(directory)
    if root is not None and config_path is not None:
        console.print_debug(f"Found git repository at {root}")
        return root, config_path

    console.print_info(f"The directory {directory} is not yet using git")
    if not prompter.confirm("Would you like to initialise git now?", default=True):
        raise ImportFailure(
            kind="user_input",
            step="discover git",
            message="Please initialise git yourself then try again",
            details={"directory": str(directory)},
            suggestion=f"Run `git init` in {directory} and re-run the import.",
        )

    git.init(directory)
    write_default_gitignore(directory)
    git.add(directory, ".gitignore")
    git.add(directory, "*")

    message = prompter.input("Commit message:", default=DEFAULT_COMMIT_MESSAGE)
    if git.commit_if_changes(directory, message or DEFAULT_COMMIT_MESSAGE):
        console.print_committed(message or DEFAULT_COMMIT_MESSAGE)

    console.print_info("\nGit repository created")
    return directory, directory / ".git" / "config"


def write_default_gitignore(directory: Path) -> bool:
    return write_file_if_absent(directory / ".gitignore", DEFAULT_GITIGNORE)


# ----------------------------------------------------------------------
# Remote URL discovery
# ----------------------------------------------------------------------

def discover_remote_url(config_path: Optional[Path], prompter: Prompter) -> Optional[str]:
    """
    Pick the remote URL to import from the repository's git config.

    Precedence: "upstream", then "origin", then the only URL declared by any
    remote, then a prompt over every URL.

    Returns:
        The URL, or None when the repository has no remotes.
    """
    if not config_path:
        raise ImportFailure(
            kind="orchestration",
            step="discover remote URL",
            message="No git config file defined!",
        )

    remotes = git.read_remotes(config_path)
    if not remotes:
        return None

    for name in PREFERRED_REMOTES:
        url = _first_url(remotes, name)
        if url:
            return url

    return pick_remote_url(remotes, prompter)


def _first_url(remotes: List[RemoteCandidate], name: str) -> Optional[str]:
    for remote in remotes:
        if remote.name == name and remote.urls:
            return remote.urls[0]
    return None


def pick_remote_url(remotes: List[RemoteCandidate], prompter: Prompter) -> Optional[str]:
    urls = [u for r in remotes for u in r.urls]
    if not urls:
        return None
    if len(urls) == 1:
        return urls[0]
    return prompter.select("Choose a remote git URL:", urls)


def remote_name_for_url(config_path: Optional[Path], url: str) -> str:
    """Name of the remote declaring `url`; "origin" when there is none."""
    if config_path:
        for remote in git.read_remotes(config_path):
            if url in remote.urls:
                return remote.name
    return "origin"
