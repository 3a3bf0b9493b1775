# git.py
# Small, focused wrapper around the Git CLI.
# This module centralizes all Git interactions so the rest of the codebase
# never needs to call subprocess("git ...") directly.

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import List, Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

from ciimport.errors import GitError
from ciimport.model import GitInfo, RemoteCandidate

DEFAULT_BRANCH = "master"

# git@github.com:acme/widget.git
_SCP_LIKE = re.compile(r"^(?:(?P<user>[^@/]+)@)?(?P<host>[^:/]+):(?P<path>[^/].*)$")


def _git(args: list[str], cwd: Optional[str | Path] = None) -> str:
    """
    Execute a git command and return its stdout as a clean string.

    This is the single low-level entry point for all Git operations in this file.
    Every other function builds on top of this to ensure:
    - consistent invocation of git
    - consistent text output (not bytes)
    - failures always surface as GitError with the directory attached

    Args:
        args: List of git arguments (e.g. ["status", "--porcelain"])
        cwd: Optional working directory in which to run the git command.

    Returns:
        Stdout from the git command with surrounding whitespace removed.

    Raises:
        GitError: If git exits non-zero or is not installed.
    """
    cwd_s = str(cwd) if cwd is not None else None
    try:
        proc = subprocess.run(
            ["git", *args],
            cwd=cwd_s,
            text=True,   # return output as str instead of bytes
            capture_output=True,
        )
    except FileNotFoundError:
        raise GitError(args, cwd_s, "git command not found. Please install Git.")

    if proc.returncode != 0:
        raise GitError(args, cwd_s, proc.stderr or proc.stdout)

    # Strip trailing newlines so callers can do clean string comparisons
    return proc.stdout.strip()


# ----------------------------------------------------------------------
# Local repository discovery
# ----------------------------------------------------------------------

def find_git_root(directory: str | Path) -> Tuple[Optional[Path], Optional[Path]]:
    """
    Search `directory` and its ancestors for a `.git` entry.

    A `.git` file (worktrees, submodules) counts as well as a directory.

    Returns:
        (root, config_path) or (None, None) when no repository is found.
    """
    current = Path(directory).expanduser().resolve()
    for candidate in (current, *current.parents):
        dot_git = candidate / ".git"
        if dot_git.is_dir():
            return candidate, dot_git / "config"
        if dot_git.is_file():
            return candidate, _common_dir(_gitdir_from_file(dot_git)) / "config"
    return None, None


def _gitdir_from_file(dot_git: Path) -> Path:
    # a .git file contains a single "gitdir: <path>" line
    content = dot_git.read_text(encoding="utf-8").strip()
    if not content.startswith("gitdir:"):
        raise GitError(["rev-parse"], str(dot_git.parent), f"{dot_git} is not a gitdir file")
    gitdir = Path(content[len("gitdir:"):].strip())
    if not gitdir.is_absolute():
        gitdir = (dot_git.parent / gitdir).resolve()
    return gitdir


def _common_dir(gitdir: Path) -> Path:
    # linked worktrees keep their config in the main repository, named by a
    # "commondir" file relative to the worktree's gitdir
    commondir = gitdir / "commondir"
    if not commondir.is_file():
        return gitdir
    common = Path(commondir.read_text(encoding="utf-8").strip())
    if not common.is_absolute():
        common = (gitdir / common).resolve()
    return common


def init(directory: str | Path) -> None:
    _git(["init"], cwd=directory)


def clone(url: str, directory: str | Path) -> None:
    """Clone `url` into `directory` (which may already exist but be empty)."""
    _git(["clone", url, str(directory)])


def add(directory: str | Path, pattern: str) -> None:
    # `git add *` is passed straight to git so dotfiles are matched by git's
    # own pathspec rules rather than a shell glob.
    _git(["add", pattern], cwd=directory)


def has_staged_changes(directory: str | Path) -> bool:
    """
    Check whether the index differs from HEAD.

    `git diff --cached --quiet` exits 1 when there is something staged and 0
    when the index is clean; on an unborn branch it compares against the
    empty tree, so the first commit is detected too.
    """
    try:
        proc = subprocess.run(
            ["git", "diff", "--cached", "--quiet"],
            cwd=str(directory),
            capture_output=True,
            text=True,
        )
    except FileNotFoundError:
        raise GitError(["diff", "--cached", "--quiet"], str(directory), "git command not found. Please install Git.")
    if proc.returncode not in (0, 1):
        raise GitError(["diff", "--cached", "--quiet"], str(directory), proc.stderr)
    return proc.returncode == 1


def commit_if_changes(directory: str | Path, message: str) -> bool:
    """
    Commit the index with `message` only if something is staged.

    Returns:
        True if a commit was created, False if there was nothing to commit.
    """
    if not has_staged_changes(directory):
        return False
    _git(["commit", "-m", message], cwd=directory)
    return True


def push(directory: str | Path, remote: str = "origin") -> None:
    """Push the current branch to the same-named branch on `remote`, tracking it."""
    _git(["push", "-u", remote, "HEAD"], cwd=directory)


def push_branch(directory: str | Path, remote: str, branch: str) -> None:
    """Push `branch` to `remote` and record it as the upstream."""
    _git(["push", "-u", remote, branch], cwd=directory)


def remote_add(directory: str | Path, name: str, url: str) -> None:
    _git(["remote", "add", name, url], cwd=directory)


def current_branch(directory: str | Path) -> str:
    """
    Return the name of the checked out branch.

    Falls back to DEFAULT_BRANCH on a detached HEAD.
    """
    try:
        # works on an unborn branch too, unlike rev-parse --abbrev-ref
        return _git(["symbolic-ref", "--short", "HEAD"], cwd=directory)
    except GitError:
        return DEFAULT_BRANCH


# ----------------------------------------------------------------------
# Remote configuration
# ----------------------------------------------------------------------

def read_remotes(config_path: str | Path) -> List[RemoteCandidate]:
    """
    Read the remotes declared in a git config file.

    `git config --get-regexp` keeps every value of a multi-valued key in
    declaration order, which a plain INI parser would collapse.

    Returns:
        RemoteCandidate per remote, in the order each remote first appears.
    """
    path = Path(config_path)
    if not path.exists():
        raise GitError(["config", "--file", str(path)], None, f"{path} does not exist")

    try:
        out = _git(["config", "--file", str(path), "--get-regexp", r"^remote\..*\.url$"])
    except GitError as e:
        # exit status 1 with no output means "no matching keys"
        if not e.stderr:
            return []
        raise

    urls_by_remote: dict[str, list[str]] = {}
    for line in out.splitlines():
        key, _, value = line.partition(" ")
        # key looks like remote.<name>.url; the name itself may contain dots
        name = key[len("remote."):-len(".url")]
        urls_by_remote.setdefault(name, []).append(value.strip())

    return [RemoteCandidate(name=n, urls=tuple(u)) for n, u in urls_by_remote.items()]


# ----------------------------------------------------------------------
# URL helpers
# ----------------------------------------------------------------------

def parse_git_url(url: str) -> GitInfo:
    """
    Split a git remote URL into host, organisation and repository name.

    Supports:
      https://github.com/acme/widget.git
      ssh://git@github.com/acme/widget.git
      git@github.com:acme/widget.git
      file:///srv/git/acme/widget.git

    The organisation is the path segment directly before the repository.

    Raises:
        ValueError: If the URL does not contain an organisation and name.
    """
    text = (url or "").strip()
    if not text:
        raise ValueError("empty git URL")

    if "://" in text:
        parts = urlsplit(text)
        host = parts.hostname or ""
        path = parts.path
    else:
        m = _SCP_LIKE.match(text)
        if m:
            host = m.group("host")
            path = m.group("path")
        else:
            host = ""
            path = text

    segments = [s for s in path.strip("/").split("/") if s]
    if len(segments) < 2:
        raise ValueError(f"git URL {url!r} has no organisation/repository path")

    name = segments[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    organisation = segments[-2]
    if not name:
        raise ValueError(f"git URL {url!r} has an empty repository name")

    return GitInfo(host=host, organisation=organisation, name=name, url=text)


def create_push_url(clone_url: str, username: str, api_token: str) -> str:
    """
    Return a URL git can push to without prompting.

    HTTP(S) URLs get the username and token embedded; any other scheme
    (ssh, scp-like) is returned unchanged since it authenticates via keys.
    """
    parts = urlsplit(clone_url)
    if parts.scheme not in ("http", "https"):
        return clone_url
    if not username or not api_token:
        return clone_url

    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    netloc = f"{quote(username, safe='')}:{quote(api_token, safe='')}@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))
