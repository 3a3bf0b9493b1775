# util.py
from __future__ import annotations

import os
from pathlib import Path

MAXIMUM_NEW_DIRECTORY_ATTEMPTS = 1000

DEFAULT_WRITE_PERMISSIONS = 0o760


def create_unique_directory(
    base: str | Path,
    name: str,
    max_attempts: int = MAXIMUM_NEW_DIRECTORY_ATTEMPTS,
) -> Path:
    """
    Create a new directory under `base` named after `name`.

    Tries `name`, then `name2`, `name3`, ... until a directory can be
    created. Creation itself is the existence check, so two concurrent
    callers can never get the same directory.

    Args:
        base: Parent directory (created if missing)
        name: Preferred directory name
        max_attempts: Number of names to try before giving up

    Returns:
        Path to the newly created, empty directory

    Raises:
        FileExistsError: If every candidate name is already taken
    """
    base_p = Path(base)
    base_p.mkdir(parents=True, exist_ok=True)

    for i in range(1, max_attempts + 1):
        candidate = base_p / (name if i == 1 else f"{name}{i}")
        try:
            candidate.mkdir(mode=DEFAULT_WRITE_PERMISSIONS)
        except FileExistsError:
            continue
        return candidate

    raise FileExistsError(
        f"Could not create a unique directory for {name!r} in {base_p} "
        f"after {max_attempts} attempts"
    )


def write_file_if_absent(path: str | Path, content: str) -> bool:
    """
    Write `content` to `path` unless the file already exists.

    Returns:
        True if the file was written, False if it already existed.
    """
    p = Path(path)
    try:
        fd = os.open(p, os.O_WRONLY | os.O_CREAT | os.O_EXCL, DEFAULT_WRITE_PERMISSIONS)
    except FileExistsError:
        return False
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)
    return True
