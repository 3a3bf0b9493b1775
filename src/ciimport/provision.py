# provision.py
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from .errors import ScaffoldError
from .git_facts import git
from .templates import DEFAULT_JENKINSFILE
from .ui.console import get_console
from .util import write_file_if_absent

JAVA_PACK = "github.com/jenkins-x/draft-repo/packs/java"
GRADLE_PACK = "github.com/jenkins-x/draft-repo/packs/gradle"

# First build descriptor found decides the draft pack; none -> draft's own detection.
BUILD_DESCRIPTOR_PACKS = (
    ("pom.xml", JAVA_PACK),
    ("build.gradle", GRADLE_PACK),
)

# `draft create` writes this; its presence means the project is already scaffolded.
SCAFFOLD_MARKER = "draft.toml"

PIPELINE_FILE = "Jenkinsfile"

SCAFFOLD_COMMIT_MESSAGE = "Draft create"
PIPELINE_COMMIT_MESSAGE = "Added default Jenkinsfile pipeline"


def select_profile(directory: Path) -> Optional[str]:
    """Return the draft pack for the project's build descriptor, or None for the default."""
    for filename, pack in BUILD_DESCRIPTOR_PACKS:
        if (directory / filename).exists():
            return pack
    return None


class DraftGenerator:
    """Runs `draft create`, sharing this process's stdout/stderr."""

    def __init__(self, binary: str = "draft"):
        self.binary = binary

    def generate(self, directory: Path, profile: Optional[str]) -> None:
        args = [self.binary, "create"]
        if profile:
            args.append(f"--pack={profile}")
        try:
            proc = subprocess.run(args, cwd=str(directory))
        except FileNotFoundError:
            raise ScaffoldError(
                f"Failed to run draft create in {directory}: {self.binary} not found. "
                "Install draft or set CIIMPORT_DRAFT_BIN."
            )
        if proc.returncode != 0:
            raise ScaffoldError(
                f"Failed to run draft create in {directory} due to exit status {proc.returncode}"
            )


def draft_create(directory: Path, generator: DraftGenerator) -> bool:
    """
    Scaffold the project unless it already is, then commit the result.

    Returns:
        True if a commit was made.
    """
    console = get_console()
    if (directory / SCAFFOLD_MARKER).exists():
        console.print_skipped("draft create", f"{SCAFFOLD_MARKER} exists")
        return False

    profile = select_profile(directory)
    console.print_debug(f"draft pack: {profile or 'default'}")
    generator.generate(directory, profile)

    git.add(directory, "*")
    committed = git.commit_if_changes(directory, SCAFFOLD_COMMIT_MESSAGE)
    if committed:
        console.print_committed(SCAFFOLD_COMMIT_MESSAGE)
    return committed


def default_jenkinsfile(directory: Path) -> bool:
    """
    Add the default Jenkinsfile if the project has none, then commit it.

    A Jenkinsfile already in the project is never touched.

    Returns:
        True if a commit was made.
    """
    console = get_console()
    if not write_file_if_absent(directory / PIPELINE_FILE, DEFAULT_JENKINSFILE):
        console.print_skipped(PIPELINE_FILE, "already exists")
        return False

    git.add(directory, PIPELINE_FILE)
    committed = git.commit_if_changes(directory, PIPELINE_COMMIT_MESSAGE)
    if committed:
        console.print_committed(PIPELINE_COMMIT_MESSAGE)
    return committed


def provision(directory: Path, generator: DraftGenerator) -> int:
    """
    Make sure the project has its build scaffolding and a pipeline.

    Returns:
        Number of commits created (0 on an already provisioned project).
    """
    commits = 0
    if draft_create(directory, generator):
        commits += 1
    if default_jenkinsfile(directory):
        commits += 1
    return commits
