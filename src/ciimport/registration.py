# registration.py
from __future__ import annotations

from .errors import ImportFailure, JenkinsError
from .git_facts import git
from .jenkins.client import JenkinsClient
from .jenkins.job_xml import FOLDER_CLASS, build_job_descriptor, create_folder_xml
from .model import JenkinsJob
from .ui.console import get_console


def ensure_folder(jenkins: JenkinsClient, org: str) -> None:
    """
    Make sure a folder named `org` exists on Jenkins.

    A job of some other type already using the name only gets a warning.
    """
    console = get_console()
    try:
        folder = jenkins.get_job(org)
    except JenkinsError as e:
        if not e.not_found:
            raise
        folder_xml = create_folder_xml(jenkins.job_url(org), org)
        try:
            jenkins.create_job_with_xml(folder_xml, org)
        except JenkinsError as create_err:
            raise ImportFailure(
                kind="orchestration",
                step="create folder",
                message=f"Failed to create the {org} folder in jenkins: {create_err}",
                details={"jenkins": jenkins.base_url},
            ) from create_err
        console.print_created("folder", jenkins.job_url(org))
        return

    if folder.class_name != FOLDER_CLASS:
        console.print_warning(f"the folder {org} is of class {folder.class_name}")


def _existing_job(jenkins: JenkinsClient, folder: str, name: str) -> JenkinsJob | None:
    try:
        return jenkins.get_job_by_path(folder, name)
    except JenkinsError as e:
        if e.not_found:
            return None
        raise


def register(jenkins: JenkinsClient, remote_url: str, credentials: str) -> JenkinsJob:
    """
    Create the multi-branch job for `remote_url` and trigger its first build.

    Returns:
        The created job

    Raises:
        ImportFailure: If the job already exists, or creating, finding or
            building it fails
    """
    console = get_console()
    if not remote_url:
        raise ImportFailure(kind="orchestration", step="register job", message="No Git repository URL found!")
    try:
        info = git.parse_git_url(remote_url)
    except ValueError as e:
        raise ImportFailure(
            kind="user_input",
            step="register job",
            message=f"Failed to parse git URL {remote_url} due to: {e}",
        ) from e

    ensure_folder(jenkins, info.organisation)

    existing = _existing_job(jenkins, info.organisation, info.name)
    if existing is not None:
        raise ImportFailure(
            kind="conflict",
            step="register job",
            message=f"Job already exists in Jenkins at {existing.url}",
            details={"job": f"{info.organisation}/{info.name}"},
            suggestion="Delete the existing job first if you want to import it again.",
        )

    descriptor = build_job_descriptor(info, credentials)
    try:
        jenkins.create_folder_job_with_xml(descriptor.xml, descriptor.folder, descriptor.name)
    except JenkinsError as e:
        raise ImportFailure(
            kind="orchestration",
            step="create job",
            message=(
                f"Failed to create MultiBranchProject job {descriptor.name} "
                f"in folder {descriptor.folder} due to: {e}"
            ),
            details={"jenkins": jenkins.base_url},
        ) from e

    try:
        job = jenkins.get_job_by_path(descriptor.folder, descriptor.name)
    except JenkinsError as e:
        raise ImportFailure(
            kind="orchestration",
            step="find job",
            message=(
                f"Failed to find the MultiBranchProject job {descriptor.name} "
                f"in folder {descriptor.folder} after creation due to: {e}"
            ),
            details={"jenkins": jenkins.base_url},
        ) from e
    console.print_created("project", job.url)

    try:
        jenkins.build(job, {})
    except JenkinsError as e:
        raise ImportFailure(
            kind="orchestration",
            step="trigger build",
            message=f"Failed to trigger job {job.url} due to {e}",
            details={"job": descriptor.full_name},
        ) from e
    return job
