# importer.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from .auth import AuthConfigService
from .discovery import discover_git, discover_remote_url, remote_name_for_url
from .errors import ImportFailure
from .git_facts import git
from .jenkins.client import JenkinsClient
from .model import ImportContext, JenkinsJob
from .prompter import BatchPrompter, ClickPrompter, Prompter
from .provision import DraftGenerator, provision
from .registration import register
from .remote import clone_repository, create_new_remote_repository
from .ui.console import get_console


class Importer:
    """
    Runs an import: git discovery, scaffolding, remote repository, Jenkins job.

    Phases always run in the same order and never roll back. Anything already
    done (commits, pushes, repositories, jobs) stays in place when a later
    phase fails; re-running the import skips work that already exists.
    """

    def __init__(
        self,
        jenkins: JenkinsClient,
        auth_service: AuthConfigService,
        prompter: Prompter,
        generator: DraftGenerator,
    ):
        self.jenkins = jenkins
        self.auth_service = auth_service
        self.prompter = prompter
        self.generator = generator

    def run(self, ctx: ImportContext) -> JenkinsJob:
        console = get_console()
        console.print_import_started(
            directory=str(ctx.directory),
            repo_url=ctx.repo_url,
            jenkins_url=self.jenkins.base_url,
        )

        if ctx.repo_url:
            console.print_step("clone repository")
            ctx.directory = clone_repository(ctx.repo_url, ctx.directory)
        else:
            console.print_step("discover git")
            ctx.directory, ctx.git_config = discover_git(ctx.directory, self.prompter)

            console.print_step("discover remote URL")
            ctx.repo_url = discover_remote_url(ctx.git_config, self.prompter)
            if ctx.repo_url:
                console.print_info(f"  remote: {ctx.repo_url}")

        console.print_step("provision scaffold and pipeline")
        provision(ctx.directory, self.generator)

        if not ctx.repo_url:
            console.print_step("create remote repository")
            ctx.repo_url = create_new_remote_repository(ctx, self.auth_service, self.prompter)
        else:
            console.print_step("push")
            git.push(ctx.directory, remote_name_for_url(ctx.git_config, ctx.repo_url))

        if not ctx.repo_url:
            raise ImportFailure(kind="orchestration", step="register job", message="No Git repository URL found!")

        console.print_step("register Jenkins job")
        job = register(self.jenkins, ctx.repo_url, ctx.credentials)
        console.print_import_complete(job.url)
        return job


def run_import(
    ctx: ImportContext,
    jenkins: JenkinsClient,
    auth_file: Path,
    generator: DraftGenerator,
    prompter: Optional[Prompter] = None,
) -> JenkinsJob:
    """Wire the collaborators for one import and run it."""
    if prompter is None:
        prompter = BatchPrompter() if ctx.batch_mode else ClickPrompter()
    auth_service = AuthConfigService(auth_file, prompter)
    return Importer(jenkins, auth_service, prompter, generator).run(ctx)
