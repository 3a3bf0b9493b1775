# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from ciimport.config import load_settings
from ciimport.errors import CIImportError, ImportFailure
from ciimport.importer import run_import
from ciimport.jenkins.client import JenkinsClient
from ciimport.model import DEFAULT_CREDENTIALS, ImportContext
from ciimport.provision import DraftGenerator
from ciimport.ui.console import Console, get_console, set_console

IMPORT_EXAMPLES = """
\b
Examples:
  # Import the current folder
  ciimport import

  # Import a different folder
  ciimport import /foo/bar

  # Import a git repository from a URL
  ciimport import --url https://github.com/jenkins-x/spring-boot-web-example.git
"""


def report_error(exc: CIImportError) -> None:
    console = get_console()
    if isinstance(exc, ImportFailure):
        console.print_error(
            f"Import failed ({exc.step})",
            exc.message,
            details=[f"{k}: {v}" for k, v in exc.details.items()] or None,
            suggestion=exc.suggestion,
        )
    else:
        console.print_error(
            "Import failed",
            str(exc),
            suggestion="Fix the problem above and re-run the import; completed steps are skipped.",
        )


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """ciimport: bring a project under git and onto Jenkins."""
    # Initialize console with debug flag
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command(name="import", epilog=IMPORT_EXAMPLES)
@click.argument("directory", required=False, type=click.Path(file_okay=False))
@click.option("--dir", "dir_option", default=None, type=click.Path(file_okay=False), help="Directory to import (defaults to the current directory)")
@click.option("--url", "-u", default=None, help="The git clone URL to clone into the current directory and then import")
@click.option("--org", "-o", default=None, help="The git provider organisation to import the project into (if it is not already in one)")
@click.option("--name", "-n", default=None, help="The git repository name to import the project into (if it is not already in one)")
@click.option("--credentials", "-c", default=DEFAULT_CREDENTIALS, show_default=True, help="The Jenkins credentials name used by the job")
@click.option("--batch-mode", "-b", is_flag=True, default=False, help="Never prompt; accept default answers")
@click.option("--jenkins-url", default=None, help="Jenkins URL (defaults to $JENKINS_URL)")
@click.option("--jenkins-user", default=None, help="Jenkins user (defaults to $JENKINS_USER)")
@click.option("--jenkins-token", default=None, help="Jenkins API token (defaults to $JENKINS_TOKEN)")
@click.pass_context
def import_(ctx, directory, dir_option, url, org, name, credentials, batch_mode, jenkins_url, jenkins_user, jenkins_token):
    """Imports a git repository or folder into Jenkins.

    If you specify no other options or arguments then the current directory
    is imported. You can specify the git URL to clone with --url.
    """
    console = get_console()
    settings = load_settings()

    target = Path(directory or dir_option or ".").expanduser().resolve()
    import_ctx = ImportContext(
        directory=target,
        repo_url=url,
        organisation=org,
        repository=name,
        credentials=credentials,
        batch_mode=batch_mode,
    )

    jenkins = JenkinsClient(
        jenkins_url or settings.jenkins_url,
        username=jenkins_user if jenkins_user is not None else settings.jenkins_user,
        api_token=jenkins_token if jenkins_token is not None else settings.jenkins_token,
    )
    try:
        run_import(
            import_ctx,
            jenkins=jenkins,
            auth_file=settings.auth_config_file,
            generator=DraftGenerator(settings.draft_bin),
        )
    except (KeyboardInterrupt, click.Abort):
        console.print_info("\nInterrupted by user")
        sys.exit(130)
    except CIImportError as e:
        report_error(e)
        if ctx.obj.get("debug", False):
            import traceback
            traceback.print_exc()
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


if __name__ == "__main__":
    cli()
