from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import pytest

from ciimport.errors import JenkinsError
from ciimport.jenkins.job_xml import FOLDER_CLASS, MULTIBRANCH_CLASS
from ciimport.model import JenkinsJob
from ciimport.ui.console import Console, set_console


@pytest.fixture(autouse=True)
def git_env(tmp_path_factory, monkeypatch):
    """Run git with a fixed identity and without the user's own config."""
    home = tmp_path_factory.mktemp("home")
    global_config = home / ".gitconfig"
    global_config.write_text("[init]\n\tdefaultBranch = master\n", encoding="utf-8")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    set_console(Console())


def run_git(cwd: Path, *args: str) -> str:
    return subprocess.check_output(["git", *args], cwd=str(cwd), text=True).strip()


def commit_count(repo: Path) -> int:
    try:
        return int(run_git(repo, "rev-list", "--count", "HEAD"))
    except subprocess.CalledProcessError:
        # unborn branch
        return 0


def commit_messages(repo: Path) -> List[str]:
    return run_git(repo, "log", "--format=%s").splitlines()


@pytest.fixture
def make_repo(tmp_path):
    """Create a git repository with one commit and return its path."""

    def _make(name: str = "project", files: Optional[Dict[str, str]] = None) -> Path:
        repo = tmp_path / name
        repo.mkdir(parents=True)
        run_git(repo, "init")
        for rel, content in (files or {"README.md": "# project\n"}).items():
            (repo / rel).write_text(content, encoding="utf-8")
        run_git(repo, "add", ".")
        run_git(repo, "commit", "-m", "seed")
        return repo

    return _make


@pytest.fixture
def bare_remote(tmp_path, make_repo):
    """A bare repository at <tmp>/remotes/acme/widget.git with one commit."""
    seed = make_repo("seed")
    bare = tmp_path / "remotes" / "acme" / "widget.git"
    bare.parent.mkdir(parents=True)
    subprocess.check_call(["git", "clone", "--bare", str(seed), str(bare)], stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    return bare


class FakeGenerator:
    """Stands in for `draft create`: writes a draft.toml and a Dockerfile."""

    def __init__(self):
        self.calls: List[Tuple[Path, Optional[str]]] = []

    def generate(self, directory: Path, profile: Optional[str]) -> None:
        self.calls.append((directory, profile))
        (directory / "draft.toml").write_text('[environments]\n', encoding="utf-8")
        (directory / "Dockerfile").write_text("FROM scratch\n", encoding="utf-8")


@pytest.fixture
def generator():
    return FakeGenerator()


class FakeJenkins:
    """In-memory Jenkins with the same surface as JenkinsClient."""

    def __init__(self, base_url: str = "http://jenkins.example.com"):
        self.base_url = base_url
        self.jobs: Dict[Tuple[str, ...], JenkinsJob] = {}
        self.xml: Dict[Tuple[str, ...], str] = {}
        self.builds: List[Tuple[str, dict]] = []
        # simulate a server that accepts a job but cannot show it yet
        self.hide_created_jobs = False

    @staticmethod
    def job_url_path(*names: str) -> str:
        return "/".join(f"job/{n}" for n in names)

    def job_url(self, *names: str) -> str:
        return f"{self.base_url}/{self.job_url_path(*names)}/"

    def _lookup(self, *names: str) -> JenkinsJob:
        job = self.jobs.get(names)
        if job is None:
            raise JenkinsError("not found", url=self.job_url(*names), status=404)
        return job

    def get_job(self, name: str) -> JenkinsJob:
        return self._lookup(name)

    def get_job_by_path(self, folder: str, job: str) -> JenkinsJob:
        return self._lookup(folder, job)

    def add_job(self, *names: str, class_name: str = MULTIBRANCH_CLASS) -> JenkinsJob:
        job = JenkinsJob(name=names[-1], url=self.job_url(*names), class_name=class_name)
        self.jobs[names] = job
        return job

    def create_job_with_xml(self, xml: str, name: str) -> None:
        self.xml[(name,)] = xml
        self.add_job(name, class_name=FOLDER_CLASS)

    def create_folder_job_with_xml(self, xml: str, folder: str, job: str) -> None:
        self.xml[(folder, job)] = xml
        if not self.hide_created_jobs:
            self.add_job(folder, job)

    def build(self, job: JenkinsJob, params: Optional[dict] = None) -> None:
        self.builds.append((job.url, dict(params or {})))


@pytest.fixture
def jenkins():
    return FakeJenkins()
