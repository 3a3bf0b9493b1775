from __future__ import annotations

import pytest

from ciimport.auth import AuthServer, UserAuth
from ciimport.errors import ImportFailure, ProviderError
from ciimport.providers.gitea import GiteaProvider
from ciimport.providers.github import GITHUB_API, GitHubProvider
from ciimport.providers.registry import create_provider, pick_organisation
from ciimport.prompter import ScriptedPrompter

USER = UserAuth(username="bob", api_token="tok")


class Recorder:
    """Replaces GitProvider._request with canned answers."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []

    def __call__(self, method, path, data=None, headers=None):
        self.calls.append((method, path, data))
        answer = self.responses.get((method, path))
        if isinstance(answer, Exception):
            raise answer
        if answer is None:
            raise ProviderError("not found", url=path, status=404)
        return answer


def github(monkeypatch, responses):
    provider = GitHubProvider(AuthServer(url="https://github.com"), USER)
    recorder = Recorder(responses)
    monkeypatch.setattr(provider, "_request", recorder)
    return provider, recorder


def test_create_provider_dispatches_on_kind():
    assert isinstance(create_provider(AuthServer(url="https://github.com"), USER), GitHubProvider)
    assert isinstance(
        create_provider(AuthServer(url="https://gitea.example.com", kind="gitea"), USER),
        GiteaProvider,
    )


def test_create_provider_unknown_kind():
    with pytest.raises(ImportFailure):
        create_provider(AuthServer(url="https://x.example.com", kind="svn"), USER)


def test_api_urls():
    assert GitHubProvider.api_url("https://github.com") == GITHUB_API
    assert GitHubProvider.api_url("https://github.acme.com/") == "https://github.acme.com/api/v3"
    assert GiteaProvider.api_url("https://gitea.example.com") == "https://gitea.example.com/api/v1"


def test_token_urls():
    assert GitHubProvider.token_url("https://github.com").startswith("https://github.com/settings/tokens/new")
    assert GiteaProvider.token_url("https://gitea.example.com/") == "https://gitea.example.com/user/settings/applications"


def test_auth_header():
    provider = GitHubProvider(AuthServer(url="https://github.com"), USER)
    assert provider._auth_headers()["Authorization"] == "token tok"


@pytest.mark.parametrize("name", ["", "   ", "bad name", "..", "semi;colon"])
def test_validate_rejects_bad_names(monkeypatch, name):
    provider, recorder = github(monkeypatch, {})
    with pytest.raises(ValueError):
        provider.validate_repository_name("acme", name)
    assert recorder.calls == []


def test_validate_rejects_existing_repository(monkeypatch):
    provider, _ = github(monkeypatch, {("GET", "/repos/acme/widget"): {"name": "widget"}})
    with pytest.raises(ValueError) as exc:
        provider.validate_repository_name("acme", "widget")
    assert "already exists" in str(exc.value)


def test_validate_accepts_new_name(monkeypatch):
    provider, recorder = github(monkeypatch, {})
    provider.validate_repository_name("acme", "widget")
    assert recorder.calls == [("GET", "/repos/acme/widget", None)]


def test_validate_propagates_server_errors(monkeypatch):
    provider, _ = github(monkeypatch, {("GET", "/repos/acme/widget"): ProviderError("boom", status=500)})
    with pytest.raises(ProviderError):
        provider.validate_repository_name("acme", "widget")


def test_create_repository_in_org_and_user_namespace(monkeypatch):
    created = {"name": "widget", "clone_url": "https://github.com/acme/widget.git", "html_url": "https://github.com/acme/widget"}
    provider, recorder = github(monkeypatch, {
        ("POST", "/orgs/acme/repos"): created,
        ("POST", "/user/repos"): created,
    })

    repo = provider.create_repository("acme", "widget")
    provider.create_repository("", "widget")

    assert repo.clone_url == "https://github.com/acme/widget.git"
    assert recorder.calls == [
        ("POST", "/orgs/acme/repos", {"name": "widget", "private": False}),
        ("POST", "/user/repos", {"name": "widget", "private": False}),
    ]


def test_gitea_organisations(monkeypatch):
    provider = GiteaProvider(AuthServer(url="https://gitea.example.com", kind="gitea"), USER)
    monkeypatch.setattr(provider, "_request", Recorder({("GET", "/user/orgs"): [{"username": "acme"}, {"name": "beta"}]}))
    assert provider.list_organisations() == ["acme", "beta"]


def test_pick_organisation(monkeypatch):
    provider, _ = github(monkeypatch, {("GET", "/user/orgs"): [{"login": "zeta"}, {"login": "acme"}]})

    prompter = ScriptedPrompter(["acme"])
    assert pick_organisation(provider, "bob", prompter) == "acme"
    assert prompter.asked == [("select", "Which organisation do you want to use?")]

    assert pick_organisation(provider, "bob", ScriptedPrompter(["bob"])) == ""


def test_pick_organisation_without_orgs_does_not_prompt(monkeypatch):
    provider, _ = github(monkeypatch, {("GET", "/user/orgs"): []})
    prompter = ScriptedPrompter()
    assert pick_organisation(provider, "bob", prompter) == ""
    assert prompter.asked == []
