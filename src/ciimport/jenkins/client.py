# jenkins/client.py
from __future__ import annotations

from typing import Dict, Optional
from urllib.parse import quote, urlencode

from ciimport.errors import JenkinsError
from ciimport.http_client import HTTPClient, basic_auth_header
from ciimport.model import JenkinsJob


class JenkinsClient(HTTPClient):
    """HTTP client for the parts of the Jenkins REST API the import needs."""

    error_class = JenkinsError

    def __init__(self, base_url: str, username: str = "", api_token: str = ""):
        """
        Initialize Jenkins client.

        Args:
            base_url: Jenkins root URL (e.g., "http://jenkins.example.com/")
            username: Optional user for basic auth
            api_token: API token (or password) for `username`
        """
        super().__init__(base_url)
        self.username = username
        self.api_token = api_token
        self._crumb: Optional[Dict[str, str]] = None

    def _auth_headers(self) -> dict:
        if self.username:
            return basic_auth_header(self.username, self.api_token)
        return {}

    @staticmethod
    def job_url_path(*names: str) -> str:
        """job_url_path("acme", "widget") -> "job/acme/job/widget" """
        return "/".join(f"job/{quote(n, safe='')}" for n in names)

    def job_url(self, *names: str) -> str:
        return f"{self.base_url}/{self.job_url_path(*names)}/"

    # ------------------------------------------------------------------
    # CSRF protection
    # ------------------------------------------------------------------

    def _crumb_headers(self) -> Dict[str, str]:
        """
        Return the CSRF crumb header, fetching it once per client.

        Servers without a crumb issuer answer 404; they get no header.
        """
        if self._crumb is None:
            try:
                data = self._request("GET", "crumbIssuer/api/json")
            except JenkinsError as e:
                if not e.not_found:
                    raise
                data = {}
            field = data.get("crumbRequestField")
            crumb = data.get("crumb")
            self._crumb = {field: crumb} if field and crumb else {}
        return self._crumb

    def _post(self, path: str, body: Optional[bytes] = None, content_type: Optional[str] = None) -> str:
        headers = dict(self._crumb_headers())
        if content_type:
            headers["Content-Type"] = content_type
        return self._request_raw("POST", path, data=body if body is not None else b"", headers=headers)

    # ------------------------------------------------------------------
    # Jobs
    # ------------------------------------------------------------------

    def get_job(self, name: str) -> JenkinsJob:
        """
        Look up a top level job or folder.

        Raises:
            JenkinsError: `not_found` is True when no such job exists
        """
        return JenkinsJob.from_dict(self._request("GET", f"{self.job_url_path(name)}/api/json"))

    def get_job_by_path(self, folder: str, job: str) -> JenkinsJob:
        return JenkinsJob.from_dict(self._request("GET", f"{self.job_url_path(folder, job)}/api/json"))

    def create_job_with_xml(self, xml: str, name: str) -> None:
        self._post(
            f"createItem?{urlencode({'name': name})}",
            xml.encode("utf-8"),
            "application/xml",
        )

    def create_folder_job_with_xml(self, xml: str, folder: str, job: str) -> None:
        self._post(
            f"{self.job_url_path(folder)}/createItem?{urlencode({'name': job})}",
            xml.encode("utf-8"),
            "application/xml",
        )

    def build(self, job: JenkinsJob, params: Optional[Dict[str, str]] = None) -> None:
        """Queue a build of `job`; parameters switch to buildWithParameters."""
        url = job.url if job.url.endswith("/") else job.url + "/"
        if params:
            self._post(f"{url}buildWithParameters?{urlencode(params)}")
        else:
            self._post(f"{url}build")
