# http_client.py
from __future__ import annotations

import base64
import json
import urllib.error
import urllib.request
from typing import Any, Optional, Type
from urllib.parse import urljoin

from .errors import APIError


class HTTPClient:
    """JSON-over-HTTP client shared by the git providers and Jenkins."""

    error_class: Type[APIError] = APIError

    def __init__(self, base_url: str):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL of the API (e.g., "https://api.github.com")
        """
        # Ensure base_url doesn't end with /
        self.base_url = base_url.rstrip("/")

    def _auth_headers(self) -> dict:
        """Headers added to every request; subclasses supply credentials here."""
        return {}

    def _url(self, path: str) -> str:
        if path.startswith(("http://", "https://")):
            return path
        return urljoin(self.base_url + "/", path.lstrip("/"))

    def _request_raw(
        self,
        method: str,
        path: str,
        data: Optional[bytes] = None,
        headers: Optional[dict] = None,
    ) -> str:
        """
        Make an HTTP request and return the response body as text.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: API path (e.g., "/user/repos") or an absolute URL
            data: Optional request body
            headers: Optional additional headers

        Returns:
            Decoded response body ("" for empty responses)

        Raises:
            APIError (or the subclass's error_class): If the request fails
        """
        url = self._url(path)

        req_headers = dict(self._auth_headers())
        if headers:
            req_headers.update(headers)

        req = urllib.request.Request(url, data=data, headers=req_headers, method=method)

        try:
            with urllib.request.urlopen(req) as response:
                return response.read().decode("utf-8")
        except urllib.error.HTTPError as e:
            error_body = e.read().decode("utf-8", errors="replace") if e.fp else ""
            raise self.error_class(
                f"{method} {url} failed: {e.code} {e.reason}. {error_body}".strip(),
                url=url,
                status=e.code,
            )
        except urllib.error.URLError as e:
            raise self.error_class(f"Network error talking to {url}: {e.reason}", url=url)

    def _request(
        self,
        method: str,
        path: str,
        data: Optional[Any] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        """
        Make a JSON request and return the parsed response.

        Returns:
            Parsed JSON response ({} for an empty body)
        """
        req_headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if headers:
            req_headers.update(headers)

        req_data = None
        if data is not None:
            req_data = json.dumps(data).encode("utf-8")

        body = self._request_raw(method, path, data=req_data, headers=req_headers)
        if not body:
            return {}
        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise self.error_class(f"Invalid JSON response from {self._url(path)}: {e}", url=self._url(path))


def basic_auth_header(username: str, token: str) -> dict:
    raw = f"{username}:{token}".encode("utf-8")
    return {"Authorization": "Basic " + base64.b64encode(raw).decode("ascii")}
