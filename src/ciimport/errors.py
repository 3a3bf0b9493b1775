# errors.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


class CIImportError(Exception):
    """Base class for every failure the import can surface to the user."""


@dataclass(eq=False)
class ImportFailure(CIImportError):
    """
    Structured import error with enough context for:
      - clean CLI output
      - telling the user which step to retry by hand
    """
    kind: str  # user_input | conflict | orchestration
    step: str
    message: str
    details: dict = field(default_factory=dict)
    suggestion: Optional[str] = None

    def __str__(self) -> str:
        lines = [self.message, f"step={self.step}"]
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


class GitError(CIImportError):
    """Raised when a git command exits non-zero."""

    def __init__(self, args: list[str], cwd: Optional[str], stderr: str = ""):
        self.git_args = list(args)
        self.cwd = cwd
        self.stderr = stderr.strip()
        where = f" in {cwd}" if cwd else ""
        msg = f"git {' '.join(self.git_args)} failed{where}"
        if self.stderr:
            msg += f": {self.stderr}"
        super().__init__(msg)


class ScaffoldError(CIImportError):
    """Raised when the scaffold generator fails."""
    pass


class APIError(CIImportError):
    """Raised when an HTTP API request fails."""

    def __init__(self, message: str, url: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status

    @property
    def not_found(self) -> bool:
        return self.status == 404


class ProviderError(APIError):
    """Raised when the git provider API rejects a request."""
    pass


class JenkinsError(APIError):
    """Raised when the Jenkins API rejects a request."""
    pass


class PromptError(CIImportError):
    """Raised when a question cannot be answered (batch mode, bad input)."""
    pass
