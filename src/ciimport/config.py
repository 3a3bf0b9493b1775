# config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class Settings:
    jenkins_url: str = "http://localhost:8080"
    jenkins_user: str = ""
    jenkins_token: str = ""
    home: Path = Path("~/.ciimport").expanduser()
    draft_bin: str = "draft"

    @property
    def auth_config_file(self) -> Path:
        return self.home / "gitAuth.json"


def load_settings() -> Settings:
    """Read settings from the environment, falling back to the defaults above."""
    defaults = Settings()
    return Settings(
        jenkins_url=os.environ.get("JENKINS_URL", defaults.jenkins_url),
        jenkins_user=os.environ.get("JENKINS_USER", defaults.jenkins_user),
        jenkins_token=os.environ.get("JENKINS_TOKEN", defaults.jenkins_token),
        home=Path(os.environ.get("CIIMPORT_HOME", str(defaults.home))).expanduser(),
        draft_bin=os.environ.get("CIIMPORT_DRAFT_BIN", defaults.draft_bin),
    )
