"""
Runtime configuration for the marketplace fetcher.

Settings are read from the environment exactly once, in ``load_settings()``,
and the resulting object is handed to every component explicitly.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Mapping, Optional

from pydantic import BaseModel, Field


GITHUB_TOKEN_ENV_VAR = "GITHUB_TOKEN"
OUTPUT_DIR_ENV_VAR = "LOGSEQ_MARKETPLACE_OUTPUT_DIR"
OUTPUT_FILE_ENV_VAR = "LOGSEQ_MARKETPLACE_OUTPUT_FILE"
ICONS_DIR_ENV_VAR = "LOGSEQ_MARKETPLACE_ICONS_DIR"

_DEFAULT_OUTPUT_DIR = Path("src/data")
_DEFAULT_OUTPUT_FILE = "logseq-marketplace-plugins.json"
_DEFAULT_ICONS_DIR = Path("public/icons")


class FetchSettings(BaseModel):
    """
    Where to read the marketplace from and where to write the results.
    """

    github_token: Optional[str] = Field(
        default=None,
        description="Optional GitHub token. Anonymous access is used when unset.",
    )
    output_dir: Path = Field(
        default=_DEFAULT_OUTPUT_DIR,
        description="Existing directory that receives the output JSON file.",
    )
    output_file: str = Field(
        default=_DEFAULT_OUTPUT_FILE,
        description="File name of the output JSON document inside output_dir.",
    )
    icons_dir: Path = Field(
        default=_DEFAULT_ICONS_DIR,
        description="Directory receiving the normalized icon files (created on demand).",
    )
    icons_url_prefix: str = Field(
        default="/icons",
        description="Root-relative URL under which a static server exposes icons_dir.",
    )

    api_base: str = "https://api.github.com"
    raw_base: str = "https://raw.githubusercontent.com"
    org: str = "logseq"
    repo: str = "marketplace"
    branch: str = "master"
    packages_root: str = "packages"

    icon_size: int = 32
    commits_per_page: int = 100
    progress_every: int = 10

    @property
    def output_path(self) -> Path:
        return self.output_dir / self.output_file

    @property
    def catalog_url(self) -> str:
        return f"{self.api_base}/repos/{self.org}/{self.repo}/contents/{self.packages_root}"

    @property
    def commits_url(self) -> str:
        return f"{self.api_base}/repos/{self.org}/{self.repo}/commits"

    @property
    def raw_packages_url(self) -> str:
        return f"{self.raw_base}/{self.org}/{self.repo}/{self.branch}/{self.packages_root}"

    def request_headers(self) -> Dict[str, str]:
        """
        Headers attached to every request against GitHub.
        """
        headers = {"Accept": "application/vnd.github.v3+json"}
        if self.github_token:
            headers["Authorization"] = f"token {self.github_token}"
        return headers


def load_settings(environ: Optional[Mapping[str, str]] = None, **overrides) -> FetchSettings:
    """
    Build settings from environment variables.

    Priority for each value:
    1. Explicit keyword override (ignored when None)
    2. Environment variable
    3. Built-in default
    """
    env = os.environ if environ is None else environ

    values: Dict[str, object] = {}
    token = env.get(GITHUB_TOKEN_ENV_VAR)
    if token:
        values["github_token"] = token
    if env.get(OUTPUT_DIR_ENV_VAR):
        values["output_dir"] = Path(env[OUTPUT_DIR_ENV_VAR]).expanduser()
    if env.get(OUTPUT_FILE_ENV_VAR):
        values["output_file"] = env[OUTPUT_FILE_ENV_VAR]
    if env.get(ICONS_DIR_ENV_VAR):
        values["icons_dir"] = Path(env[ICONS_DIR_ENV_VAR]).expanduser()

    values.update({k: v for k, v in overrides.items() if v is not None})
    return FetchSettings(**values)
