"""
Shared fixtures: settings rooted in tmp_path and an in-memory GitHub.
"""

import io
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from PIL import Image

from logseq_marketplace.core.settings import FetchSettings
from logseq_marketplace.services.fetcher.client import GitHubClient

API = "https://api.github.com/repos/logseq/marketplace"
RAW = "https://raw.githubusercontent.com/logseq/marketplace/master/packages"


class FakeGitHub:
    """
    Route table for ``httpx.MockTransport``.

    Routes are keyed by URL without query string plus the ``path`` query
    parameter, which is how the commits endpoint is filtered. Unknown routes
    answer 404.
    """

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, Optional[str]], httpx.Response] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        url: str,
        status: int = 200,
        json_body: Any = None,
        content: Optional[bytes] = None,
        path_param: Optional[str] = None,
    ) -> None:
        if content is None:
            content = json.dumps(json_body).encode("utf-8") if json_body is not None else b""
        self.routes[(url, path_param)] = httpx.Response(status, content=content)

    def add_package(
        self,
        name: str,
        manifest: Any = None,
        commits: Any = None,
        icon: Optional[Tuple[str, bytes]] = None,
    ) -> None:
        if manifest is not None:
            self.add(f"{RAW}/{name}/manifest.json", json_body=manifest)
        if commits is not None:
            self.add(f"{API}/commits", json_body=commits, path_param=f"packages/{name}")
        if icon is not None:
            filename, data = icon
            self.add(f"{RAW}/{name}/{filename}", content=data)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        base = f"{request.url.scheme}://{request.url.host}{request.url.path}"
        key = (base, request.url.params.get("path"))
        response = self.routes.get(key)
        if response is None:
            return httpx.Response(404, content=b'{"message": "Not Found"}')
        return httpx.Response(response.status_code, content=response.content)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, settings: FetchSettings) -> GitHubClient:
        return GitHubClient(settings, transport=self.transport())


def listing(name: str, type_: str = "dir") -> Dict[str, str]:
    return {
        "name": name,
        "type": type_,
        "path": f"packages/{name}",
        "html_url": f"https://github.com/logseq/marketplace/tree/master/packages/{name}",
        "git_url": f"https://api.github.com/repos/logseq/marketplace/git/trees/{name}",
    }


def commit(date: str) -> Dict[str, Any]:
    return {"sha": date, "commit": {"committer": {"name": "someone", "date": date}}}


def image_bytes(fmt: str = "PNG", size: Tuple[int, int] = (128, 96), mode: str = "RGB") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, size, color=0).save(buffer, format=fmt)
    return buffer.getvalue()


SVG_ICON = b'<svg xmlns="http://www.w3.org/2000/svg" width="64" height="64"><rect width="64" height="64"/></svg>'

BLOCK_PIN_MANIFEST = {
    "title": "Block pin",
    "description": 'Add "Paste as pin" shortcut for pdf and editor blocks.',
    "author": "Joodo <wyattliang@gmail.com>",
    "repo": "joodo/logseq-plugin-pin",
    "icon": "icon.png",
    "effect": True,
}

BLOCK_PIN_COMMITS = [commit("2024-08-29T01:37:02Z"), commit("2024-08-27T16:41:22Z")]


@pytest.fixture
def settings(tmp_path: Path) -> FetchSettings:
    output_dir = tmp_path / "src" / "data"
    output_dir.mkdir(parents=True)
    return FetchSettings(
        output_dir=output_dir,
        icons_dir=tmp_path / "public" / "icons",
    )


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()
