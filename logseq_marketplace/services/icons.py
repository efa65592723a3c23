"""
Download plugin icons and store a normalized local copy.

SVG icons are stored byte for byte. Every other format is decoded with
Pillow, resized to a fixed square and stored as PNG, so the local file is
always ``<package>.svg`` or ``<package>.png``.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path, PurePosixPath
from typing import Optional, Tuple

import aiofiles
from PIL import Image

from logseq_marketplace.domain.models import Manifest
from logseq_marketplace.domain.results import Absent, Failed, Ok, StepResult, value_or_none
from logseq_marketplace.services.fetcher.client import GitHubClient

logger = logging.getLogger(__name__)

SVG_SUFFIX = ".svg"

# Modes PNG can store directly; anything else (CMYK, YCbCr, ...) is converted.
_PNG_MODES = {"1", "L", "LA", "I", "P", "RGB", "RGBA"}


def get_remote_icon_url(client: GitHubClient, package_name: str, icon: str) -> str:
    return f"{client.settings.raw_packages_url}/{package_name}/{icon}"


def is_svg(icon: str) -> bool:
    return PurePosixPath(icon).suffix.lower() == SVG_SUFFIX


def resize_to_png(data: bytes, size: int) -> bytes:
    """
    Decode raster image bytes and return a ``size`` x ``size`` PNG.
    """
    with Image.open(io.BytesIO(data)) as image:
        image.load()
        if image.mode not in _PNG_MODES:
            image = image.convert("RGBA")
        resized = image.resize((size, size))

    buffer = io.BytesIO()
    resized.save(buffer, format="PNG")
    return buffer.getvalue()


def _local_target(icons_dir: Path, package_name: str, icon: str) -> Tuple[Path, str]:
    extension = "svg" if is_svg(icon) else "png"
    filename = f"{package_name}.{extension}"
    return icons_dir / filename, filename


async def _download(client: GitHubClient, url: str) -> bytes:
    response = await client.get(url)
    response.raise_for_status()
    return response.content


async def materialize_icon_result(
    client: GitHubClient,
    manifest: Manifest,
    package_name: str,
) -> StepResult[str]:
    """
    Download the icon declared in *manifest* and write it to the icons directory.

    On success the root-relative URL of the stored file (``/icons/<name>.png``
    or ``/icons/<name>.svg``) is returned and recorded on
    ``manifest.icon_url``. Without a declared icon, or on any failure, the
    manifest's icon URL is cleared.
    """
    settings = client.settings
    if not manifest.icon:
        manifest.icon_url = ""
        return Absent("manifest declares no icon")
    if not isinstance(manifest.icon, str):
        logger.warning(f"Ignoring non-string icon for {package_name}: {manifest.icon!r}")
        manifest.icon_url = ""
        return Failed(TypeError(f"icon must be a file name, got {type(manifest.icon).__name__}"))

    remote_url = get_remote_icon_url(client, package_name, manifest.icon)
    target, filename = _local_target(settings.icons_dir, package_name, manifest.icon)

    try:
        settings.icons_dir.mkdir(parents=True, exist_ok=True)
        data = await _download(client, remote_url)
        if not is_svg(manifest.icon):
            data = resize_to_png(data, settings.icon_size)

        async with aiofiles.open(target, "wb") as f:
            await f.write(data)
    except Exception as e:
        logger.warning(f"Failed to store icon for {package_name} from {remote_url}: {e}")
        manifest.icon_url = ""
        return Failed(e)

    local_url = f"{settings.icons_url_prefix.rstrip('/')}/{filename}"
    logger.debug(f"Stored icon for {package_name} at {target}")
    manifest.icon_url = local_url
    return Ok(local_url)


async def materialize_icon(
    client: GitHubClient,
    manifest: Manifest,
    package_name: str,
) -> Optional[str]:
    return value_or_none(await materialize_icon_result(client, manifest, package_name))
