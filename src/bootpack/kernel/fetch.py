"""Kernel download over HTTP."""

from __future__ import annotations

import logging
import os
import ssl
from pathlib import Path

import httpx
import truststore
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from bootpack.exceptions import KernelFetchError
from bootpack.kernel.cache import kernel_cache_paths
from bootpack.runtime.settings import KERNEL_URL_ENV_VAR, BootpackSettings, load_settings

logger = logging.getLogger(__name__)


def kernel_url(version: str, settings: BootpackSettings) -> str:
    if not settings.kernel_url:
        raise KernelFetchError(
            "no kernel download URL configured; set kernel.url in config.yaml "
            f"or {KERNEL_URL_ENV_VAR}"
        )
    template = settings.kernel_url
    try:
        return template.format(version=version)
    except (AttributeError, IndexError, KeyError, ValueError) as e:
        raise KernelFetchError(
            f"invalid kernel URL template {template!r}: only {{version}} may be substituted"
        ) from e


def _discard(path: Path) -> None:
    if path.exists():
        path.unlink()


def fetch_kernel(
    version: str,
    local: bool = False,
    *,
    client: httpx.Client | None = None,
    settings: BootpackSettings | None = None,
    show_progress: bool = False,
    console: Console | None = None,
) -> Path:
    """Download kernel *version* into the cache and return its path.

    The body is streamed into ``kernel.<version>.download`` and renamed to
    ``kernel.<version>`` only once complete, so the versioned file never
    holds a partial download.

    Raises:
        KernelFetchError: No URL is configured, the server answered with a
            non-200 status, or the transfer failed
    """
    if settings is None:
        settings = load_settings()
    paths = kernel_cache_paths(version, local)
    url = kernel_url(version, settings)
    paths.root.mkdir(parents=True, exist_ok=True)

    owns_client = client is None
    if client is None:
        client = httpx.Client(verify=truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT))

    logger.info(f"Downloading kernel {version} from {url}")
    try:
        with client.stream(
            "GET",
            url,
            timeout=settings.download_timeout,
            follow_redirects=True,
        ) as response:
            if response.status_code != 200:
                raise KernelFetchError(
                    f"kernel download failed with {response.status_code} for {url}"
                )
            total_size = int(response.headers.get("content-length", 0))
            with open(paths.download, "wb") as f:
                if show_progress and total_size:
                    with Progress(
                        SpinnerColumn(),
                        TextColumn("[progress.description]{task.description}"),
                        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
                        console=console,
                    ) as progress:
                        task = progress.add_task(f"Downloading kernel {version}...", total=total_size)
                        downloaded = 0
                        for chunk in response.iter_bytes(chunk_size=8192):
                            f.write(chunk)
                            downloaded += len(chunk)
                            progress.update(task, completed=downloaded)
                else:
                    for chunk in response.iter_bytes(chunk_size=8192):
                        f.write(chunk)
    except KernelFetchError:
        _discard(paths.download)
        raise
    except (httpx.HTTPError, OSError) as e:
        _discard(paths.download)
        raise KernelFetchError(f"kernel download failed for {url}: {e}") from e
    finally:
        if owns_client:
            client.close()

    os.replace(paths.download, paths.result)
    logger.info(f"Saved kernel {version} to {paths.result}")
    return paths.result
