"""Reading component manifests from files, URLs and streams.

A manifest source is a local path, an ``http(s)`` URL or ``-`` for standard
input. Every reader returns the decoded JSON document; shape checks are left
to :func:`prefroom.codegen.load_manifest`.
"""

import json
import sys
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

STDIN_SOURCE = "-"
DEFAULT_TIMEOUT = 30


class ManifestSourceError(Exception):
    """Raised when a manifest source cannot be read or decoded."""

    def __init__(self, source: str, message: str):
        self.source = source
        super().__init__(f"{source}: {message}")


def is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def read_manifest_file(path: str | Path) -> Any:
    """Decode the manifest stored at ``path``.

    Raises:
        ManifestSourceError: If the file is missing, unreadable or not JSON.
    """
    path = Path(path)
    logger.debug("Reading manifest file %s", path)

    if not path.is_file():
        raise ManifestSourceError(str(path), "no such manifest file")

    if path.suffix.lower() != ".json":
        logger.warning("Manifest %s does not have a .json extension", path)

    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestSourceError(str(path), f"invalid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestSourceError(str(path), f"cannot read file: {e}") from e


def fetch_manifest(url: str, timeout: int = DEFAULT_TIMEOUT) -> Any:
    """Download and decode a manifest published at ``url``.

    Raises:
        ManifestSourceError: If the URL is malformed, the request fails or the
            body is not JSON.
    """
    if not is_url(url):
        raise ManifestSourceError(url, "not an http(s) URL")

    logger.debug("Fetching manifest from %s", url)
    try:
        response = requests.get(
            url, timeout=timeout, headers={"Accept": "application/json"}
        )
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise ManifestSourceError(url, f"timed out after {timeout}s") from e
    except requests.exceptions.HTTPError as e:
        raise ManifestSourceError(url, f"HTTP {e.response.status_code}") from e
    except requests.exceptions.RequestException as e:
        raise ManifestSourceError(url, f"request failed: {e}") from e

    content_type = response.headers.get("Content-Type", "")
    if content_type and "json" not in content_type:
        logger.warning("Manifest %s served as %s", url, content_type)

    try:
        return response.json()
    except ValueError as e:
        raise ManifestSourceError(url, f"invalid JSON: {e}") from e


def read_manifest_stream(stream: TextIO, name: str = "<stdin>") -> Any:
    """Decode a manifest from an open text stream."""
    try:
        return json.load(stream)
    except json.JSONDecodeError as e:
        raise ManifestSourceError(name, f"invalid JSON: {e}") from e


def load_manifest_source(source: str, timeout: int = DEFAULT_TIMEOUT) -> Any:
    """Decode the manifest named by ``source``.

    ``-`` reads standard input, an ``http(s)`` URL is fetched and anything
    else is treated as a file path.
    """
    if source == STDIN_SOURCE:
        return read_manifest_stream(sys.stdin)
    if is_url(source):
        return fetch_manifest(source, timeout)
    return read_manifest_file(source)
