"""Content fetcher for the GitHub contents API."""

import logging
import os
import subprocess
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import httpx

from .exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_LISTING_TIMEOUT = 30.0  # seconds
DEFAULT_DOWNLOAD_TIMEOUT = 300.0  # seconds
DEFAULT_CHUNK_SIZE = 5120  # bytes
TOKEN_ENV_VARS = ("REPOTREE_TOKEN", "GH_TOKEN", "GITHUB_TOKEN")


def get_token_from_gh_cli() -> str | None:
    """
    Ask the gh cli for the token it is logged in with.

    Returns:
        Token string or None if gh cli not available/authenticated
    """
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=5,
        )
        if result.returncode == 0 and result.stdout.strip():
            logger.info("Using repotree token from gh cli")
            return result.stdout.strip()
    except (subprocess.TimeoutExpired, FileNotFoundError) as e:
        logger.debug("gh cli not available: %s", e)
    return None


def get_token(token: str | None = None, use_gh_cli: bool = False) -> str | None:
    """
    Resolve the token repotree sends as a Bearer credential.

    Priority:
    1. Explicitly provided token
    2. Environment variable REPOTREE_TOKEN, then GH_TOKEN / GITHUB_TOKEN
    3. gh cli (`gh auth token`) - only if use_gh_cli=True

    Args:
        token: Explicitly provided token
        use_gh_cli: Whether to use gh cli credentials (requires user consent)

    Returns:
        GitHub token or None
    """
    if token:
        logger.debug("Using explicitly provided token")
        return token

    for name in TOKEN_ENV_VARS:
        env_token = os.environ.get(name)
        if env_token:
            logger.info("Using token from environment variable %s", name)
            return env_token

    if use_gh_cli:
        return get_token_from_gh_cli()

    return None


@runtime_checkable
class ContentFetcher(Protocol):
    """Network operations the downloader depends on."""

    def fetch_listing(self, url: str, headers: Mapping[str, str]) -> Any:
        """
        GET a contents API URL and return the decoded JSON body.

        Raises:
            TransportError: non-2xx status, connection failure or bad JSON
        """
        ...

    def download_file(
        self, url: str, local_path: Path, headers: Mapping[str, str]
    ) -> int:
        """
        GET a file and stream the body to ``local_path``.

        Returns:
            HTTP status code; non-2xx is returned, not raised

        Raises:
            TransportError: connection failure or timeout
        """
        ...


class HttpxContentFetcher:
    """ContentFetcher backed by httpx."""

    def __init__(
        self,
        listing_timeout: float = DEFAULT_LISTING_TIMEOUT,
        download_timeout: float = DEFAULT_DOWNLOAD_TIMEOUT,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize fetcher.

        Args:
            listing_timeout: Timeout in seconds for contents API requests
            download_timeout: Timeout in seconds for file downloads
            chunk_size: Streaming chunk size in bytes
            transport: Custom httpx transport (e.g. httpx.MockTransport)
        """
        self.listing_timeout = listing_timeout
        self.download_timeout = download_timeout
        self.chunk_size = chunk_size
        self.transport = transport
        self.headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "repotree",
        }

    def _client(self, timeout: float, headers: Mapping[str, str]) -> httpx.Client:
        return httpx.Client(
            timeout=timeout,
            headers={**self.headers, **headers},
            transport=self.transport,
            follow_redirects=True,
        )

    def fetch_listing(self, url: str, headers: Mapping[str, str]) -> Any:
        """Fetch and decode a contents API response."""
        logger.debug("Request: GET %s", url)
        try:
            with self._client(self.listing_timeout, headers) as client:
                response = client.get(url)
        except httpx.HTTPError as e:
            raise TransportError(f"Network error fetching {url}: {e}", url) from e

        logger.debug("Response: GET %s (status=%d)", url, response.status_code)
        if not response.is_success:
            raise TransportError(
                f"Contents API returned HTTP {response.status_code} for {url}",
                url,
                response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise TransportError(
                f"Invalid JSON from {url}: {e}", url, response.status_code
            ) from e

    def download_file(
        self, url: str, local_path: Path, headers: Mapping[str, str]
    ) -> int:
        """Stream a file to disk, returning the response status."""
        logger.debug("Downloading: %s -> %s", url, local_path)
        try:
            with self._client(self.download_timeout, headers) as client:
                with client.stream("GET", url) as response:
                    if not response.is_success:
                        logger.debug(
                            "Download failed: %s (status=%d)", url, response.status_code
                        )
                        return response.status_code
                    with Path(local_path).open("wb") as f:
                        for chunk in response.iter_bytes(self.chunk_size):
                            f.write(chunk)
                    return response.status_code
        except httpx.HTTPError as e:
            raise TransportError(f"Network error downloading {url}: {e}", url) from e
