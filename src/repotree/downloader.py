"""Materialize a repository subtree on the local filesystem."""

import base64
import binascii
import logging
import warnings
from pathlib import Path

from .client import ContentFetcher, HttpxContentFetcher
from .exceptions import (
    ConfigurationError,
    InvalidContentTypeError,
    TransportError,
    UnhandledNodeTypeWarning,
)
from .models import (
    ContentNode,
    DirectoryEntry,
    DirectoryListing,
    FileNode,
    parse_content_node,
)
from .translator import HOST_TOKEN, ApiPrefix, generate_content_listing_url

logger = logging.getLogger(__name__)


def _is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _report_anomaly(message: str) -> None:
    logger.warning("%s", message)
    warnings.warn(message, UnhandledNodeTypeWarning, stacklevel=3)


def _is_safe_name(name: str) -> bool:
    return bool(name) and name not in (".", "..") and not any(
        sep in name for sep in ("/", "\\")
    )


class RepositoryDownloader:
    """Downloads files and directories addressed by repository browser URLs."""

    def __init__(
        self,
        token: str,
        api_prefix_template: str = ApiPrefix.DEFAULT_GITHUB,
        fetcher: ContentFetcher | None = None,
    ):
        """
        Initialize downloader.

        Args:
            token: GitHub token sent as a Bearer credential on every request
            api_prefix_template: API host template containing ``{HOST}``
            fetcher: Content fetcher (defaults to HttpxContentFetcher)

        Raises:
            ConfigurationError: empty token, bad template or unusable fetcher
        """
        if not token:
            raise ConfigurationError("token is required")
        if not api_prefix_template:
            raise ConfigurationError("api_prefix_template is required")
        if HOST_TOKEN not in api_prefix_template:
            raise ConfigurationError(
                f"api_prefix_template must contain {HOST_TOKEN}: {api_prefix_template!r}"
            )
        if fetcher is None:
            fetcher = HttpxContentFetcher()
        elif not isinstance(fetcher, ContentFetcher):
            raise ConfigurationError(
                f"fetcher must provide fetch_listing and download_file: {fetcher!r}"
            )

        self._token = token
        self.api_prefix_template = api_prefix_template
        self.fetcher = fetcher
        logger.debug("Downloader ready, api_prefix_template=%s", api_prefix_template)

    @property
    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    def generate_content_listing_url(self, browser_url: str) -> str:
        """Return the contents API URL for a browser URL."""
        return generate_content_listing_url(browser_url, self.api_prefix_template)

    def download(self, browser_url: str, target_directory: str | Path) -> int:
        """
        Download the file or directory tree a browser URL points at.

        Files are written under ``target_directory`` using their remote
        names; subdirectories mirror the remote layout. Existing files are
        overwritten and nothing is deleted.

        Args:
            browser_url: ``.../OWNER/REPO/{blob|tree}/BRANCH/PATH`` URL
            target_directory: Local directory, created when missing

        Returns:
            Number of files written

        Raises:
            InvalidLocatorError: malformed browser URL
            InvalidContentTypeError: the top-level listing object is not a file
            TransportError: a listing request failed
        """
        listing_url = self.generate_content_listing_url(browser_url)
        logger.info("Downloading %s into %s", browser_url, target_directory)
        node = self._fetch_node(listing_url)
        total = self._process_node(node, Path(target_directory))
        logger.info("Downloaded %d file(s) from %s", total, browser_url)
        return total

    def _fetch_node(self, url: str) -> ContentNode:
        payload = self.fetcher.fetch_listing(url, self.auth_headers)
        return parse_content_node(payload)

    def _process_node(self, node: ContentNode, target_directory: Path) -> int:
        if isinstance(node, FileNode):
            return self._process_file(node, target_directory)
        if isinstance(node, DirectoryListing):
            return self._process_directory(node, target_directory)
        _report_anomaly(
            f"Unhandled repository content shape: {type(node.payload).__name__}"
        )
        return 0

    def _download(self, url: str, local_path: Path) -> bool:
        try:
            status_code = self.fetcher.download_file(url, local_path, self.auth_headers)
        except (TransportError, OSError) as e:
            logger.warning("Failed to download %s: %s", url, e)
            return False
        if not _is_success(status_code):
            logger.warning("Failed to download %s (status=%d)", url, status_code)
            return False
        logger.debug("Saved %s", local_path)
        return True

    def _process_file(self, node: FileNode, target_directory: Path) -> int:
        if not _is_safe_name(node.name):
            _report_anomaly(f"Skipping file with unusable name: {node.name!r}")
            return 0

        target_directory.mkdir(parents=True, exist_ok=True)
        target_file = target_directory / node.name

        if node.encoding == "base64":
            try:
                data = base64.b64decode(node.content or "")
            except binascii.Error as e:
                raise InvalidContentTypeError(
                    f"Invalid base64 content for {node.name}: {e}"
                ) from e
            target_file.write_bytes(data)
            logger.debug("Decoded inline content: %s (%d bytes)", target_file, len(data))
            return 1

        if not node.download_url:
            _report_anomaly(f"File {node.name!r} has neither inline content nor download_url")
            return 0
        return 1 if self._download(node.download_url, target_file) else 0

    def _process_directory(self, listing: DirectoryListing, target_directory: Path) -> int:
        target_directory.mkdir(parents=True, exist_ok=True)
        logger.debug("Directory listing: %s (%d items)", target_directory, len(listing.entries))

        total = 0
        for entry in listing.entries:
            if isinstance(entry, DirectoryEntry):
                total += self._process_entry(entry, target_directory)
            else:
                _report_anomaly(f"Malformed directory entry: {entry.payload!r}")
        return total

    def _process_entry(self, entry: DirectoryEntry, target_directory: Path) -> int:
        if not _is_safe_name(entry.name):
            _report_anomaly(f"Skipping entry with unusable name: {entry.name!r}")
            return 0

        if entry.type == "file":
            if not entry.download_url:
                _report_anomaly(f"File entry {entry.name!r} has no download_url")
                return 0
            return 1 if self._download(entry.download_url, target_directory / entry.name) else 0

        if entry.type == "dir":
            if not entry.url:
                _report_anomaly(f"Directory entry {entry.name!r} has no url")
                return 0
            logger.debug("Recursing into directory: %s", entry.name)
            try:
                node = self._fetch_node(entry.url)
                return self._process_node(node, target_directory / entry.name)
            except InvalidContentTypeError as e:
                _report_anomaly(f"Skipping directory {entry.name!r}: {e}")
                return 0

        _report_anomaly(
            f"Type of directory entry is not implemented: {entry.type!r} ({entry.name})"
        )
        return 0
