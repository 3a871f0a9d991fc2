"""Fakes and contents API payload builders shared by the tests."""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from repotree.exceptions import TransportError

SOURCE_URL = "https://github.com/octo/tools/tree/main/src"
SOURCE_LISTING_URL = "https://api.github.com/repos/octo/tools/contents/src?ref=main"
NESTED_LISTING_URL = "https://api.github.com/repos/octo/tools/contents/src/lib?ref=main"
RAW_BASE = "https://raw.githubusercontent.com/octo/tools/main"


class FakeContentFetcher:
    """In-memory ContentFetcher recording every call."""

    def __init__(
        self,
        listings: Mapping[str, Any] | None = None,
        statuses: Mapping[str, int] | None = None,
        failures: set[str] | None = None,
    ) -> None:
        self.listings = dict(listings or {})
        self.statuses = dict(statuses or {})
        self.failures = set(failures or ())
        self.listing_calls: list[tuple[str, dict[str, str]]] = []
        self.download_calls: list[tuple[str, Path, dict[str, str]]] = []

    def fetch_listing(self, url: str, headers: Mapping[str, str]) -> Any:
        self.listing_calls.append((url, dict(headers)))
        if url not in self.listings:
            raise TransportError(f"Contents API returned HTTP 404 for {url}", url, 404)
        return self.listings[url]

    def download_file(self, url: str, local_path: Path, headers: Mapping[str, str]) -> int:
        self.download_calls.append((url, Path(local_path), dict(headers)))
        if url in self.failures:
            raise TransportError(f"Network error downloading {url}", url)
        status = self.statuses.get(url, 200)
        if 200 <= status < 300:
            Path(local_path).write_bytes(f"content of {url}".encode())
        return status

    @property
    def downloaded_urls(self) -> list[str]:
        return [url for url, _, _ in self.download_calls]


def file_entry(name: str, directory: str = "src") -> dict[str, Any]:
    """Directory listing entry for a file, shaped like the contents API."""
    return {
        "type": "file",
        "name": name,
        "path": f"{directory}/{name}",
        "sha": "0" * 40,
        "size": 10,
        "url": f"https://api.github.com/repos/octo/tools/contents/{directory}/{name}?ref=main",
        "download_url": f"{RAW_BASE}/{directory}/{name}",
    }


def dir_entry(name: str, directory: str = "src") -> dict[str, Any]:
    """Directory listing entry for a subdirectory."""
    return {
        "type": "dir",
        "name": name,
        "path": f"{directory}/{name}",
        "sha": "1" * 40,
        "size": 0,
        "url": f"https://api.github.com/repos/octo/tools/contents/{directory}/{name}?ref=main",
        "download_url": None,
    }
