"""Download files and directory trees from GitHub repositories."""

from .client import ContentFetcher, HttpxContentFetcher, get_token
from .downloader import RepositoryDownloader
from .exceptions import (
    ConfigurationError,
    InvalidContentTypeError,
    InvalidLocatorError,
    RepoTreeError,
    TransportError,
    UnhandledNodeTypeWarning,
)
from .models import (
    DirectoryEntry,
    DirectoryListing,
    FileNode,
    RepositoryLocator,
    UnrecognizedNode,
    parse_content_node,
)
from .translator import ApiPrefix, generate_content_listing_url, parse_browser_url

__all__ = [
    "ApiPrefix",
    "ConfigurationError",
    "ContentFetcher",
    "DirectoryEntry",
    "DirectoryListing",
    "FileNode",
    "HttpxContentFetcher",
    "InvalidContentTypeError",
    "InvalidLocatorError",
    "RepoTreeError",
    "RepositoryDownloader",
    "RepositoryLocator",
    "TransportError",
    "UnhandledNodeTypeWarning",
    "UnrecognizedNode",
    "generate_content_listing_url",
    "get_token",
    "parse_browser_url",
    "parse_content_node",
]
