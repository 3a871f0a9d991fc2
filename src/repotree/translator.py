"""Translate repository browser URLs into contents API URLs."""

import logging
from urllib.parse import urlsplit

from .exceptions import InvalidLocatorError
from .models import RepositoryLocator

logger = logging.getLogger(__name__)

HOST_TOKEN = "{HOST}"
REF_TYPES = ("blob", "tree")


class ApiPrefix:
    """Built-in API prefix templates."""

    DEFAULT_GITHUB = "api.{HOST}"
    ENTERPRISE_GITHUB_V3 = "{HOST}/api/v3"


def _trim(segment: str) -> str:
    return segment.strip("/\\")


def parse_browser_url(browser_url: str) -> RepositoryLocator:
    """
    Split a browser URL into its repository parts.

    The path is read as ``/OWNER/REPO/{blob|tree}/BRANCH/PATH...``.

    Args:
        browser_url: URL as shown in the web UI

    Returns:
        RepositoryLocator

    Raises:
        InvalidLocatorError: URL has no host, too few path segments, or a
            marker other than blob/tree
    """
    try:
        parts = urlsplit(browser_url)
        host = parts.hostname
        port = parts.port
    except ValueError as e:
        raise InvalidLocatorError(f"Invalid URL {browser_url!r}: {e}") from e

    if not parts.scheme or not host:
        raise InvalidLocatorError(f"URL has no scheme or host: {browser_url!r}")

    segments = parts.path.split("/")
    if len(segments) < 5:
        raise InvalidLocatorError(
            f"URL must look like .../OWNER/REPO/blob|tree/BRANCH/PATH: {browser_url!r}"
        )

    ref_type = _trim(segments[3]).lower()
    if ref_type not in REF_TYPES:
        raise InvalidLocatorError(f"Url is neither blob or tree: {browser_url!r}")

    branch = _trim(segments[4])
    if not branch:
        raise InvalidLocatorError(f"URL has no branch: {browser_url!r}")

    relative_path = "/".join(
        trimmed for trimmed in (_trim(s) for s in segments[5:]) if trimmed
    )

    return RepositoryLocator(
        scheme=parts.scheme,
        host=f"{host}:{port}" if port else host,
        owner=_trim(segments[1]),
        repo=_trim(segments[2]),
        ref_type=ref_type,
        branch=branch,
        relative_path=relative_path,
    )


def generate_content_listing_url(
    browser_url: str, api_prefix_template: str = ApiPrefix.DEFAULT_GITHUB
) -> str:
    """
    Build the contents API URL for a browser URL.

    Blob and tree URLs map to the same endpoint; the API answers with a
    file object or a directory array depending on the path.

    Args:
        browser_url: URL as shown in the web UI
        api_prefix_template: API host template containing ``{HOST}``

    Returns:
        ``{scheme}://{api host}/repos/{owner}/{repo}/contents/{path}?ref={branch}``
    """
    locator = parse_browser_url(browser_url)
    api_host = api_prefix_template.replace(HOST_TOKEN, locator.host)
    url = (
        f"{locator.scheme}://{api_host}/repos/{locator.owner}/{locator.repo}"
        f"/contents/{locator.relative_path}?ref={locator.branch}"
    )
    logger.debug("Content listing URL for %s: %s", browser_url, url)
    return url
