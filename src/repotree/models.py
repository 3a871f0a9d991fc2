"""Repository locator and contents API node models."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import InvalidContentTypeError


class RepositoryLocator(BaseModel):
    """Parts of a repository browser URL."""

    model_config = ConfigDict(frozen=True)

    scheme: str
    host: str  # includes an explicit port, e.g. "ghe.local:8443"
    owner: str
    repo: str
    ref_type: Literal["blob", "tree"]
    branch: str
    relative_path: str = ""  # empty at the repository root


class FileNode(BaseModel):
    """Single file returned when the listing URL points at a file."""

    type: str
    name: str
    encoding: str | None = None  # "base64" when content is inlined
    content: str | None = None
    download_url: str | None = None


class DirectoryEntry(BaseModel):
    """Child of a directory listing."""

    type: str
    name: str
    download_url: str | None = None  # set for files
    url: str | None = None  # contents API URL, set for directories


class UnrecognizedNode(BaseModel):
    """Any payload shape the walker does not handle."""

    payload: Any = None


class DirectoryListing(BaseModel):
    """Directory listing, entries kept in API order."""

    entries: list[DirectoryEntry | UnrecognizedNode]


ContentNode = FileNode | DirectoryListing | UnrecognizedNode


def _parse_entry(item: Any) -> DirectoryEntry | UnrecognizedNode:
    if not isinstance(item, dict):
        return UnrecognizedNode(payload=item)
    try:
        return DirectoryEntry.model_validate(item)
    except ValidationError:
        return UnrecognizedNode(payload=item)


def parse_content_node(payload: Any) -> ContentNode:
    """
    Turn a decoded contents API response into a typed node.

    An object is a file, an array is a directory listing, anything else
    is unrecognized.

    Raises:
        InvalidContentTypeError: an object that is not a well-formed file node
    """
    if isinstance(payload, dict):
        node_type = payload.get("type")
        if not isinstance(node_type, str) or node_type.lower() != "file":
            raise InvalidContentTypeError(
                f"Invalid type of repository content: {node_type!r}"
            )
        try:
            return FileNode.model_validate(payload)
        except ValidationError as e:
            raise InvalidContentTypeError(f"Malformed file content node: {e}") from e

    if isinstance(payload, list):
        return DirectoryListing(entries=[_parse_entry(item) for item in payload])

    return UnrecognizedNode(payload=payload)
