"""Tests for contents API node models."""

import pytest

from repotree.exceptions import InvalidContentTypeError
from repotree.models import (
    DirectoryEntry,
    DirectoryListing,
    FileNode,
    UnrecognizedNode,
    parse_content_node,
)

from tests.factories import dir_entry, file_entry


@pytest.mark.unit
class TestParseContentNode:
    """Tests for parse_content_node."""

    def test_object_is_file_node(self) -> None:
        node = parse_content_node(
            {
                "type": "file",
                "name": "README.md",
                "encoding": "base64",
                "content": "aGVsbG8=\n",
                "download_url": "https://raw.githubusercontent.com/o/r/main/README.md",
                "sha": "abc",
            }
        )
        assert isinstance(node, FileNode)
        assert node.name == "README.md"
        assert node.encoding == "base64"
        assert node.content == "aGVsbG8=\n"

    def test_file_type_is_case_insensitive(self) -> None:
        node = parse_content_node({"type": "File", "name": "x"})
        assert isinstance(node, FileNode)

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "dir", "name": "src"},
            {"type": "symlink", "name": "link"},
            {"name": "untyped"},
            {"type": "file"},
        ],
    )
    def test_object_that_is_not_a_file_is_rejected(self, payload: dict) -> None:
        with pytest.raises(InvalidContentTypeError):
            parse_content_node(payload)

    def test_array_is_directory_listing_in_order(self) -> None:
        node = parse_content_node([file_entry("b.py"), dir_entry("lib"), file_entry("a.py")])
        assert isinstance(node, DirectoryListing)
        assert [e.name for e in node.entries] == ["b.py", "lib", "a.py"]
        assert all(isinstance(e, DirectoryEntry) for e in node.entries)
        assert node.entries[1].url.endswith("/contents/src/lib?ref=main")

    def test_malformed_entries_are_unrecognized(self) -> None:
        node = parse_content_node([file_entry("a.py"), "junk", {"type": "file"}])
        assert isinstance(node, DirectoryListing)
        assert isinstance(node.entries[0], DirectoryEntry)
        assert isinstance(node.entries[1], UnrecognizedNode)
        assert isinstance(node.entries[2], UnrecognizedNode)

    def test_empty_array(self) -> None:
        node = parse_content_node([])
        assert isinstance(node, DirectoryListing)
        assert node.entries == []

    @pytest.mark.parametrize("payload", [None, "text", 42])
    def test_other_shapes_are_unrecognized(self, payload: object) -> None:
        node = parse_content_node(payload)
        assert isinstance(node, UnrecognizedNode)
        assert node.payload == payload
