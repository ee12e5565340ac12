"""Unit tests for document_loaders.registry."""

import pytest

from ragcall.application.dto.document_dto import LoadedDocument
from ragcall.domain.exceptions import NotFound, UnreadableFormat
from ragcall.infrastructure.document_loaders import RegistryDocumentParser
from ragcall.infrastructure.document_loaders.base import ParseResult
from ragcall.infrastructure.document_loaders.registry import (
    get_parser_for_content_type,
    get_parser_for_filename,
    parse_file,
    supported_extensions,
)


class TestGetParserForFilename:
    """Tests for get_parser_for_filename."""

    def test_none_returns_none(self) -> None:
        assert get_parser_for_filename(None) is None

    def test_extension_is_case_insensitive(self) -> None:
        assert get_parser_for_filename("a.txt") is not None
        assert get_parser_for_filename("a.TXT") is not None

    def test_known_extensions_return_parser(self) -> None:
        for ext in ("docx", "pdf", "md", "csv", "tsv"):
            assert get_parser_for_filename(f"file.{ext}") is not None

    def test_unknown_extension_returns_none(self) -> None:
        assert get_parser_for_filename("file.xyz") is None


class TestGetParserForContentType:
    """Tests for get_parser_for_content_type."""

    def test_none_returns_none(self) -> None:
        assert get_parser_for_content_type(None) is None

    def test_known_types(self) -> None:
        assert get_parser_for_content_type("text/plain") is not None
        assert get_parser_for_content_type("application/pdf") is not None

    def test_content_type_with_charset(self) -> None:
        assert get_parser_for_content_type("text/plain; charset=utf-8") is not None

    def test_unknown_mime_returns_none(self) -> None:
        assert get_parser_for_content_type("application/octet-stream") is None


class TestParseFile:
    """Tests for parse_file."""

    def test_parse_txt_by_filename(self) -> None:
        result = parse_file(b"Hello world", filename="test.txt")
        assert isinstance(result, ParseResult)
        assert result.text == "Hello world"
        assert result.metadata["source_file_name"] == "test.txt"

    def test_parse_by_content_type_when_no_filename(self) -> None:
        result = parse_file(b"a,b\n1,2", filename=None, content_type="text/csv")
        assert result.text == "a b\n1 2"

    def test_no_hints_treated_as_text(self) -> None:
        assert parse_file(b"raw words").text == "raw words"

    def test_no_parser_raises_unreadable_format(self) -> None:
        with pytest.raises(UnreadableFormat, match="No parser for file type"):
            parse_file(b"data", filename="file.xyz")
        with pytest.raises(UnreadableFormat, match="No parser for file type"):
            parse_file(b"data", filename=None, content_type="application/unknown")

    def test_unreadable_format_is_not_found(self) -> None:
        with pytest.raises(NotFound):
            parse_file(b"data", filename="file.xyz")

    def test_unknown_extension_uses_content_type(self) -> None:
        result = parse_file(b"hello", filename="x.bin", content_type="text/plain")
        assert result.text == "hello"


def test_supported_extensions_sorted() -> None:
    exts = supported_extensions()
    assert exts == sorted(exts)
    assert {"txt", "md", "pdf", "docx"} <= set(exts)


def test_registry_document_parser_returns_loaded_document() -> None:
    loaded = RegistryDocumentParser().parse(b"# Notes", filename="notes.md")
    assert loaded == LoadedDocument(
        text="# Notes",
        metadata={"source_file_name": "notes.md", "source_file_type": "md"},
    )
