"""Tests for local document loading."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from kbfinder.config import AppConfig, SharePointConfig
from kbfinder.ingestion.loader import load_corpus, load_documents, read_document
from kbfinder.models import Document
from kbfinder.sources.sharepoint import SharePointDocument, SharePointSource


class TestReadDocument:
    """Test read_document function."""

    def test_reads_and_strips(self, tmp_path: Path) -> None:
        """Should strip content and cite the file name."""
        path = tmp_path / "notes.txt"
        path.write_text("\n  Hello world  \n\n", encoding="utf-8")

        assert read_document(path) == Document(content="Hello world", citation="notes.txt")

    def test_custom_citation(self, tmp_path: Path) -> None:
        """An explicit citation overrides the file name."""
        path = tmp_path / "notes.txt"
        path.write_text("Hello", encoding="utf-8")

        assert read_document(path, "docs/notes.txt").citation == "docs/notes.txt"

    def test_invalid_utf8(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """Undecodable files are logged and skipped."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"\xff\xfe\xfa\x00")

        with caplog.at_level(logging.ERROR):
            assert read_document(path) is None

        assert "binary.txt" in caplog.text

    def test_missing_file(self, tmp_path: Path) -> None:
        """A file that disappeared returns None."""
        assert read_document(tmp_path / "gone.txt") is None


class TestLoadDocuments:
    """Test load_documents function."""

    def test_loads_sorted_top_level_files(self, tmp_path: Path) -> None:
        """Should read every top-level file in name order."""
        (tmp_path / "b.md").write_text("Beta", encoding="utf-8")
        (tmp_path / "a.txt").write_text("Alpha", encoding="utf-8")
        (tmp_path / "c.csv").write_text("Gamma", encoding="utf-8")

        documents = load_documents(tmp_path)

        assert documents == [
            Document(content="Alpha", citation="a.txt"),
            Document(content="Beta", citation="b.md"),
            Document(content="Gamma", citation="c.csv"),
        ]

    def test_skips_empty_and_unreadable(self, tmp_path: Path) -> None:
        """Empty or broken entries do not abort the load."""
        (tmp_path / "empty.txt").write_text("   \n", encoding="utf-8")
        (tmp_path / "broken.txt").write_bytes(b"\xff\xfe")
        (tmp_path / "good.txt").write_text("Good content", encoding="utf-8")

        documents = load_documents(tmp_path)

        assert [doc.citation for doc in documents] == ["good.txt"]

    def test_ignores_subdirectories(self, tmp_path: Path) -> None:
        """Without recursion nested files are not read."""
        nested = tmp_path / "nested"
        nested.mkdir()
        (nested / "inner.txt").write_text("Inner", encoding="utf-8")
        (tmp_path / "outer.txt").write_text("Outer", encoding="utf-8")

        assert [doc.citation for doc in load_documents(tmp_path)] == ["outer.txt"]

    def test_recursive(self, tmp_path: Path) -> None:
        """Recursion reads known text files and cites relative paths."""
        nested = tmp_path / "policies"
        nested.mkdir()
        (nested / "travel.md").write_text("Travel policy", encoding="utf-8")
        (nested / "logo.png").write_bytes(b"\x89PNG")
        (tmp_path / "intro.txt").write_text("Intro", encoding="utf-8")

        documents = load_documents(tmp_path, recursive=True)

        assert [doc.citation for doc in documents] == ["intro.txt", "policies/travel.md"]

    def test_missing_directory(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        """A missing directory is logged and yields no documents."""
        with caplog.at_level(logging.WARNING):
            documents = load_documents(tmp_path / "missing")

        assert documents == []
        assert "Data directory not found" in caplog.text

    def test_file_instead_of_directory(self, tmp_path: Path) -> None:
        """A file path is treated as a missing directory."""
        path = tmp_path / "file.txt"
        path.write_text("content", encoding="utf-8")

        assert load_documents(path) == []


class TestLoadCorpus:
    """Test load_corpus function."""

    def test_local_only_when_sharepoint_disabled(self, tmp_path: Path) -> None:
        """Only local documents are returned by default."""
        (tmp_path / "a.txt").write_text("Alpha", encoding="utf-8")
        config = AppConfig(data_dir=tmp_path)

        assert load_corpus(config, tmp_path) == [Document(content="Alpha", citation="a.txt")]

    def test_includes_sharepoint_documents(self, tmp_path: Path) -> None:
        """Documents fetched from SharePoint are appended."""
        (tmp_path / "a.txt").write_text("Alpha", encoding="utf-8")
        config = AppConfig(
            data_dir=tmp_path,
            sharepoint=SharePointConfig(site_url="https://example.sharepoint.com/sites/kb"),
        )
        remote = SharePointDocument(
            id="1",
            name="remote.docx",
            web_url="https://example.sharepoint.com/sites/kb/remote.docx",
            content="Remote",
            last_modified=datetime(2024, 1, 1),
        )

        with patch.object(SharePointSource, "fetch_documents", return_value=[remote]):
            documents = load_corpus(config, tmp_path)

        assert documents == [
            Document(content="Alpha", citation="a.txt"),
            Document(content="Remote", citation="remote.docx"),
        ]
