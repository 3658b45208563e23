from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from scatters.epub import EPUBParseError, extract_text_from_epub, strip_tags
from tests.utils import corrupt_zip_member, write_minimal_epub, xhtml


def test_extract_text_from_epub_reads_spine(tmp_path: Path):
    """extract_text_from_epub joins stripped chapters in spine order."""
    epub_path = tmp_path / "book.epub"
    write_minimal_epub(
        epub_path,
        chapters=[xhtml("<p>Hello crew.</p>"), xhtml("<p>Second chapter.</p>")],
    )
    text = extract_text_from_epub(epub_path)
    assert text == "Hello crew. Second chapter."


def test_extract_text_from_epub_falls_back_without_spine(tmp_path: Path):
    """Every XHTML member is read when the OPF lacks a spine section."""
    epub_path = tmp_path / "fallback.epub"
    write_minimal_epub(
        epub_path, chapters=[xhtml("<p>Fallback only.</p>")], include_spine=False
    )
    assert "Fallback only." in extract_text_from_epub(epub_path)


def test_extract_text_from_epub_skips_missing_pages(tmp_path: Path):
    """A spine page absent from the archive is skipped, not fatal."""
    epub_path = tmp_path / "holes.epub"
    write_minimal_epub(
        epub_path,
        chapters=[xhtml("<p>Alpha</p>"), xhtml("<p>Beta</p>"), xhtml("<p>Gamma</p>")],
        missing_chapters=(2,),
    )
    assert extract_text_from_epub(epub_path) == "Alpha Gamma"


def test_extract_text_from_epub_skips_page_failing_crc(tmp_path: Path):
    """A stored page whose bytes no longer match its CRC is skipped."""
    epub_path = tmp_path / "crc.epub"
    write_minimal_epub(epub_path, chapters=[xhtml("<p>Alpha</p>"), xhtml("<p>Beta</p>")])
    corrupt_zip_member(epub_path, "OEBPS/chapter2.xhtml")
    assert extract_text_from_epub(epub_path) == "Alpha"


def test_extract_text_from_epub_skips_page_with_corrupt_deflate_stream(tmp_path: Path):
    """A deflated page that cannot be decompressed is skipped."""
    epub_path = tmp_path / "deflate.epub"
    write_minimal_epub(
        epub_path,
        chapters=[xhtml("<p>Alpha</p>"), xhtml("<p>Beta</p>")],
        compression=zipfile.ZIP_DEFLATED,
    )
    corrupt_zip_member(epub_path, "OEBPS/chapter2.xhtml")
    assert extract_text_from_epub(epub_path) == "Alpha"


def test_extract_text_from_epub_reads_spine_items_of_any_media_type(tmp_path: Path):
    """Spine pages are read whatever media type the manifest declares."""
    epub_path = tmp_path / "plain.epub"
    write_minimal_epub(
        epub_path, chapters=["Plain words.", "More words."], media_type="text/plain"
    )
    assert extract_text_from_epub(epub_path) == "Plain words. More words."


def test_strip_tags_ignores_tag_semantics():
    assert strip_tags("<p class='x'>Hi &amp; <b>there</b></p>") == "Hi &amp; there"
    assert strip_tags("no tags here") == "no tags here"
    assert strip_tags("a<unterminated tag") == "a"


def test_extract_text_from_epub_rejects_invalid_archive(tmp_path: Path):
    bogus = tmp_path / "bogus.epub"
    bogus.write_bytes(b"definitely not a zip file")
    with pytest.raises(EPUBParseError):
        extract_text_from_epub(bogus)


def test_extract_text_from_epub_requires_container(tmp_path: Path):
    epub_path = tmp_path / "headless.epub"
    with zipfile.ZipFile(epub_path, "w") as zf:
        zf.writestr("OEBPS/chapter1.xhtml", xhtml("<p>Orphan</p>"))
    with pytest.raises(EPUBParseError, match="container.xml"):
        extract_text_from_epub(epub_path)


def test_extract_text_from_epub_missing_file(tmp_path: Path):
    with pytest.raises(EPUBParseError, match="not found"):
        extract_text_from_epub(tmp_path / "absent.epub")
