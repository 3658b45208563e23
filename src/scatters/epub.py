from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
import zipfile
import zlib
from pathlib import Path, PurePosixPath
from typing import Dict, Iterator, List

LOGGER = logging.getLogger(__name__)

# Members read as pages when a package declares no usable spine.
PAGE_SUFFIXES = {".xhtml", ".html", ".htm", ".txt"}

# Everything zipfile can raise while reading one damaged member: missing
# entry, CRC mismatch, corrupt deflate stream, truncated data, unsupported
# compression or encryption.
PAGE_READ_ERRORS = (
    KeyError,
    zipfile.BadZipFile,
    zlib.error,
    EOFError,
    NotImplementedError,
    RuntimeError,
)


class EPUBParseError(RuntimeError):
    """Raised when an EPUB archive cannot be parsed."""


def extract_text_from_epub(epub_path: Path) -> str:
    """Return the tag-stripped text of every readable page, joined by spaces."""
    return " ".join(strip_tags(page) for page in iter_epub_pages(epub_path))


def iter_epub_pages(epub_path: Path) -> Iterator[str]:
    """Yield the raw markup of each page in reading order.

    A page that cannot be read is skipped; only a broken container fails
    the book. The archive is read completely before the first page is
    yielded so a failure never produces a partial page sequence.
    """
    if not epub_path.exists():
        raise EPUBParseError(f"EPUB file not found: {epub_path}")

    pages: List[str] = []
    try:
        with zipfile.ZipFile(epub_path, "r") as zf:
            opf_path = _locate_opf(zf)
            page_paths = _spine_pages(zf, opf_path) or _fallback_pages(zf)
            for rel_path in page_paths:
                try:
                    raw = zf.read(rel_path)
                except PAGE_READ_ERRORS as exc:
                    LOGGER.debug("Skipping unreadable EPUB page %s: %s", rel_path, exc)
                    continue
                pages.append(raw.decode("utf-8", errors="ignore"))
    except (zipfile.BadZipFile, zlib.error, EOFError) as exc:
        raise EPUBParseError(f"Invalid EPUB archive: {epub_path}") from exc
    yield from pages


def strip_tags(markup: str) -> str:
    """Drop everything between '<' and '>' (inclusive); entities are left alone."""
    chunks: List[str] = []
    inside_tag = False
    for ch in markup:
        if ch == "<":
            inside_tag = True
        elif ch == ">":
            inside_tag = False
        elif not inside_tag:
            chunks.append(ch)
    return "".join(chunks)


def _locate_opf(zf: zipfile.ZipFile) -> str:
    """Return the archive path of the package document named by container.xml."""
    try:
        root = ET.fromstring(zf.read("META-INF/container.xml"))
    except KeyError as exc:
        raise EPUBParseError("EPUB missing META-INF/container.xml") from exc
    except ET.ParseError as exc:
        raise EPUBParseError("Unable to parse container.xml") from exc
    rootfile = root.find(".//{*}rootfile")
    if rootfile is None:
        raise EPUBParseError("container.xml missing rootfile element")
    opf_path = rootfile.attrib.get("full-path")
    if not opf_path:
        raise EPUBParseError("rootfile missing full-path attribute")
    return opf_path


def _spine_pages(zf: zipfile.ZipFile, opf_path: str) -> List[str]:
    """Resolve every spine itemref to an archive path, whatever its media type."""
    try:
        root = ET.fromstring(zf.read(opf_path))
    except (KeyError, ET.ParseError):
        return []

    hrefs: Dict[str, str] = {
        item.attrib["id"]: item.attrib["href"]
        for item in root.iterfind(".//{*}manifest/{*}item")
        if item.attrib.get("id") and item.attrib.get("href")
    }
    base = PurePosixPath(opf_path).parent
    pages: List[str] = []
    for itemref in root.iterfind(".//{*}spine/{*}itemref"):
        href = hrefs.get(itemref.attrib.get("idref", ""))
        if href:
            pages.append((base / href).as_posix())
    return pages


def _fallback_pages(zf: zipfile.ZipFile) -> List[str]:
    return [
        name for name in zf.namelist() if PurePosixPath(name).suffix.lower() in PAGE_SUFFIXES
    ]
