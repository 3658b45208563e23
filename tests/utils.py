from __future__ import annotations

import struct
import zipfile
from pathlib import Path

CONTAINER_XML = """<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="OEBPS/content.opf" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


def write_minimal_epub(
    path: Path,
    chapters: list[str],
    include_spine: bool = True,
    missing_chapters: tuple[int, ...] = (),
    compression: int = zipfile.ZIP_STORED,
    media_type: str = "application/xhtml+xml",
) -> None:
    """Create a minimal EPUB with the given XHTML chapters.

    Chapter numbers (1-based) listed in missing_chapters appear in the
    manifest and spine but are left out of the archive.
    """
    manifest_items = []
    spine_items = []
    chapter_files = []
    for idx, chapter in enumerate(chapters, start=1):
        href = f"chapter{idx}.xhtml"
        manifest_items.append(f'<item id="chap{idx}" href="{href}" media-type="{media_type}"/>')
        spine_items.append(f'<itemref idref="chap{idx}"/>')
        if idx not in missing_chapters:
            chapter_files.append((f"OEBPS/{href}", chapter))
    spine_block = (
        "<spine>" + "".join(spine_items) + "</spine>" if include_spine else "<spine/>"
    )
    opf = f"""<?xml version="1.0" encoding="utf-8"?>
<package version="3.0" xmlns="http://www.idpf.org/2007/opf">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Test</dc:title>
  </metadata>
  <manifest>
    {''.join(manifest_items)}
  </manifest>
  {spine_block}
</package>
"""
    with zipfile.ZipFile(path, "w", compression=compression) as zf:
        zf.writestr(
            "mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED
        )
        zf.writestr("META-INF/container.xml", CONTAINER_XML)
        zf.writestr("OEBPS/content.opf", opf)
        for file_path, body in chapter_files:
            zf.writestr(file_path, body)


def corrupt_zip_member(path: Path, member: str) -> None:
    """Damage the first data byte of one archive member in place.

    A stored member then fails its CRC check; a deflated member starts with
    an invalid block type so decompression fails.
    """
    with zipfile.ZipFile(path) as zf:
        info = zf.getinfo(member)
    data = bytearray(path.read_bytes())
    header = info.header_offset
    name_len, extra_len = struct.unpack("<HH", data[header + 26 : header + 30])
    start = header + 30 + name_len + extra_len
    if info.compress_type == zipfile.ZIP_DEFLATED:
        data[start] = 0xFF
    else:
        data[start] ^= 0xFF
    path.write_bytes(bytes(data))


def xhtml(body: str) -> str:
    return f"<html xmlns='http://www.w3.org/1999/xhtml'><body>{body}</body></html>"
