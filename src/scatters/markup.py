from __future__ import annotations

from typing import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token

# Inline token types whose content is prose; everything else (html_inline,
# breaks, emphasis markers) contributes nothing.
TEXT_TOKEN_TYPES = {"text", "text_special", "code_inline"}


def extract_text_from_markdown(source: str) -> str:
    """Concatenate the prose of a Markdown document, one space after each run.

    Only inline text and inline code are kept. Fenced and indented code
    blocks live in block-level tokens and never reach the inline walk, so
    their contents are excluded.
    """
    parser = MarkdownIt("commonmark")
    chunks: list[str] = []
    for run in _iter_text_runs(parser.parse(source)):
        chunks.append(run)
        chunks.append(" ")
    return "".join(chunks)


def _iter_text_runs(tokens: Iterable[Token]) -> Iterator[str]:
    for token in tokens:
        if token.type == "inline" and token.children:
            yield from _iter_inline_runs(token.children)


def _iter_inline_runs(children: Iterable[Token]) -> Iterator[str]:
    for child in children:
        if child.type in TEXT_TOKEN_TYPES:
            yield child.content
        elif child.type == "image" and child.children:
            # Alt text is stored as nested inline tokens.
            yield from _iter_inline_runs(child.children)
