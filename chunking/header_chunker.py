"""
Header Chunker - structure-aware chunking for Markdown-style documents

Splits a document at Markdown headers (# .. ######) and windows each
section independently. Every chunk carries the header trail of its
section as context, e.g. "Install > Linux > Packages".

Headers inside fenced code blocks (``` or ~~~) are ignored. Files without
headers become a single section with an empty trail.
"""

import re
from typing import Iterable

from .chunker import BaseChunker
from .models import SourceDocument
from .sentence_splitter import split_paragraphs

_HEADER_PATTERN = re.compile(r"^(#{1,6})\s+(.+?)\s*#*\s*$")
_FENCE_PATTERN = re.compile(r"^\s*(```|~~~)")

TRAIL_SEPARATOR = " > "


def split_sections(text: str) -> list[tuple[list[str], str]]:
    """
    Split Markdown text into (header trail, section text) pairs.

    The section text starts with its header line. Text before the first
    header gets an empty trail.
    """
    sections: list[tuple[list[str], str]] = []
    trail: list[tuple[int, str]] = []
    current: list[str] = []
    current_trail: list[str] = []
    in_fence = False

    def flush() -> None:
        body = "\n".join(current).strip()
        if body:
            sections.append((current_trail, body))

    for line in text.splitlines():
        if _FENCE_PATTERN.match(line):
            in_fence = not in_fence
            current.append(line)
            continue

        match = None if in_fence else _HEADER_PATTERN.match(line)
        if match is None:
            current.append(line)
            continue

        flush()
        level = len(match.group(1))
        while trail and trail[-1][0] >= level:
            trail.pop()
        trail.append((level, match.group(2)))
        current_trail = [title for _, title in trail]
        current = [line]

    flush()
    return sections


class HeaderChunker(BaseChunker):
    """Header sections, paragraph units, header trail as context."""

    def _segments(self, document: SourceDocument) -> Iterable[tuple[str, list[str]]]:
        for trail, body in split_sections(document.content):
            yield TRAIL_SEPARATOR.join(trail), split_paragraphs(body)
