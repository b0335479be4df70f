"""
Sentence Splitter for the Chunking Pipeline

Regex-based sentence boundary detection for the mix of prose, Markdown
and source code found in a project tree. No external NLP libraries.

Design:
- Blank lines always separate units (paragraphs, code blocks)
- Inside a paragraph, split at sentence-ending punctuation (.!?) followed
  by whitespace and an uppercase letter, digit, quote or bracket
- Protect known English abbreviations (e.g., i.e., etc., Dr.) and
  numbered list markers ("1. ") from triggering false splits
- Dots inside identifiers, versions and file names never split, because
  they are not followed by whitespace

Usage:
    from chunking.sentence_splitter import split_sentences, split_paragraphs

    sentences = split_sentences("SourceChat reads files. It answers questions.")
    # ["SourceChat reads files.", "It answers questions."]
"""

import re

# Placeholder character used to protect dots from sentence splitting.
_DOT_PLACEHOLDER = "\x00"

_ABBREVIATIONS = {
    # Latin
    "etc", "vs", "cf", "approx", "viz",
    # Titles
    "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "st",
    # Technical writing
    "fig", "no", "vol", "ch", "sec", "ref", "ver", "min", "max", "dept", "inc", "ltd",
    # Months (abbreviated)
    "jan", "feb", "mar", "apr", "jun", "jul", "aug", "sep", "sept", "oct", "nov", "dec",
}

_ABBREV_PATTERN = re.compile(
    r"(?<!\w)(?:" + "|".join(re.escape(a) for a in sorted(_ABBREVIATIONS)) + r")\.(?=\s)",
    re.IGNORECASE,
)

# Multi-part abbreviations: e.g., i.e., a.k.a., U.S.
_MULTI_ABBREV_PATTERN = re.compile(r"\b[a-zA-Z]\.(?:[a-zA-Z]\.)+")

# Numbered list markers at the start of a line or after whitespace: "1. ", "23. "
_ORDINAL_PATTERN = re.compile(r"(?:(?<=\s)|^)\d{1,3}\.(?=\s)", re.MULTILINE)

_SENTENCE_BOUNDARY = re.compile(r'(?<=[.!?])\s+(?=[A-Z0-9"\'\(\[`*#-])')

_PARAGRAPH_BOUNDARY = re.compile(r"\n\s*\n")


def _protect_dots(text: str) -> str:
    """Replace dots in abbreviations and list markers with placeholders."""
    # Order matters: multi-part abbreviations first ("e.g." before "g.")
    for pattern in (_MULTI_ABBREV_PATTERN, _ABBREV_PATTERN, _ORDINAL_PATTERN):
        text = pattern.sub(lambda m: m.group().replace(".", _DOT_PLACEHOLDER), text)
    return text


def _restore_dots(text: str) -> str:
    return text.replace(_DOT_PLACEHOLDER, ".")


def split_paragraphs(text: str) -> list[str]:
    """
    Split text at blank lines.

    Returns:
        Non-empty paragraphs with trailing whitespace removed. Leading
        indentation is kept so code blocks stay intact.
    """
    if not text or not text.strip():
        return []
    parts = _PARAGRAPH_BOUNDARY.split(text.strip("\n"))
    return [p.rstrip() for p in parts if p.strip()]


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences at proper sentence boundaries.

    Args:
        text: Input text to split into sentences.

    Returns:
        List of sentence strings. Empty/whitespace input returns empty list.
        Each sentence is stripped of leading/trailing whitespace.
    """
    sentences = []
    for paragraph in split_paragraphs(text):
        protected = _protect_dots(paragraph.strip())
        for part in _SENTENCE_BOUNDARY.split(protected):
            restored = _restore_dots(part).strip()
            if restored:
                sentences.append(restored)
    return sentences
