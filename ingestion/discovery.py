"""
File discovery for ingestion runs.

Patterns are a semicolon-delimited list of glob patterns ("*.cs;*.md"),
each expanded recursively below the root directory. The result is the
deduplicated union in discovery order: pattern by pattern, sorted within
a pattern.
"""

from pathlib import Path

DEFAULT_PATTERNS = "*.cs;*.md;*.txt;*.json;*.yml;*.yaml;*.xml"


def parse_patterns(patterns: str) -> list[str]:
    return [p.strip() for p in (patterns or "").split(";") if p.strip()]


def discover_files(root: str | Path, patterns: str) -> list[Path]:
    """
    Expand every pattern recursively under root.

    Returns:
        Absolute paths of matching regular files. Zero matches is an
        empty list, not an error.
    """
    root_path = Path(root).resolve()
    seen: set[Path] = set()
    files: list[Path] = []

    for pattern in parse_patterns(patterns):
        for path in sorted(root_path.rglob(pattern)):
            if not path.is_file() or path in seen:
                continue
            seen.add(path)
            files.append(path)

    return files
