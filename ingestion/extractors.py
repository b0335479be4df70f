"""
File Content Extractors

Turn a discovered file into text plus a small metadata dict. The first
extractor whose can_extract() accepts the path wins; PlainTextExtractor
accepts everything and always comes last.

Registry order:
    Markdown  -> title, header trail, code block and link counts
    JSON      -> pretty-printed content, top-level keys (invalid JSON is
                 kept verbatim with a parse_error entry)
    XML       -> root element, element count and types
    YAML      -> top-level keys
    C#        -> namespace, classes, methods
    PlainText -> line count

Usage:
    from ingestion.extractors import extract_file

    extracted = extract_file("docs/README.md")
    extracted.metadata["title"]
"""

import json
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class ExtractedContent:
    content: str
    metadata: dict[str, str] = field(default_factory=dict)


class FileContentExtractor:
    """Interface for per-file-type extraction."""

    extensions: tuple[str, ...] = ()

    def can_extract(self, path: str | Path) -> bool:
        return Path(path).suffix.lower() in self.extensions

    def extract(self, path: str | Path) -> ExtractedContent:
        raise NotImplementedError

    @staticmethod
    def _read(path: str | Path) -> str:
        return Path(path).read_text(encoding="utf-8-sig")


class MarkdownExtractor(FileContentExtractor):
    extensions = (".md", ".markdown")

    _HEADER = re.compile(r"^#{1,6}\s+(.+)$", re.MULTILINE)
    _CODE_BLOCK = re.compile(r"```[\s\S]*?```")
    _LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")

    def extract(self, path: str | Path) -> ExtractedContent:
        content = self._read(path)
        metadata: dict[str, str] = {}

        headers = [h.strip() for h in self._HEADER.findall(content)]
        if headers:
            metadata["headers"] = " > ".join(headers[:5])
            metadata["header_count"] = str(len(headers))
            metadata["title"] = headers[0]

        code_blocks = len(self._CODE_BLOCK.findall(content))
        if code_blocks:
            metadata["code_blocks"] = str(code_blocks)

        links = len(self._LINK.findall(content))
        if links:
            metadata["links"] = str(links)

        metadata["file_type"] = "markdown"
        metadata["language"] = "Markdown"
        return ExtractedContent(content, metadata)


class JsonExtractor(FileContentExtractor):
    extensions = (".json",)

    def extract(self, path: str | Path) -> ExtractedContent:
        content = self._read(path)
        metadata = {"file_type": "json", "language": "JSON"}

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            metadata["parse_error"] = str(e)
            return ExtractedContent(content, metadata)

        metadata["json_type"] = type(data).__name__
        if isinstance(data, dict):
            metadata["property_count"] = str(len(data))
            metadata["top_level_keys"] = ", ".join(list(data)[:10])
        elif isinstance(data, list):
            metadata["array_length"] = str(len(data))

        pretty = json.dumps(data, indent=2, ensure_ascii=False)
        return ExtractedContent(pretty, metadata)


class XmlExtractor(FileContentExtractor):
    extensions = (".xml", ".csproj", ".props", ".targets", ".config")

    def extract(self, path: str | Path) -> ExtractedContent:
        content = self._read(path)
        metadata = {"file_type": "xml", "language": "XML"}

        try:
            root = ET.fromstring(content)
        except ET.ParseError as e:
            metadata["parse_error"] = str(e)
            return ExtractedContent(content, metadata)

        elements = list(root.iter())
        metadata["root_element"] = _local_name(root.tag)
        metadata["element_count"] = str(len(elements))
        unique = sorted({_local_name(el.tag) for el in elements})
        metadata["element_types"] = ", ".join(unique[:10])
        return ExtractedContent(content, metadata)


class YamlExtractor(FileContentExtractor):
    extensions = (".yml", ".yaml")

    _TOP_LEVEL_KEY = re.compile(r"^([A-Za-z_][\w.-]*)\s*:", re.MULTILINE)

    def extract(self, path: str | Path) -> ExtractedContent:
        content = self._read(path)
        metadata: dict[str, str] = {}

        keys = list(dict.fromkeys(self._TOP_LEVEL_KEY.findall(content)))
        if keys:
            metadata["top_level_keys"] = ", ".join(keys[:10])
            metadata["key_count"] = str(len(keys))

        metadata["file_type"] = "yaml"
        metadata["language"] = "YAML"
        return ExtractedContent(content, metadata)


class CSharpExtractor(FileContentExtractor):
    extensions = (".cs",)

    _NAMESPACE = re.compile(r"namespace\s+([\w.]+)")
    _TYPE = re.compile(
        r"(?:public|private|protected|internal|static)?\s*(?:partial\s+)?"
        r"(?:class|interface|struct|enum|record)\s+(\w+)"
    )
    _METHOD = re.compile(
        r"(?:public|private|protected|internal|static|virtual|override|async)\s+"
        r"[\w<>\[\],?]+\s+(\w+)\s*\([^)]*\)"
    )

    def extract(self, path: str | Path) -> ExtractedContent:
        content = self._read(path)
        metadata: dict[str, str] = {}

        namespace = self._NAMESPACE.search(content)
        if namespace:
            metadata["namespace"] = namespace.group(1)

        types = list(dict.fromkeys(self._TYPE.findall(content)))
        if types:
            metadata["classes"] = ", ".join(types)

        methods = list(dict.fromkeys(self._METHOD.findall(content)))
        if methods:
            metadata["methods"] = ", ".join(methods[:10])
            metadata["method_count"] = str(len(methods))

        metadata["file_type"] = "csharp"
        metadata["language"] = "C#"
        return ExtractedContent(content, metadata)


class PlainTextExtractor(FileContentExtractor):
    """Fallback for every other text file."""

    def can_extract(self, path: str | Path) -> bool:
        return True

    def extract(self, path: str | Path) -> ExtractedContent:
        content = self._read(path)
        metadata = {
            "line_count": str(len(content.split("\n"))),
            "file_type": "text",
            "language": "Plain Text",
        }
        return ExtractedContent(content, metadata)


def _local_name(tag: str) -> str:
    # "{namespace}name" -> "name"
    return tag.rsplit("}", 1)[-1]


DEFAULT_EXTRACTORS: tuple[FileContentExtractor, ...] = (
    MarkdownExtractor(),
    JsonExtractor(),
    XmlExtractor(),
    YamlExtractor(),
    CSharpExtractor(),
    PlainTextExtractor(),
)


def get_extractor(
    path: str | Path,
    extractors: Optional[tuple[FileContentExtractor, ...]] = None,
) -> FileContentExtractor:
    for extractor in extractors or DEFAULT_EXTRACTORS:
        if extractor.can_extract(path):
            return extractor
    return PlainTextExtractor()


def extract_file(
    path: str | Path,
    extractors: Optional[tuple[FileContentExtractor, ...]] = None,
) -> ExtractedContent:
    """Extract a file with the first matching extractor."""
    return get_extractor(path, extractors).extract(path)
