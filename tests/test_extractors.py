"""Tests for ingestion.extractors and ingestion.discovery."""

import pytest

from ingestion.discovery import discover_files, parse_patterns
from ingestion.extractors import (
    CSharpExtractor,
    JsonExtractor,
    MarkdownExtractor,
    PlainTextExtractor,
    XmlExtractor,
    YamlExtractor,
    extract_file,
    get_extractor,
)


def _write(tmp_path, name, content):
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Extractor selection
# ---------------------------------------------------------------------------

class TestGetExtractor:
    @pytest.mark.parametrize("name,expected", [
        ("README.md", MarkdownExtractor),
        ("NOTES.MD", MarkdownExtractor),
        ("appsettings.json", JsonExtractor),
        ("App.csproj", XmlExtractor),
        ("build.xml", XmlExtractor),
        ("ci.yml", YamlExtractor),
        ("compose.yaml", YamlExtractor),
        ("Program.cs", CSharpExtractor),
        ("notes.txt", PlainTextExtractor),
        ("Makefile", PlainTextExtractor),
    ])
    def test_by_extension(self, name, expected):
        assert isinstance(get_extractor(name), expected)


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------

class TestMarkdownExtractor:
    def test_metadata(self, tmp_path):
        path = _write(tmp_path, "README.md", (
            "# Title\n\nSome text with a [link](http://example.com).\n\n"
            "## Sub\n\n```py\nx = 1\n```\n"
        ))
        extracted = extract_file(path)
        assert extracted.content.startswith("# Title")
        assert extracted.metadata["title"] == "Title"
        assert extracted.metadata["headers"] == "Title > Sub"
        assert extracted.metadata["header_count"] == "2"
        assert extracted.metadata["code_blocks"] == "1"
        assert extracted.metadata["links"] == "1"
        assert extracted.metadata["file_type"] == "markdown"

    def test_no_headers(self, tmp_path):
        extracted = extract_file(_write(tmp_path, "plain.md", "just text"))
        assert "title" not in extracted.metadata


class TestJsonExtractor:
    def test_object(self, tmp_path):
        extracted = extract_file(_write(tmp_path, "a.json", '{"b": 1, "a": [1, 2]}'))
        assert extracted.metadata["json_type"] == "dict"
        assert extracted.metadata["property_count"] == "2"
        assert extracted.metadata["top_level_keys"] == "b, a"
        assert extracted.content.startswith("{\n  \"b\": 1")

    def test_array(self, tmp_path):
        extracted = extract_file(_write(tmp_path, "a.json", "[1, 2, 3]"))
        assert extracted.metadata["array_length"] == "3"

    def test_invalid_json_kept_verbatim(self, tmp_path):
        extracted = extract_file(_write(tmp_path, "bad.json", "{oops"))
        assert extracted.content == "{oops"
        assert "parse_error" in extracted.metadata


class TestXmlExtractor:
    def test_project_file(self, tmp_path):
        path = _write(tmp_path, "App.csproj", (
            '<Project Sdk="Microsoft.NET.Sdk"><PropertyGroup>'
            "<TargetFramework>net8.0</TargetFramework>"
            "</PropertyGroup></Project>"
        ))
        extracted = extract_file(path)
        assert extracted.metadata["root_element"] == "Project"
        assert extracted.metadata["element_count"] == "3"
        assert extracted.metadata["element_types"] == "Project, PropertyGroup, TargetFramework"

    def test_namespaced_tags(self, tmp_path):
        path = _write(tmp_path, "ns.xml", '<root xmlns="urn:x"><child/></root>')
        assert extract_file(path).metadata["root_element"] == "root"

    def test_invalid_xml(self, tmp_path):
        extracted = extract_file(_write(tmp_path, "bad.xml", "<open>"))
        assert extracted.content == "<open>"
        assert "parse_error" in extracted.metadata


class TestYamlExtractor:
    def test_top_level_keys(self, tmp_path):
        path = _write(tmp_path, "ci.yml", "name: app\nversion: 1\nnested:\n  child: x\n")
        extracted = extract_file(path)
        assert extracted.metadata["top_level_keys"] == "name, version, nested"
        assert extracted.metadata["key_count"] == "3"


class TestCSharpExtractor:
    def test_structure(self, tmp_path):
        path = _write(tmp_path, "Program.cs", (
            "namespace Demo.App\n{\n"
            "    public class Program\n    {\n"
            "        public static void Main(string[] args)\n        {\n        }\n"
            "        private int Add(int a, int b) { return a + b; }\n"
            "    }\n}\n"
        ))
        extracted = extract_file(path)
        assert extracted.metadata["namespace"] == "Demo.App"
        assert extracted.metadata["classes"] == "Program"
        assert extracted.metadata["methods"] == "Main, Add"
        assert extracted.metadata["language"] == "C#"


class TestPlainTextExtractor:
    def test_line_count(self, tmp_path):
        extracted = extract_file(_write(tmp_path, "notes.txt", "a\nb"))
        assert extracted.content == "a\nb"
        assert extracted.metadata["line_count"] == "2"

    def test_byte_order_mark_removed(self, tmp_path):
        path = tmp_path / "bom.txt"
        path.write_bytes(b"\xef\xbb\xbfhello")
        assert extract_file(path).content == "hello"


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

class TestParsePatterns:
    def test_split_and_trim(self):
        assert parse_patterns(" *.md ; ;*.cs") == ["*.md", "*.cs"]

    def test_empty(self):
        assert parse_patterns("") == []


class TestDiscoverFiles:
    @pytest.fixture
    def tree(self, tmp_path):
        _write(tmp_path, "a.md", "a")
        _write(tmp_path, "sub/b.md", "b")
        _write(tmp_path, "sub/c.cs", "c")
        _write(tmp_path, "skip.bin", "x")
        (tmp_path / "folder.md").mkdir()
        return tmp_path

    def test_recursive_union(self, tree):
        files = discover_files(tree, "*.md;*.cs;*.md")
        root = tree.resolve()
        assert files == [root / "a.md", root / "sub" / "b.md", root / "sub" / "c.cs"]

    def test_paths_are_absolute(self, tree, monkeypatch):
        monkeypatch.chdir(tree)
        assert all(p.is_absolute() for p in discover_files(".", "*.md"))

    def test_zero_matches(self, tree):
        assert discover_files(tree, "*.py") == []
