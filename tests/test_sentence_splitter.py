"""Tests for chunking.sentence_splitter: regex sentence boundaries."""

from chunking.sentence_splitter import split_paragraphs, split_sentences


class TestSplitSentences:
    def test_simple(self):
        assert split_sentences("SourceChat reads files. It answers questions.") == [
            "SourceChat reads files.",
            "It answers questions.",
        ]

    def test_question_and_exclamation(self):
        assert split_sentences("Is it running? Yes! Start it now.") == [
            "Is it running?",
            "Yes!",
            "Start it now.",
        ]

    def test_empty(self):
        assert split_sentences("") == []
        assert split_sentences("   \n  ") == []
        assert split_sentences(None) == []

    def test_abbreviation_not_split(self):
        assert split_sentences("Ask Dr. Smith about it. He knows.") == [
            "Ask Dr. Smith about it.",
            "He knows.",
        ]

    def test_multi_part_abbreviation_not_split(self):
        result = split_sentences("Use a vector store, e.g. ChromaDB. It is local.")
        assert result == ["Use a vector store, e.g. ChromaDB.", "It is local."]

    def test_versions_and_file_names_not_split(self):
        result = split_sentences("Version 1.2.3 reads config.json on start. Then it runs.")
        assert result == ["Version 1.2.3 reads config.json on start.", "Then it runs."]

    def test_lowercase_continuation_not_split(self):
        assert split_sentences("Call main. then exit.") == ["Call main. then exit."]

    def test_numbered_list(self):
        assert split_sentences("1. Install it. 2. Run it.") == [
            "1. Install it.",
            "2. Run it.",
        ]

    def test_paragraphs_always_split(self):
        assert split_sentences("First paragraph\n\nSecond paragraph") == [
            "First paragraph",
            "Second paragraph",
        ]


class TestSplitParagraphs:
    def test_blank_lines(self):
        assert split_paragraphs("A.\n\nB.\n   \nC.") == ["A.", "B.", "C."]

    def test_keeps_indentation(self):
        text = "Example:\n\n    def main():\n        pass\n"
        assert split_paragraphs(text) == ["Example:", "    def main():\n        pass"]

    def test_empty(self):
        assert split_paragraphs("") == []
