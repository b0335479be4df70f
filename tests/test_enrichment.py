"""Tests for ingestion.enrichment: optional LLM enrichers."""

from unittest.mock import MagicMock

from chunking.models import Chunk, SourceDocument
from ingestion.enrichment import ImageAltTextEnricher, SummaryEnricher


def _document(content):
    return SourceDocument(document_id="/p/README.md", path="/p/README.md", content=content)


def _chunk(context=""):
    return Chunk(content="The config loader reads environment variables.",
                 token_count=7, document_id="/p/config.md", context=context)


class TestImageAltTextEnricher:
    def test_fills_empty_alt_text(self):
        chat = MagicMock()
        chat.complete.return_value = "  A diagram of the pipeline  "
        document = _document("Intro\n\n![](docs/pipeline.png)\n\nEnd")

        enriched = ImageAltTextEnricher(chat).process(document)

        assert enriched.content == "Intro\n\n![A diagram of the pipeline](docs/pipeline.png)\n\nEnd"
        assert document.content.count("![]") == 1
        chat.complete.assert_called_once()

    def test_existing_alt_text_untouched(self):
        chat = MagicMock()
        document = _document("![Architecture](arch.png)")
        assert ImageAltTextEnricher(chat).process(document) is document
        chat.complete.assert_not_called()

    def test_failure_keeps_original(self):
        chat = MagicMock()
        chat.complete.side_effect = ConnectionError("down")
        document = _document("![](a.png)")
        assert ImageAltTextEnricher(chat).process(document).content == "![](a.png)"


class TestSummaryEnricher:
    def test_appends_summary_to_context(self):
        chat = MagicMock()
        chat.complete.return_value = "Explains configuration loading."
        enriched = SummaryEnricher(chat).process(_chunk("Config"))
        assert enriched.context == "Config: Explains configuration loading."

    def test_summary_becomes_context(self):
        chat = MagicMock()
        chat.complete.return_value = "Explains configuration loading."
        assert SummaryEnricher(chat).process(_chunk()).context == "Explains configuration loading."

    def test_failure_keeps_chunk(self):
        chat = MagicMock()
        chat.complete.side_effect = RuntimeError("model not found")
        chunk = _chunk("Config")
        assert SummaryEnricher(chat).process(chunk) is chunk

    def test_empty_answer_keeps_chunk(self):
        chat = MagicMock()
        chat.complete.return_value = "   "
        chunk = _chunk("Config")
        assert SummaryEnricher(chat).process(chunk) is chunk
