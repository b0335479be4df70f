"""
Optional LLM enrichment of documents and chunks.

Both enrichers are best-effort: any failure of the completion client is
logged at WARNING and the un-enriched value is kept. They are only wired
in when SOURCECHAT_ENRICHMENT is on.

- ImageAltTextEnricher: document processor, fills empty Markdown image
  alt text ("![](diagram.png)") with a short description
- SummaryEnricher: chunk processor, adds a one-sentence summary of the
  chunk to its context
"""

import re

from chunking.models import Chunk, SourceDocument
from providers.chat import SYSTEM, USER, ChatClient, ChatMessage
from shared.logging_config import get_logger

logger = get_logger(__name__)

_EMPTY_ALT_IMAGE = re.compile(r"!\[\s*\]\(([^)\s]+)(\s+\"[^\"]*\")?\)")

ALT_TEXT_PROMPT = (
    "You write alternative text for images in technical documentation. "
    "Reply with one short phrase (at most 12 words) and nothing else."
)

SUMMARY_PROMPT = (
    "You summarize fragments of a software project for a search index. "
    "Reply with exactly one sentence and nothing else."
)


def _clean(text: str) -> str:
    return " ".join(text.split()).strip().strip('"')


class ImageAltTextEnricher:
    """Fill empty image alt text in Markdown documents."""

    def __init__(self, chat_client: ChatClient, context_chars: int = 300):
        self.chat_client = chat_client
        self.context_chars = context_chars

    def process(self, document: SourceDocument) -> SourceDocument:
        if "![" not in document.content:
            return document

        content = document.content
        enriched = []
        position = 0
        for match in _EMPTY_ALT_IMAGE.finditer(content):
            alt_text = self._describe(match.group(1), content, match.start())
            enriched.append(content[position:match.start()])
            if alt_text:
                enriched.append(f"![{alt_text}]({match.group(1)}{match.group(2) or ''})")
            else:
                enriched.append(match.group(0))
            position = match.end()

        if not enriched:
            return document
        enriched.append(content[position:])
        return document.model_copy(update={"content": "".join(enriched)})

    def _describe(self, target: str, content: str, offset: int) -> str:
        surrounding = content[max(0, offset - self.context_chars):offset + self.context_chars]
        try:
            answer = self.chat_client.complete([
                ChatMessage(role=SYSTEM, content=ALT_TEXT_PROMPT),
                ChatMessage(
                    role=USER,
                    content=f"Image: {target}\n\nSurrounding text:\n{surrounding}",
                ),
            ])
        except Exception as e:
            logger.warning("Alt text enrichment failed for %s: %s", target, e)
            return ""
        return _clean(answer).replace("]", ")").replace("[", "(")


class SummaryEnricher:
    """Add a one-sentence summary of each chunk to its context."""

    def __init__(self, chat_client: ChatClient, max_input_chars: int = 4000):
        self.chat_client = chat_client
        self.max_input_chars = max_input_chars

    def process(self, chunk: Chunk) -> Chunk:
        try:
            answer = self.chat_client.complete([
                ChatMessage(role=SYSTEM, content=SUMMARY_PROMPT),
                ChatMessage(role=USER, content=chunk.content[:self.max_input_chars]),
            ])
        except Exception as e:
            logger.warning(
                "Summary enrichment failed for %s: %s", chunk.key, e
            )
            return chunk

        summary = _clean(answer)
        if not summary:
            return chunk
        context = f"{chunk.context}: {summary}" if chunk.context else summary
        return chunk.model_copy(update={"context": context})
