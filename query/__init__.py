"""
Query Module - retrieval-augmented answering over the ingested files

Quick Start:
    from query import QueryService, ConversationContext

    service = QueryService(config, store, chat_client)
    context = ConversationContext()
    result = service.query("What does the ingest command do?", context=context)
"""

from .context import ConversationContext
from .prompts import SYSTEM_PROMPT_TEMPLATE, build_system_prompt
from .service import DEFAULT_MAX_RESULTS, QueryService, format_hit
from .session import InteractiveSession, SessionState

__all__ = [
    "QueryService",
    "ConversationContext",
    "InteractiveSession",
    "SessionState",
    "DEFAULT_MAX_RESULTS",
    "SYSTEM_PROMPT_TEMPLATE",
    "build_system_prompt",
    "format_hit",
]
