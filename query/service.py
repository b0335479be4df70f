"""
Query Service - retrieval-augmented answering

Flow per question:
1. Open the "data" collection at the configured embedding dimension.
2. Similarity search for the question (top max_results).
3. Format hits as scored fragments and join them into a context block.
4. System prompt = context block + behavioral instructions.
5. With a ConversationContext: prior turns go between the system prompt
   and the question, and the fragments are added to its accumulator.
6. Call the chat client; on success record the turn in the context.

A query either fully succeeds or fails with exactly one typed error;
there are no partial answers.

Usage:
    from query import QueryService, ConversationContext

    service = QueryService(config, store, chat_client)
    result = service.query("Where is the config loaded?")
    print(result.value if result.is_success else result.error.message)
"""

from typing import Optional

from providers.chat import SYSTEM, USER, ChatClient, ChatMessage
from providers.config import SourceChatConfig
from providers.resolver import ProviderProfile, resolve_profile
from shared.exceptions import CollectionNotFoundError, DimensionMismatchError
from shared.logging_config import get_logger
from shared.result import ErrorCode, Result
from vector_store.models import SearchResult
from vector_store.store import VectorStoreGateway

from . import errors
from .context import ConversationContext
from .prompts import build_system_prompt

logger = get_logger(__name__)

DEFAULT_MAX_RESULTS = 5


def format_hit(hit: SearchResult) -> str:
    """Render a hit as "[Score: 0.1234] content" with its source file."""
    text = f"[Score: {hit.score:.4f}] {hit.content}"
    if hit.document_id:
        text += f"\n(Source: {hit.document_id})"
    return text


class QueryService:
    def __init__(
        self,
        config: SourceChatConfig,
        store: VectorStoreGateway,
        chat_client: ChatClient,
        profile: Optional[ProviderProfile] = None,
    ):
        self.config = config
        self.store = store
        self.chat_client = chat_client
        self.profile = profile or resolve_profile(config)

    def query(
        self,
        question: str,
        max_results: int = DEFAULT_MAX_RESULTS,
        context: Optional[ConversationContext] = None,
    ) -> Result[str]:
        """
        Answer a question from the ingested files.

        Args:
            question: Natural-language question.
            max_results: Number of fragments to retrieve.
            context: Conversation of an interactive session (optional).

        Returns:
            Success with the answer text, or a failure with
            CollectionNotFound, CollectionAccessError, DimensionMismatch,
            NoSearchResults or QueryExecutionError.
        """
        if not question or not question.strip():
            return Result.failure(errors.query_execution_error("Question must not be empty"))

        try:
            opened = self.store.open(self.profile.embedding_dimension)
        except Exception as e:
            logger.error("Failed to get collection 'data'", exc_info=True)
            return Result.failure(errors.collection_access_error(str(e)))

        if opened.is_failure:
            if opened.error.code is ErrorCode.COLLECTION_NOT_FOUND:
                return Result.failure(errors.collection_not_found())
            logger.error("%s", opened.error.message)
            return Result.failure(opened.error)

        try:
            hits = self.store.search(question, top_k=max_results)
        except CollectionNotFoundError:
            return Result.failure(errors.collection_not_found())
        except DimensionMismatchError as e:
            logger.error("%s", e.message)
            return Result.failure(e.to_error())
        except Exception as e:
            logger.error("Error during similarity search", exc_info=True)
            return Result.failure(errors.query_execution_error(str(e)))

        if not hits:
            logger.info("No search results for question: %s", question)
            return Result.failure(errors.no_search_results())

        fragments = [format_hit(hit) for hit in hits]
        messages = [ChatMessage(role=SYSTEM, content=build_system_prompt("\n\n".join(fragments)))]

        if context is not None:
            messages.extend(context.history)
            context.add_retrieved_chunks(fragments)

        messages.append(ChatMessage(role=USER, content=question))

        try:
            answer = self.chat_client.complete(messages)
        except Exception as e:
            logger.error("Error during query execution", exc_info=True)
            return Result.failure(errors.query_execution_error(str(e)))

        if context is not None:
            context.add_user_message(question)
            context.add_assistant_message(answer)

        logger.info("Answered question with %d retrieved fragments", len(hits))
        return Result.success(answer)
