"""
Interactive query session.

State machine:
    IDLE -> AWAITING_INPUT -> ANSWERING        -> AWAITING_INPUT
                           -> CLEARING_HISTORY -> AWAITING_INPUT
                           -> EXITING

"exit" and "clear" are matched case-insensitively; blank input is
ignored. End of input (Ctrl-D) behaves like "exit".
"""

from enum import Enum
from typing import Callable, Optional

from .context import ConversationContext
from .service import DEFAULT_MAX_RESULTS, QueryService

BANNER = (
    "\n=== SourceChat Interactive Mode ===\n"
    "Ask questions about your codebase. "
    "Type 'exit' to quit, 'clear' to reset conversation.\n"
)
PROMPT = "You: "
EXIT_COMMAND = "exit"
CLEAR_COMMAND = "clear"


class SessionState(str, Enum):
    IDLE = "Idle"
    AWAITING_INPUT = "AwaitingInput"
    ANSWERING = "Answering"
    CLEARING_HISTORY = "ClearingHistory"
    EXITING = "Exiting"


class InteractiveSession:
    def __init__(
        self,
        query_service: QueryService,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
        max_results: int = DEFAULT_MAX_RESULTS,
        context: Optional[ConversationContext] = None,
    ):
        self.query_service = query_service
        self.input_fn = input_fn
        self.output_fn = output_fn
        self.max_results = max_results
        self.context = context or ConversationContext()
        self.state = SessionState.IDLE

    def run(self) -> None:
        self.output_fn(BANNER)

        while self.state is not SessionState.EXITING:
            self.state = SessionState.AWAITING_INPUT
            try:
                line = self.input_fn(PROMPT)
            except EOFError:
                line = EXIT_COMMAND
            self.handle(line)

    def handle(self, line: str) -> SessionState:
        """Process one line of input and return the resulting state."""
        command = (line or "").strip()
        if not command:
            self.state = SessionState.AWAITING_INPUT
            return self.state

        if command.lower() == EXIT_COMMAND:
            self.state = SessionState.EXITING
            self.output_fn("Goodbye!")
            return self.state

        if command.lower() == CLEAR_COMMAND:
            self.state = SessionState.CLEARING_HISTORY
            self.context.clear()
            self.output_fn("Conversation history cleared.\n")
            self.state = SessionState.AWAITING_INPUT
            return self.state

        self.state = SessionState.ANSWERING
        result = self.query_service.query(
            command, max_results=self.max_results, context=self.context
        )
        if result.is_success:
            self.output_fn(f"\nSourceChat: {result.value}\n")
        else:
            self.output_fn(f"Error: {result.error.message}\n")
        self.state = SessionState.AWAITING_INPUT
        return self.state
