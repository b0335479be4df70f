"""Tests for query.session: interactive session state machine."""

from unittest.mock import MagicMock

import pytest

from query.context import ConversationContext
from query.session import BANNER, InteractiveSession, SessionState
from shared.result import Error, ErrorCode, Result


@pytest.fixture
def query_service():
    service = MagicMock()
    service.query.return_value = Result.success("It is a RAG tool.")
    return service


@pytest.fixture
def output():
    return []


@pytest.fixture
def session(query_service, output):
    return InteractiveSession(query_service, input_fn=MagicMock(), output_fn=output.append)


class TestHandle:
    def test_blank_input_ignored(self, session, query_service):
        assert session.handle("   ") is SessionState.AWAITING_INPUT
        query_service.query.assert_not_called()

    @pytest.mark.parametrize("command", ["exit", "EXIT", "  Exit  "])
    def test_exit(self, session, output, command):
        assert session.handle(command) is SessionState.EXITING
        assert output == ["Goodbye!"]

    def test_clear(self, session, output):
        session.context.add_user_message("q")
        session.context.add_retrieved_chunks(["x"])

        assert session.handle("CLEAR") is SessionState.AWAITING_INPUT
        assert session.context.history == []
        assert session.context.retrieved_chunks == []
        assert output == ["Conversation history cleared.\n"]

    def test_question(self, session, query_service, output):
        assert session.handle("What is it?") is SessionState.AWAITING_INPUT
        query_service.query.assert_called_once_with(
            "What is it?", max_results=5, context=session.context
        )
        assert output == ["\nSourceChat: It is a RAG tool.\n"]

    def test_error_keeps_session_alive(self, session, query_service, output):
        query_service.query.return_value = Result.failure(
            Error.failure(ErrorCode.NO_SEARCH_RESULTS, "Nothing relevant.")
        )
        assert session.handle("What?") is SessionState.AWAITING_INPUT
        assert output == ["Error: Nothing relevant.\n"]


class TestRun:
    def test_loop_until_exit(self, query_service, output):
        lines = iter(["What is it?", "", "exit", "never read"])
        session = InteractiveSession(
            query_service, input_fn=lambda prompt: next(lines), output_fn=output.append,
            max_results=3,
        )

        session.run()

        assert output[0] == BANNER
        assert output[1:] == ["\nSourceChat: It is a RAG tool.\n", "Goodbye!"]
        assert session.state is SessionState.EXITING
        assert query_service.query.call_args.kwargs["max_results"] == 3

    def test_end_of_input_exits(self, query_service, output):
        def no_input(prompt):
            raise EOFError

        session = InteractiveSession(query_service, input_fn=no_input, output_fn=output.append)
        session.run()
        assert output[-1] == "Goodbye!"

    def test_uses_given_context(self, query_service):
        context = ConversationContext()
        session = InteractiveSession(query_service, context=context)
        assert session.context is context
        assert session.state is SessionState.IDLE
