"""Tests for chunking.token_counter: tiktoken wrapper."""

from chunking.token_counter import (
    count_tokens,
    count_tokens_batch,
    get_encoder,
    split_by_tokens,
)


class TestCountTokens:
    def test_empty(self):
        assert count_tokens("") == 0

    def test_simple_text(self):
        assert count_tokens("Hello world") == 2

    def test_longer_text_has_more_tokens(self):
        assert count_tokens("Hello world. " * 20) > count_tokens("Hello world.")

    def test_special_token_text_is_plain_text(self):
        assert count_tokens("<|endoftext|>") > 1

    def test_batch(self):
        assert count_tokens_batch(["Hello world", "", "Hi"]) == [2, 0, 1]


class TestGetEncoder:
    def test_cached(self):
        assert get_encoder("gpt-4") is get_encoder("gpt-4")

    def test_unknown_model_falls_back(self):
        assert get_encoder("llama3.2").name == "cl100k_base"

    def test_known_model(self):
        assert get_encoder("gpt-4").name == "cl100k_base"


class TestSplitByTokens:
    def test_empty(self):
        assert split_by_tokens("", 10) == []

    def test_short_text_unchanged(self):
        assert split_by_tokens("Hello world", 10) == ["Hello world"]

    def test_pieces_within_budget(self):
        text = "The quick brown fox jumps over the lazy dog. " * 50
        pieces = split_by_tokens(text, 16)
        assert len(pieces) > 1
        assert all(count_tokens(p) <= 16 for p in pieces)

