"""
Token Counter for the Chunking Pipeline

Uses tiktoken. The encoding is chosen from the configured tokenizer model
(the chat model for OpenAI/Azure, "gpt-4" for Ollama); model names tiktoken
does not know fall back to cl100k_base.

Usage:
    from chunking.token_counter import count_tokens, split_by_tokens

    n = count_tokens("def main(): pass", model="gpt-4")
    pieces = split_by_tokens(long_text, max_tokens=500)
"""

import tiktoken

DEFAULT_ENCODING = "cl100k_base"
DEFAULT_MODEL = "gpt-4"

# Encoders are expensive to build; one per model name.
_encoders: dict[str, tiktoken.Encoding] = {}


def get_encoder(model: str = DEFAULT_MODEL) -> tiktoken.Encoding:
    """Get or initialize the tiktoken encoder for a model."""
    encoder = _encoders.get(model)
    if encoder is None:
        try:
            encoder = tiktoken.encoding_for_model(model)
        except KeyError:
            encoder = tiktoken.get_encoding(DEFAULT_ENCODING)
        _encoders[model] = encoder
    return encoder


def count_tokens(text: str, model: str = DEFAULT_MODEL) -> int:
    """
    Count the number of tokens in a text string.

    Args:
        text: The text to tokenize.
        model: Tokenizer model name.

    Returns:
        Number of tokens.
    """
    if not text:
        return 0
    return len(get_encoder(model).encode(text, disallowed_special=()))


def count_tokens_batch(texts: list[str], model: str = DEFAULT_MODEL) -> list[int]:
    encoder = get_encoder(model)
    return [len(encoder.encode(t, disallowed_special=())) if t else 0 for t in texts]


def split_by_tokens(text: str, max_tokens: int, model: str = DEFAULT_MODEL) -> list[str]:
    """
    Cut text into consecutive pieces of at most max_tokens tokens.

    Used as the last resort for a single unit that exceeds the chunk budget.
    A decoded slice can re-encode to more tokens than it was cut from, so
    each slice is shortened until it fits.
    """
    if not text:
        return []
    encoder = get_encoder(model)
    tokens = encoder.encode(text, disallowed_special=())
    pieces = []
    start = 0
    while start < len(tokens):
        end = min(start + max_tokens, len(tokens))
        piece = encoder.decode(tokens[start:end])
        while end - start > 1 and count_tokens(piece, model) > max_tokens:
            end -= 1
            piece = encoder.decode(tokens[start:end])
        if piece.strip():
            pieces.append(piece)
        start = end
    return pieces
