"""
Shared vocabulary for the tokenizers.

A Vocabulary is a frozen bijection between token strings and dense integer
IDs. The four reserved tokens always occupy IDs 0-3, so every vocabulary,
even one built from an empty corpus, has at least 4 entries.

Usage:
    vocab = build_vocabulary(["hello", "world"], unit_fn=list)
    vocab.get_id("h")      # 4
    vocab.get_token(4)     # 'h'

© 2026
"""

import operator
from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

PAD_TOKEN = '<PAD>'
UNK_TOKEN = '<UNK>'
START_TOKEN = '<START>'
END_TOKEN = '<END>'

# Order matters: position in this tuple is the reserved ID
SPECIAL_TOKENS = (PAD_TOKEN, UNK_TOKEN, START_TOKEN, END_TOKEN)
PAD_ID, UNK_ID, START_ID, END_ID = range(len(SPECIAL_TOKENS))


@dataclass(frozen=True)
class Vocabulary:
    """
    Immutable token <-> ID mapping.

    The tuple of tokens is the single source of truth: a token's ID is its
    position. Both lookup tables are derived from it once at construction.

    Attributes:
        tokens: Tokens ordered by ID, reserved tokens first
    """
    tokens: tuple[str, ...]
    _token_to_id: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        if self.tokens[:len(SPECIAL_TOKENS)] != SPECIAL_TOKENS:
            raise ValueError(f"Vocabulary must start with reserved tokens {SPECIAL_TOKENS}")
        token_to_id = {tok: i for i, tok in enumerate(self.tokens)}
        if len(token_to_id) != len(self.tokens):
            raise ValueError("Vocabulary tokens must be unique")
        object.__setattr__(self, '_token_to_id', token_to_id)

    @property
    def token_to_id(self) -> dict[str, int]:
        """Return a copy of the token -> ID mapping (insertion ordered)."""
        return dict(self._token_to_id)

    @property
    def id_to_token(self) -> dict[int, str]:
        """Return the ID -> token mapping."""
        return dict(enumerate(self.tokens))

    def __len__(self) -> int:
        return len(self.tokens)

    def __contains__(self, token) -> bool:
        return token in self._token_to_id

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def get_id(self, token: str, default: int = UNK_ID) -> int:
        """Look up a token, returning `default` (UNK) when absent."""
        return self._token_to_id.get(token, default)

    def get_token(self, token_id: int, default: str = UNK_TOKEN) -> str:
        """Look up an ID, returning `default` (the UNK marker) when absent."""
        # operator.index accepts torch/numpy integer scalars as well as int
        try:
            index = operator.index(token_id)
        except TypeError:
            return default
        if 0 <= index < len(self.tokens):
            return self.tokens[index]
        return default

    @staticmethod
    def is_special(token_id: int) -> bool:
        """True for the reserved IDs 0-3."""
        try:
            return 0 <= operator.index(token_id) < len(SPECIAL_TOKENS)
        except TypeError:
            return False


class VocabularyBuilder:
    """
    Accumulates tokens in ID order and freezes them into a Vocabulary.

    The reserved tokens are added on construction. Adding a token that is
    already present is a no-op that returns its existing ID, so reserved IDs
    can never be reassigned.
    """

    def __init__(self):
        self._tokens = list(SPECIAL_TOKENS)
        self._ids = {tok: i for i, tok in enumerate(SPECIAL_TOKENS)}

    def __len__(self) -> int:
        return len(self._tokens)

    def __contains__(self, token) -> bool:
        return token in self._ids

    def add(self, token: str) -> int:
        """Add a token if new and return its ID."""
        token_id = self._ids.get(token)
        if token_id is None:
            token_id = len(self._tokens)
            self._tokens.append(token)
            self._ids[token] = token_id
        return token_id

    def update(self, tokens: Iterable[str]) -> None:
        """Add tokens in iteration order."""
        for tok in tokens:
            self.add(tok)

    def build(self) -> Vocabulary:
        return Vocabulary(tokens=tuple(self._tokens))


def build_vocabulary(corpus: Iterable[str], unit_fn: Callable[[str], Iterable[str]]) -> Vocabulary:
    """
    Build a vocabulary from every unit `unit_fn` yields over the corpus.

    IDs after the reserved tokens follow first-seen order while scanning
    the corpus, so the same corpus always gives the same IDs.

    Args:
        corpus: Ordered strings to scan
        unit_fn: Splits one string into tokens

    Returns:
        Frozen Vocabulary (only the 4 reserved tokens for an empty corpus)
    """
    builder = VocabularyBuilder()
    for text in corpus:
        builder.update(unit_fn(text))
    return builder.build()
