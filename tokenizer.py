"""
Tokenizer implementations.
Supports character-level, word-level and a simplified BPE (Byte Pair Encoding)
tokenizer, all sharing the reserved-token Vocabulary from vocabulary.py.

Usage:
    # Character tokenizer
    tokenizer = CharacterTokenizer.train(corpus)

    # Word tokenizer (frequency ranked, capped)
    tokenizer = WordTokenizer.train(corpus, max_vocab_size=5000)

    # BPE tokenizer
    tokenizer = BPETokenizer.train(corpus, num_merges=100)

    # Encode/decode
    tokens = tokenizer.encode("Hello world")
    text = tokenizer.decode(tokens)

© 2026
"""

import re
from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, NamedTuple

from vocabulary import (
    END_ID,
    START_ID,
    Vocabulary,
    VocabularyBuilder,
    SPECIAL_TOKENS,
    build_vocabulary,
)

DEFAULT_MAX_VOCAB_SIZE = 10000
DEFAULT_NUM_MERGES = 100

# A run of word characters, or one character that is neither word nor space
_WORD_PATTERN = re.compile(r'\w+|[^\w\s]')


def segment_words(text: str) -> list[str]:
    """
    Split text into lower-cased word and punctuation units.

    Whitespace only separates units and is dropped, so it cannot be
    reconstructed from the result.

    >>> segment_words("Hey, I am here!")
    ['hey', ',', 'i', 'am', 'here', '!']
    """
    return _WORD_PATTERN.findall(text.lower())


def _check_int(name: str, value, minimum: int) -> int:
    """Validate an integer knob before any build work starts."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


def _as_corpus(corpus: Iterable[str] | str) -> Iterable[str]:
    # A bare string is one document, not a sequence of one-character documents
    if isinstance(corpus, str):
        return [corpus]
    return corpus


class BaseTokenizer(ABC):
    """
    Abstract base class for tokenizers.

    Subclasses build a Vocabulary from a corpus and describe how text is
    split into units (`_split`) and how decoded tokens are joined
    (`separator`). Encoding and decoding are shared.
    """

    separator = ''

    def __init__(self):
        self._vocab: Vocabulary | None = None

    @property
    @abstractmethod
    def type(self) -> str:
        """Return tokenizer type identifier."""
        pass

    @abstractmethod
    def build_vocabulary(self, corpus: Iterable[str], verbose: bool = True) -> None:
        """Build the vocabulary from a corpus, replacing any previous state."""
        pass

    @abstractmethod
    def _split(self, text: str) -> list[str]:
        """Split text into the units looked up in the vocabulary."""
        pass

    @classmethod
    def train(cls, corpus: Iterable[str], verbose: bool = True, **kwargs) -> 'BaseTokenizer':
        """
        Construct a tokenizer and build its vocabulary in one step.

        Args:
            corpus: Ordered training strings
            verbose: Print a build summary
            **kwargs: Constructor options (max_vocab_size, num_merges)

        Returns:
            Built tokenizer
        """
        tokenizer = cls(**kwargs)
        tokenizer.build_vocabulary(corpus, verbose=verbose)
        return tokenizer

    @property
    def is_built(self) -> bool:
        return self._vocab is not None

    @property
    def vocabulary(self) -> Vocabulary:
        if self._vocab is None:
            raise RuntimeError(
                f"{self.__class__.__name__} has no vocabulary. Call build_vocabulary() first."
            )
        return self._vocab

    @property
    def vocab_size(self) -> int:
        """Return vocabulary size, reserved tokens included."""
        return len(self.vocabulary)

    def encode(self, text: str, add_special_tokens: bool = False) -> list[int]:
        """
        Convert text to a list of token IDs.

        Units missing from the vocabulary map to the UNK ID.

        Args:
            text: Input text
            add_special_tokens: Wrap the result in START ... END
        """
        vocab = self.vocabulary
        ids = [vocab.get_id(unit) for unit in self._split(text)]
        if add_special_tokens:
            ids = [START_ID] + ids + [END_ID]
        return ids

    def decode(self, tokens: Iterable[int], skip_special_tokens: bool = False) -> str:
        """
        Convert a list of token IDs to text.

        IDs missing from the vocabulary render as '<UNK>'.

        Args:
            tokens: Token IDs
            skip_special_tokens: Drop PAD/UNK/START/END IDs before rendering
        """
        vocab = self.vocabulary
        if skip_special_tokens:
            tokens = [t for t in tokens if not vocab.is_special(t)]
        return self.separator.join(vocab.get_token(t) for t in tokens)


class CharacterTokenizer(BaseTokenizer):
    """
    Character-level tokenizer.

    Maps each unique code point in the corpus to an integer ID, in the order
    code points are first seen. Decoding is exact for any text made only of
    known code points.
    """

    @property
    def type(self) -> str:
        return 'char'

    def build_vocabulary(self, corpus: Iterable[str], verbose: bool = True) -> None:
        self._vocab = build_vocabulary(_as_corpus(corpus), unit_fn=list)
        if verbose:
            print(f"Character vocabulary built: {self.vocab_size} tokens")

    def _split(self, text: str) -> list[str]:
        return list(text)


class WordTokenizer(BaseTokenizer):
    """
    Word-level tokenizer.

    Keeps the most frequent word/punctuation units of the corpus, at most
    `max_vocab_size` entries including the reserved tokens. Decoding joins
    tokens with single spaces, so original spacing is not reproduced.
    """

    separator = ' '

    def __init__(self, max_vocab_size: int = DEFAULT_MAX_VOCAB_SIZE):
        """
        Args:
            max_vocab_size: Vocabulary cap, reserved tokens included (>= 4)
        """
        super().__init__()
        self.max_vocab_size = _check_int('max_vocab_size', max_vocab_size, len(SPECIAL_TOKENS))

    @property
    def type(self) -> str:
        return 'word'

    def build_vocabulary(self, corpus: Iterable[str], verbose: bool = True) -> None:
        word_frequency = Counter()
        for text in _as_corpus(corpus):
            word_frequency.update(segment_words(text))

        # sorted() is stable and Counter keeps first-seen order, so ties
        # stay in corpus order
        ranked = sorted(word_frequency.items(), key=lambda kv: kv[1], reverse=True)
        ranked = ranked[:self.max_vocab_size - len(SPECIAL_TOKENS)]

        builder = VocabularyBuilder()
        builder.update(word for word, _ in ranked)
        self._vocab = builder.build()

        if verbose:
            print(f"Word vocabulary built: {self.vocab_size} tokens "
                  f"({len(word_frequency)} distinct words seen)")

    def _split(self, text: str) -> list[str]:
        return segment_words(text)


class MergeRule(NamedTuple):
    """One learned BPE merge: (first, second) -> merged."""
    first: str
    second: str
    merged: str


def _count_pairs(words: list[tuple[list[str], int]]) -> Counter:
    """
    Count adjacent unit pairs across all words.

    Args:
        words: (units, frequency) for each distinct word, in corpus order

    Returns:
        Counter of (unit_a, unit_b) -> count, keyed in first-encountered order
    """
    counts = Counter()
    for units, freq in words:
        for pair in zip(units, units[1:]):
            counts[pair] += freq
    return counts


def _merge_units(units: list[str], rule: MergeRule) -> list[str]:
    """Replace every non-overlapping (first, second) pair, left to right."""
    result = []
    i = 0
    while i < len(units):
        if i < len(units) - 1 and units[i] == rule.first and units[i + 1] == rule.second:
            result.append(rule.merged)
            i += 2
        else:
            result.append(units[i])
            i += 1
    return result


class BPETokenizer(BaseTokenizer):
    """
    Simplified Byte Pair Encoding (BPE) tokenizer.

    Starts from the characters of whitespace-separated corpus words and
    repeatedly merges the most frequent adjacent pair into a new token,
    recording each merge in learning order. Encoding replays the merges in
    that order over the whole input text.

    Ties between equally frequent pairs go to the pair met first while
    scanning the corpus, so training is deterministic for a given corpus
    order.

    A merge can rebuild the string of a reserved token (a corpus containing
    '<PAD>' eventually learns '<PAD>'). It then shares the reserved ID, so
    decode(..., skip_special_tokens=True) drops that corpus text as well.
    """

    def __init__(self, num_merges: int = DEFAULT_NUM_MERGES):
        """
        Args:
            num_merges: Maximum number of merge rules to learn (>= 0)
        """
        super().__init__()
        self.num_merges = _check_int('num_merges', num_merges, 0)
        self._merges: tuple[MergeRule, ...] = ()

    @property
    def type(self) -> str:
        return 'bpe'

    @property
    def merges(self) -> tuple[MergeRule, ...]:
        """Learned merge rules in the order they were learned."""
        return self._merges

    def build_vocabulary(self, corpus: Iterable[str], verbose: bool = True) -> None:
        # Repeated words are collapsed; Counter keeps first-seen order so the
        # pair scan meets pairs in the same order as a scan of every word
        word_counts = Counter()
        for text in _as_corpus(corpus):
            word_counts.update(text.split())

        builder = VocabularyBuilder()
        for word in word_counts:
            builder.update(word)

        words = [(list(word), freq) for word, freq in word_counts.items()]
        merges = []

        for i in range(self.num_merges):
            pair_counts = _count_pairs(words)
            if not pair_counts:
                if verbose:
                    print(f"  No more pairs to merge at iteration {i}")
                break

            # most_common(1) is max(), which keeps the first of equal counts
            (first, second), count = pair_counts.most_common(1)[0]
            rule = MergeRule(first, second, first + second)
            merges.append(rule)
            builder.add(rule.merged)

            words = [(_merge_units(units, rule), freq) for units, freq in words]

            if verbose and ((i + 1) % max(1, self.num_merges // 10) == 0 or i == self.num_merges - 1):
                print(f"  Merge {i + 1}/{self.num_merges}: "
                      f"{rule.first!r} + {rule.second!r} -> {rule.merged!r} (count={count})")

        self._merges = tuple(merges)
        self._vocab = builder.build()

        if verbose:
            print(f"BPE vocabulary built: {self.vocab_size} tokens")
            print(f"Learned {len(self._merges)} merges")

    def _split(self, text: str) -> list[str]:
        # Merges run over the whole text, not per word. Whitespace stays a
        # unit of its own and never matches a learned pair.
        units = list(text)
        for rule in self._merges:
            units = _merge_units(units, rule)
        return units


TOKENIZER_TYPES = ('char', 'word', 'bpe')


@dataclass
class TokenizerConfig:
    """
    Configuration for creating a tokenizer.

    Attributes:
        tokenizer_type: One of 'char', 'word', 'bpe'
        max_vocab_size: Vocabulary cap for the word tokenizer (>= 4)
        num_merges: Merge ceiling for the BPE tokenizer (>= 0)
    """
    tokenizer_type: str = 'char'
    max_vocab_size: int = DEFAULT_MAX_VOCAB_SIZE
    num_merges: int = DEFAULT_NUM_MERGES

    def __post_init__(self):
        if self.tokenizer_type not in TOKENIZER_TYPES:
            raise ValueError(f"Unknown tokenizer type: {self.tokenizer_type}")
        _check_int('max_vocab_size', self.max_vocab_size, len(SPECIAL_TOKENS))
        _check_int('num_merges', self.num_merges, 0)


def create_tokenizer(config: TokenizerConfig) -> BaseTokenizer:
    """
    Create an unbuilt tokenizer from a config.

    Args:
        config: TokenizerConfig

    Returns:
        CharacterTokenizer, WordTokenizer or BPETokenizer
    """
    if config.tokenizer_type == 'word':
        return WordTokenizer(max_vocab_size=config.max_vocab_size)
    elif config.tokenizer_type == 'bpe':
        return BPETokenizer(num_merges=config.num_merges)
    return CharacterTokenizer()
