"""Pytest configuration and shared fixtures."""

import pytest

from tokenizer import BPETokenizer, CharacterTokenizer, WordTokenizer


@pytest.fixture
def sample_corpus():
    """Small corpus with repeated words and punctuation."""
    return [
        'Hey There, I am Piyush Garg',
        'I am learning to build tokenizers',
        'Tokenization is the first step in NLP',
        'Hey, how are you doing today?',
        'I am building my own tokenizer',
    ]


@pytest.fixture
def char_tokenizer():
    """Character tokenizer built on ['hello', 'world']: h=4 e=5 l=6 o=7 w=8 r=9 d=10."""
    return CharacterTokenizer.train(['hello', 'world'], verbose=False)


@pytest.fixture
def word_tokenizer():
    """Word tokenizer built on a corpus where 'the' is the most frequent unit."""
    return WordTokenizer.train(['the cat', 'the dog. the end'], verbose=False)


@pytest.fixture
def bpe_tokenizer():
    """BPE tokenizer with one merge learned: ('a', 'b') -> 'ab'."""
    return BPETokenizer.train(['ab ab ab', 'ab cd'], verbose=False, num_merges=1)
