"""
Side-by-side comparison of the character, word and BPE tokenizers.
Builds all three over one corpus and reports how each one encodes a test string.

Usage:
    python compare.py
    python compare.py --text "Hey, I am here!" --num_merges 50
    python compare.py --input_file my_corpus.txt --max_vocab_size 500

© 2026
"""

import argparse

from data import load_custom_file, read_corpus
from tokenizer import BPETokenizer, CharacterTokenizer, WordTokenizer

SAMPLE_CORPUS = [
    'Hey There, I am Piyush Garg',
    'I am learning to build tokenizers',
    'Tokenization is the first step in NLP',
    'Hey, how are you doing today?',
    'I am building my own tokenizer',
]

SAMPLE_TEXT = 'Hey, I am Piyush!'


def compare_tokenizers(corpus, text, max_vocab_size=100, num_merges=50, verbose=False):
    """
    Build every tokenizer on `corpus` and encode `text` with each.

    Args:
        corpus: Training strings
        text: Text to encode and decode
        max_vocab_size: Vocabulary cap for the word tokenizer
        num_merges: Merge ceiling for the BPE tokenizer
        verbose: Print build summaries

    Returns:
        Dict keyed by tokenizer type ('char', 'word', 'bpe'), each holding
        'tokenizer', 'ids', 'decoded', 'token_count' and 'vocab_size'
    """
    corpus = list(corpus)
    tokenizers = [
        CharacterTokenizer.train(corpus, verbose=verbose),
        WordTokenizer.train(corpus, verbose=verbose, max_vocab_size=max_vocab_size),
        BPETokenizer.train(corpus, verbose=verbose, num_merges=num_merges),
    ]

    results = {}
    for tok in tokenizers:
        ids = tok.encode(text)
        results[tok.type] = {
            'tokenizer': tok,
            'ids': ids,
            'decoded': tok.decode(ids),
            'token_count': len(ids),
            'vocab_size': tok.vocab_size,
        }
    return results


def print_comparison(results, text):
    titles = {'char': 'CHARACTER-LEVEL', 'word': 'WORD-LEVEL', 'bpe': 'BPE'}
    for i, (kind, result) in enumerate(results.items(), start=1):
        print(f"\n--- {i}. {titles[kind]} TOKENIZER ---")
        print(f"Original: {text}")
        print(f"Tokens: {result['ids']}")
        print(f"Token count: {result['token_count']}")
        print(f"Decoded: {result['decoded']}")
        tok = result['tokenizer']
        if kind == 'bpe':
            print(f"Learned merges sample: {list(tok.merges[:5])}")
        else:
            print(f"Sample vocab: {list(tok.vocabulary.token_to_id.items())[:10]}")

    print("\n--- COMPARISON ---")
    for kind, result in results.items():
        print(f"{titles[kind]:>15s}: {result['token_count']:3d} tokens, vocab size {result['vocab_size']}")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Compare character, word and BPE tokenizers')
    parser.add_argument('--input_file', type=str, default=None,
                        help='Text file whose lines form the corpus (default: built-in sample)')
    parser.add_argument('--text', type=str, default=SAMPLE_TEXT,
                        help=f'Text to tokenize (default: {SAMPLE_TEXT!r})')
    parser.add_argument('--max_vocab_size', type=int, default=100,
                        help='Vocabulary cap for the word tokenizer (default: 100)')
    parser.add_argument('--num_merges', type=int, default=50,
                        help='Merge ceiling for the BPE tokenizer (default: 50)')

    args = parser.parse_args(argv)

    if args.input_file is not None:
        corpus = read_corpus(load_custom_file(args.input_file))
    else:
        corpus = SAMPLE_CORPUS

    print("\n=== CUSTOM TOKENIZER DEMO ===")
    try:
        results = compare_tokenizers(corpus, args.text,
                                     max_vocab_size=args.max_vocab_size,
                                     num_merges=args.num_merges,
                                     verbose=True)
    except ValueError as e:
        parser.error(str(e))
    print_comparison(results, args.text)
    return results


if __name__ == '__main__':
    main()
