"""
Data preparation for the tokenizers.
Reads a corpus from a custom text file or downloads the Tiny Shakespeare
dataset, builds the chosen tokenizer over it and encodes the corpus into
tensors ready for a language model.

Usage:
    # Default: Tiny Shakespeare with character tokenization
    python data.py

    # Custom corpus, word or BPE tokenization
    python data.py --input_file my_corpus.txt --tokenizer word --max_vocab_size 5000
    python data.py --input_file my_corpus.txt --tokenizer bpe --num_merges 200

© 2026
"""

import argparse
from pathlib import Path
from typing import Iterable

import requests
import torch

from tokenizer import (
    DEFAULT_MAX_VOCAB_SIZE,
    DEFAULT_NUM_MERGES,
    TOKENIZER_TYPES,
    BaseTokenizer,
    TokenizerConfig,
    create_tokenizer,
)
from vocabulary import PAD_ID

SHAKESPEARE_URL = 'https://raw.githubusercontent.com/karpathy/char-rnn/master/data/tinyshakespeare/input.txt'


def download_shakespeare(data_dir='data'):
    """
    Download the Tiny Shakespeare dataset if it doesn't exist.

    Args:
        data_dir: Directory to save the dataset

    Returns:
        Path to the downloaded text file
    """
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    input_file = data_dir / 'input.txt'

    if not input_file.exists():
        print("Downloading Tiny Shakespeare dataset...")
        response = requests.get(SHAKESPEARE_URL, timeout=30)
        response.raise_for_status()

        with open(input_file, 'w', encoding='utf-8') as f:
            f.write(response.text)
        print(f"Downloaded dataset to {input_file}")
    else:
        print(f"Dataset already exists at {input_file}")

    return input_file


def load_custom_file(input_file):
    """
    Validate a custom text file for use as a corpus.

    Args:
        input_file: Path to the input text file

    Returns:
        Path to the text file (validated)

    Raises:
        FileNotFoundError: If the input file doesn't exist
    """
    input_path = Path(input_file)

    if not input_path.exists():
        raise FileNotFoundError(f"Input file not found: {input_file}")

    print(f"Using custom input file: {input_path}")
    return input_path


def read_corpus(text_file) -> list[str]:
    """Read a text file as a corpus of its non-blank lines."""
    with open(text_file, 'r', encoding='utf-8') as f:
        return [line.rstrip('\n') for line in f if line.strip()]


def encode_corpus(tokenizer: BaseTokenizer, corpus: Iterable[str],
                  add_special_tokens: bool = True) -> torch.Tensor:
    """
    Encode every document of a corpus into one flat tensor.

    Args:
        tokenizer: Built tokenizer
        corpus: Documents to encode, in order
        add_special_tokens: Frame each document with START ... END

    Returns:
        1-D torch.long tensor of token IDs
    """
    tokens = []
    for text in corpus:
        tokens.extend(tokenizer.encode(text, add_special_tokens=add_special_tokens))
    return torch.tensor(tokens, dtype=torch.long)


def encode_batch(tokenizer: BaseTokenizer, texts: list[str], max_length: int | None = None,
                 add_special_tokens: bool = True) -> torch.Tensor:
    """
    Encode texts into a right-padded batch.

    Args:
        tokenizer: Built tokenizer
        texts: Texts to encode
        max_length: Truncate each sequence to this many tokens (None = no limit)
        add_special_tokens: Frame each text with START ... END before truncation

    Returns:
        torch.long tensor of shape (len(texts), longest sequence), padded with PAD_ID
    """
    if max_length is not None and max_length < 1:
        raise ValueError(f"max_length must be at least 1, got {max_length}")

    sequences = [tokenizer.encode(text, add_special_tokens=add_special_tokens) for text in texts]
    if max_length is not None:
        sequences = [seq[:max_length] for seq in sequences]

    width = max((len(seq) for seq in sequences), default=0)
    batch = torch.full((len(sequences), width), PAD_ID, dtype=torch.long)
    for row, seq in enumerate(sequences):
        if seq:
            batch[row, :len(seq)] = torch.tensor(seq, dtype=torch.long)
    return batch


def prepare_data(data_dir='data', train_split=0.9, input_file=None,
                 tokenizer_type='char', max_vocab_size=DEFAULT_MAX_VOCAB_SIZE,
                 num_merges=DEFAULT_NUM_MERGES):
    """
    Main function to prepare the dataset.

    Args:
        data_dir: Directory to download Tiny Shakespeare into
        train_split: Fraction of tokens used for training, in (0, 1)
        input_file: Path to custom text file (optional). If None, downloads Shakespeare.
        tokenizer_type: Type of tokenizer to use ('char', 'word' or 'bpe')
        max_vocab_size: Vocabulary cap for the word tokenizer
        num_merges: Merge ceiling for the BPE tokenizer

    Returns:
        Dictionary containing:
            - train_data: Training tensor
            - val_data: Validation tensor
            - vocab_size: Size of vocabulary
            - tokenizer: Tokenizer instance
            - encode: Encoding function
            - decode: Decoding function
    """
    if not 0.0 < train_split < 1.0:
        raise ValueError(f"train_split must be between 0 and 1, got {train_split}")

    # Validate the tokenizer config before touching the network or disk
    config = TokenizerConfig(tokenizer_type=tokenizer_type,
                             max_vocab_size=max_vocab_size,
                             num_merges=num_merges)

    if input_file is not None:
        text_file = load_custom_file(input_file)
    else:
        text_file = download_shakespeare(data_dir)

    print("Reading text file...")
    corpus = read_corpus(text_file)
    print(f"Corpus contains {len(corpus):,} lines, {sum(len(line) for line in corpus):,} characters")

    print(f"\nBuilding {tokenizer_type} tokenizer...")
    tokenizer = create_tokenizer(config)
    tokenizer.build_vocabulary(corpus)

    print("\nEncoding dataset...")
    data = encode_corpus(tokenizer, corpus)
    print(f"Encoded dataset: {len(data):,} tokens")

    n = len(data)
    split_idx = int(train_split * n)
    train_data = data[:split_idx]
    val_data = data[split_idx:]

    if n:
        print(f"\nTraining data: {len(train_data):,} tokens ({len(train_data)/n*100:.1f}%)")
        print(f"Validation data: {len(val_data):,} tokens ({len(val_data)/n*100:.1f}%)")

    return {
        'train_data': train_data,
        'val_data': val_data,
        'vocab_size': tokenizer.vocab_size,
        'tokenizer': tokenizer,
        'encode': tokenizer.encode,
        'decode': tokenizer.decode
    }


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='Prepare tokenized data')
    parser.add_argument('--input_file', type=str, default=None,
                        help='Path to custom text file (default: download Tiny Shakespeare)')
    parser.add_argument('--data_dir', type=str, default='data',
                        help='Directory to download Tiny Shakespeare into (default: data)')
    parser.add_argument('--train_split', type=float, default=0.9,
                        help='Fraction of data for training (default: 0.9)')
    parser.add_argument('--tokenizer', type=str, default='char', choices=TOKENIZER_TYPES,
                        help='Tokenizer type: char, word or bpe (default: char)')
    parser.add_argument('--max_vocab_size', type=int, default=DEFAULT_MAX_VOCAB_SIZE,
                        help=f'Vocabulary cap for the word tokenizer (default: {DEFAULT_MAX_VOCAB_SIZE})')
    parser.add_argument('--num_merges', type=int, default=DEFAULT_NUM_MERGES,
                        help=f'Merge ceiling for the BPE tokenizer (default: {DEFAULT_NUM_MERGES})')

    args = parser.parse_args()

    data = prepare_data(
        data_dir=args.data_dir,
        train_split=args.train_split,
        input_file=args.input_file,
        tokenizer_type=args.tokenizer,
        max_vocab_size=args.max_vocab_size,
        num_merges=args.num_merges
    )

    print("\n" + "="*50)
    print("Testing encode/decode functions:")
    test_tokens = data['train_data'][:50].tolist()
    test_string = data['decode'](test_tokens, skip_special_tokens=True)
    print(f"Sample text: {repr(test_string[:100])}")
    print(f"Encoded length: {len(data['encode'](test_string))} tokens")
