"""Unit tests for the compare module."""

import pytest

from compare import SAMPLE_CORPUS, SAMPLE_TEXT, compare_tokenizers, main


class TestCompareTokenizers:
    """Tests for compare_tokenizers."""

    def test_reports_every_tokenizer(self):
        results = compare_tokenizers(SAMPLE_CORPUS, SAMPLE_TEXT)
        assert list(results) == ['char', 'word', 'bpe']
        for result in results.values():
            assert result['token_count'] == len(result['ids'])
            assert result['vocab_size'] == result['tokenizer'].vocab_size

    def test_unseen_punctuation_is_unknown(self):
        """'!' never appears in the sample corpus."""
        results = compare_tokenizers(SAMPLE_CORPUS, SAMPLE_TEXT)
        assert results['char']['decoded'] == 'Hey, I am Piyush<UNK>'
        assert results['word']['decoded'] == 'hey , i am piyush <UNK>'

    def test_word_level_is_shortest(self):
        results = compare_tokenizers(SAMPLE_CORPUS, SAMPLE_TEXT)
        assert results['word']['token_count'] == 6
        assert results['char']['token_count'] == len(SAMPLE_TEXT)
        assert results['bpe']['token_count'] < results['char']['token_count']

    def test_accepts_generator_corpus(self):
        results = compare_tokenizers((line for line in SAMPLE_CORPUS), 'am')
        assert results['word']['ids'] == results['word']['tokenizer'].encode('am')
        assert results['bpe']['vocab_size'] > 4


class TestMain:
    """Tests for the command-line entry point."""

    def test_default_run(self, capsys):
        results = main([])
        out = capsys.readouterr().out
        assert '--- COMPARISON ---' in out
        assert set(results) == {'char', 'word', 'bpe'}

    def test_input_file(self, tmp_path, capsys):
        path = tmp_path / 'corpus.txt'
        path.write_text('abc abc\nabd\n', encoding='utf-8')
        results = main(['--input_file', str(path), '--text', 'abc', '--num_merges', '2'])
        assert results['bpe']['token_count'] == 1

    def test_invalid_knob_exits(self, capsys):
        with pytest.raises(SystemExit):
            main(['--num_merges', '-1'])
