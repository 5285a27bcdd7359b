import pytest

from compile_replay.util import shell_words


@pytest.mark.parametrize('tokens', [
    [],
    ['-c', '-O2', '-Iinc'],
    ['-DMESSAGE="hello world"', '-I', 'dir with spaces'],
    ["-DQUOTE='single'", 'back\\slash', 'tab\there', 'new\nline'],
    ['', '-DEMPTY=', '$HOME', '*.c', ';'],
])
def test_decode_inverts_encode(tokens):
  assert shell_words.decode(shell_words.encode(tokens)) == tokens


def test_plain_tokens_are_stored_bare():
  assert shell_words.encode(['-c', '-O2', '-Iinc']) == '-c -O2 -Iinc'


def test_tokens_with_whitespace_are_quoted():
  encoded = shell_words.encode(['-I', 'my dir'])
  assert encoded == "-I 'my dir'"


def test_decode_empty_text():
  assert shell_words.decode('') == []
