"""
Tests for the lossless token stream.
"""

import pytest

from cst_insights.core.lexer import render_tokens, tokenize_source
from cst_insights.enums import TokenKind
from cst_insights.errors import ParseError

SOURCES = [
  "",
  "x = 1\n",
  "x = 1",
  "def f():\n    return   1\n",
  "# header\n\nimport os  # trailing\n\n\nclass A:\n\tpass\n",
  "total = 1 + \\\n    2\n",
  "x = 1\r\ny = 2\r\n",
  "values = [\n  1,\n\n  2,   # two\n]\n",
  'name = f"{value!r:>10} and {{braces}}"\n',
  "if a:\n    if b:\n        pass\n\n# tail comment\n",
  "x = 1   \n\n   \n",
  "\ufeffimport os\n",
]


@pytest.mark.parametrize("source", SOURCES)
def test_token_stream_is_lossless(source):
  """Concatenated token text reproduces the source exactly."""
  tokens = tokenize_source(source)
  assert render_tokens(tokens) == source


@pytest.mark.parametrize("source", SOURCES)
def test_token_offsets_are_contiguous(source):
  """Each token starts where the previous one ended and covers its own text."""
  tokens = tokenize_source(source)
  cursor = 0
  for token in tokens:
    assert token.start == cursor
    assert token.end - token.start == len(token.text)
    cursor = token.end
  assert cursor == len(source)


def test_trivia_and_comments_are_classified():
  tokens = tokenize_source("x  =  1  # note\n")
  kinds = [t.kind for t in tokens if t.text]

  assert TokenKind.COMMENT in kinds
  assert TokenKind.WHITESPACE in kinds
  assert [t.text for t in tokens if t.kind == TokenKind.COMMENT] == ["# note"]
  assert [t.text for t in tokens if t.kind == TokenKind.WHITESPACE] == ["  ", "  ", "  "]


def test_stream_ends_with_end_marker():
  tokens = tokenize_source("x = 1\n")
  assert tokens[-1].kind == TokenKind.END
  assert tokens[-1].text == ""


def test_unterminated_string_raises_parse_error():
  with pytest.raises(ParseError, match="Unable to tokenize"):
    tokenize_source('x = """never closed\n')


def test_byte_order_mark_is_leading_trivia():
  tokens = tokenize_source("\ufeffx = 1\n")

  assert tokens[0].kind == TokenKind.WHITESPACE
  assert tokens[0].text == "\ufeff"
  assert tokens[1].text == "x"
  assert tokens[1].start == 1
