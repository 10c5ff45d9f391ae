"""
Lossless Token Stream.

Builds on the standard `tokenize` module, which reports token positions but
drops the whitespace between tokens. The gaps are re-inserted as `WHITESPACE`
trivia so that concatenating every token's text reproduces the source exactly:

    "".join(token.text for token in tokenize_source(text)) == text

The printer relies on this property to emit untouched regions byte-for-byte.
"""

import io
import tokenize
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from cst_insights.enums import TokenKind
from cst_insights.errors import ParseError


@dataclass(frozen=True)
class Token:
  """
  A single lexical unit with its character offsets in the source.

  Attributes:
      kind: Category of the token.
      text: Exact source text covered by the token.
      start: Offset of the first character.
      end: Offset one past the last character.
  """

  kind: TokenKind
  text: str
  start: int
  end: int


TokenStream = Tuple[Token, ...]

BOM = "\ufeff"

_KIND_MAP = {
  tokenize.COMMENT: TokenKind.COMMENT,
  tokenize.NEWLINE: TokenKind.NEWLINE,
  tokenize.NL: TokenKind.NEWLINE,
  tokenize.INDENT: TokenKind.INDENT,
  tokenize.DEDENT: TokenKind.DEDENT,
  tokenize.ENDMARKER: TokenKind.END,
}


def _line_starts(text: str) -> List[int]:
  """Offsets of each physical line as seen by `tokenize`, plus the end of text."""
  starts = [0]
  for line in iter(io.StringIO(text).readline, ""):
    starts.append(starts[-1] + len(line))
  return starts


def _offset(line_starts: Sequence[int], position: Tuple[int, int], limit: int) -> int:
  row, col = position
  if row - 1 >= len(line_starts):
    return limit
  return min(line_starts[row - 1] + col, limit)


def tokenize_source(text: str) -> TokenStream:
  """
  Lexes Python source into a lossless token stream.

  Token positions are clamped to be monotonic, so tokenizer quirks (zero-width
  DEDENTs, f-string parts) never produce overlapping or missing text.

  Args:
      text: Raw Python source.

  Returns:
      TokenStream: Tokens covering every character of `text` in order.

  Raises:
      ParseError: If the tokenizer rejects the source.
  """
  # A leading BOM is not Python source; it is kept as trivia ahead of the body.
  base = len(BOM) if text.startswith(BOM) else 0
  body = text[base:]
  line_starts = _line_starts(body)
  limit = len(text)
  tokens: List[Token] = []
  if base:
    tokens.append(Token(TokenKind.WHITESPACE, BOM, 0, base))
  cursor = base

  try:
    for tok in tokenize.generate_tokens(io.StringIO(body).readline):
      start = max(min(base + _offset(line_starts, tok.start, limit), limit), cursor)
      end = max(min(base + _offset(line_starts, tok.end, limit), limit), start)
      if start > cursor:
        tokens.append(Token(TokenKind.WHITESPACE, text[cursor:start], cursor, start))
      tokens.append(Token(_KIND_MAP.get(tok.type, TokenKind.CODE), text[start:end], start, end))
      cursor = end
  except (tokenize.TokenError, SyntaxError) as e:
    raise ParseError(f"Unable to tokenize source: {e}") from e

  if cursor < limit:
    tokens.append(Token(TokenKind.WHITESPACE, text[cursor:], cursor, limit))

  return tuple(tokens)


def render_tokens(tokens: TokenStream) -> str:
  """
  Concatenates token text back into source.

  Args:
      tokens: A stream produced by `tokenize_source`.

  Returns:
      str: The text the stream was lexed from.
  """
  return "".join(token.text for token in tokens)
