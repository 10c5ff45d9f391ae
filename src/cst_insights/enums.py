"""
Enumerations for cst-insights.
"""

from enum import Enum


class EntryKind(str, Enum):
  """
  Discriminator for recorded rule outcomes.
  """

  CHANGE = "change"
  ERROR = "error"


class TokenKind(str, Enum):
  """
  Categories of lexical units in a lossless token stream.

  `WHITESPACE` covers trivia that the Python tokenizer does not report
  (spaces between tokens, line continuations, trailing blanks).
  """

  CODE = "code"
  COMMENT = "comment"
  NEWLINE = "newline"
  INDENT = "indent"
  DEDENT = "dedent"
  WHITESPACE = "whitespace"
  END = "end"
