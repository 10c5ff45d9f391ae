"""
Parse and Clone Adapter.

Produces, from raw text, the three artifacts a rule application works on:

1. The **reference tree**: the LibCST module as parsed. Never mutated.
2. The **token stream**: lexed from the same text. It is only valid together
   with the reference tree it was produced alongside, so both are bundled in
   a `ParsedSource`.
3. The **working tree**: a deep clone of the reference tree handed to the rule.

The working tree shares no node identity with the reference tree. Identity-based
bookkeeping in a transformer (`original_node is ...` checks, metadata caches)
stays confined to the working tree.
"""

from dataclasses import dataclass
from typing import Tuple

import libcst as cst

from cst_insights.core.lexer import TokenStream, tokenize_source
from cst_insights.core.outcome import Failure, Outcome, Success
from cst_insights.errors import InsightsError, ParseError


@dataclass(frozen=True)
class ParsedSource:
  """
  A reference tree paired with the token stream lexed from the same text.

  Attributes:
      text: The source the pair was produced from.
      reference: Parsed module used as the fidelity anchor.
      tokens: Lossless tokens of `text`.
  """

  text: str
  reference: cst.Module
  tokens: TokenStream


def parse_source(text: str) -> ParsedSource:
  """
  Parses source into a reference tree and its paired token stream.

  Args:
      text: Raw Python source.

  Returns:
      ParsedSource: The mutually consistent tree/token pair.

  Raises:
      ParseError: If the source is not valid Python.
  """
  try:
    reference = cst.parse_module(text)
  except cst.ParserSyntaxError as e:
    raise ParseError(f"Syntax error: {e.message} (line {e.raw_line}, column {e.editor_column})") from e

  return ParsedSource(text=text, reference=reference, tokens=tokenize_source(text))


def clone_tree(module: cst.Module) -> cst.Module:
  """
  Creates a structurally identical, identity-independent copy of a module.

  Args:
      module: The tree to copy.

  Returns:
      cst.Module: A deep copy sharing no nodes with `module`.
  """
  return module.deep_clone()


def prepare(text: str) -> Outcome[Tuple[ParsedSource, cst.Module]]:
  """
  Runs the parse and clone stages for one rule application.

  Args:
      text: Raw Python source.

  Returns:
      Outcome: `Success((parsed, working_tree))` or a `Failure` wrapping a
      `ParseError`.
  """
  try:
    parsed = parse_source(text)
    return Success((parsed, clone_tree(parsed.reference)))
  except InsightsError as e:
    return Failure(e)
  except Exception as e:
    return Failure(ParseError(str(e) or type(e).__name__))
