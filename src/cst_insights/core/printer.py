"""
Format-Preserving Printer.

Reprints a (possibly transformed) working tree using the reference tree and
its paired token stream as the fidelity anchor:

1.  The token stream is checked against the reference tree. A stream lexed from
    different text is rejected with `PrintError`.
2.  The top-level statements of both trees are aligned. Each reference
    statement is mapped to its span in the token text.
3.  Aligned, unchanged statements are emitted from the original token text
    verbatim. Changed or new statements are emitted with LibCST code
    generation, which uses the module's default indentation and newlines for
    freshly constructed nodes.

Module header comments and the trailing footer follow the same rule.
"""

import difflib
from typing import List, Sequence, Tuple

import libcst as cst

from cst_insights.core.lexer import render_tokens
from cst_insights.core.outcome import Failure, Outcome, Success
from cst_insights.core.parser import ParsedSource
from cst_insights.errors import InsightsError, PrintError

# (text, generated) pairs. `generated` is False for verbatim source text.
_Piece = Tuple[str, bool]

_MODULE_SETTINGS = ("encoding", "default_indent", "default_newline", "has_trailing_newline")


class FormatPreservingPrinter:
  """
  Turns a working tree back into source text faithful to the original layout.
  """

  def print(self, working: cst.Module, parsed: ParsedSource) -> str:
    """
    Renders `working`, reusing original text for every untouched statement.

    Args:
        working: The transformed module.
        parsed: The reference tree and token stream the working tree was
            cloned from.

    Returns:
        str: The printed source.

    Raises:
        PrintError: If the token stream is not paired with the reference tree.
    """
    original = render_tokens(parsed.tokens)
    if original != parsed.text:
      raise PrintError("Token stream does not match the source text it is paired with")

    reference = parsed.reference
    prefix = self._dropped_prefix(reference, original)

    # A changed module setting affects codegen of every node.
    if any(getattr(working, name) != getattr(reference, name) for name in _MODULE_SETTINGS):
      return prefix + working.code

    spans, tail_start = self._reference_spans(reference, original, len(prefix))
    ref_header_end = spans[0][0] if spans else tail_start

    pieces: List[_Piece] = [(prefix, False)]
    pieces.append(
      self._reuse_or_render(working, working.header, reference, reference.header, original[len(prefix) : ref_header_end])
    )
    pieces.extend(self._print_body(working, reference, original, spans))
    pieces.append(self._reuse_or_render(working, working.footer, reference, reference.footer, original[tail_start:]))

    return self._join(pieces, working)

  @staticmethod
  def _dropped_prefix(reference: cst.Module, original: str) -> str:
    """Text ahead of the module that LibCST does not keep, such as a byte order mark."""
    code = reference.code
    if len(original) > len(code) and original.endswith(code):
      return original[: len(original) - len(code)]
    return ""

  def _reference_spans(
    self, reference: cst.Module, original: str, start: int = 0
  ) -> Tuple[List[Tuple[int, int]], int]:
    """
    Locates each reference statement in the original text.

    Args:
        reference: The parsed module.
        original: Text the module was parsed from.
        start: Offset at which the module's own text begins.

    Returns:
        The (start, end) span of every body statement and the offset at which
        the footer begins.
    """
    limit = len(original)
    offset = start + sum(len(reference.code_for_node(line)) for line in reference.header)
    spans: List[Tuple[int, int]] = []

    for stmt in reference.body:
      code = reference.code_for_node(stmt)
      end = min(offset + len(code), limit)
      if original[offset:end] != code[: end - offset]:
        raise PrintError(f"Reference tree does not match its token stream at offset {offset}")
      spans.append((offset, end))
      offset = end

    return spans, min(offset, limit)

  def _print_body(
    self,
    working: cst.Module,
    reference: cst.Module,
    original: str,
    spans: Sequence[Tuple[int, int]],
  ) -> List[_Piece]:
    ref_keys = [reference.code_for_node(stmt) for stmt in reference.body]
    work_keys = [working.code_for_node(stmt) for stmt in working.body]

    pieces: List[_Piece] = []
    matcher = difflib.SequenceMatcher(None, ref_keys, work_keys, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
      if tag == "equal":
        pieces.extend((original[start:end], False) for start, end in spans[i1:i2])
      else:
        pieces.extend((code, True) for code in work_keys[j1:j2])
    return pieces

  def _reuse_or_render(
    self,
    working: cst.Module,
    working_lines: Sequence[cst.EmptyLine],
    reference: cst.Module,
    reference_lines: Sequence[cst.EmptyLine],
    original_text: str,
  ) -> _Piece:
    work_code = "".join(working.code_for_node(line) for line in working_lines)
    ref_code = "".join(reference.code_for_node(line) for line in reference_lines)
    if work_code == ref_code:
      return original_text, False
    return work_code, True

  def _join(self, pieces: List[_Piece], working: cst.Module) -> str:
    # LibCST drops the final newline of a module without one; mirror that for
    # generated text, verbatim text already reflects it.
    if not working.has_trailing_newline:
      for idx in range(len(pieces) - 1, -1, -1):
        text, generated = pieces[idx]
        if not text:
          continue
        if generated and text.endswith(working.default_newline):
          pieces[idx] = (text[: -len(working.default_newline)], generated)
        break
    return "".join(text for text, _ in pieces)


def render(printer: FormatPreservingPrinter, working: cst.Module, parsed: ParsedSource) -> Outcome[str]:
  """
  Runs the print stage for one rule application.

  Args:
      printer: The printer to use.
      working: The transformed module.
      parsed: Reference tree and tokens.

  Returns:
      Outcome: `Success(text)` or `Failure(PrintError)`.
  """
  try:
    return Success(printer.print(working, parsed))
  except InsightsError as e:
    return Failure(e)
  except Exception as e:
    return Failure(PrintError(str(e) or type(e).__name__))
