"""
Unified Diff Generation and Application.

`UnifiedDiffer.diff` renders the difference between the original and printed
text as a unified diff with `--- Original` / `+++ New` headers. Lines without a
terminating newline are followed by the conventional
`\\ No newline at end of file` marker so that the diff is exact and can be
applied back with `UnifiedDiffer.apply`.
"""

import difflib
import re
from typing import List

from cst_insights.core.outcome import Failure, Outcome, Success
from cst_insights.errors import PrintError

NO_NEWLINE_MARKER = "\\ No newline at end of file"

_HUNK_HEADER = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


def _lines(text: str) -> List[str]:
  """Splits after each \\n only, keeping line endings."""
  return [line for line in re.split(r"(?<=\n)", text) if line]


class UnifiedDiffer:
  """
  Text differ producing and applying unified diffs.
  """

  def __init__(self, context_lines: int = 3, from_label: str = "Original", to_label: str = "New") -> None:
    """
    Args:
        context_lines: Unchanged lines shown around each change.
        from_label: Header label of the original text.
        to_label: Header label of the new text.
    """
    self.context_lines = context_lines
    self.from_label = from_label
    self.to_label = to_label

  def diff(self, old: str, new: str) -> str:
    """
    Computes a unified diff.

    Args:
        old: Original text.
        new: Changed text.

    Returns:
        str: The diff, or an empty string when both texts are identical.
    """
    if old == new:
      return ""

    lines = difflib.unified_diff(
      _lines(old),
      _lines(new),
      fromfile=self.from_label,
      tofile=self.to_label,
      n=self.context_lines,
    )

    out: List[str] = []
    for line in lines:
      if line.endswith("\n"):
        out.append(line)
      else:
        out.append(f"{line}\n{NO_NEWLINE_MARKER}\n")
    return "".join(out)

  def apply(self, old: str, diff: str) -> str:
    """
    Applies a diff produced by `diff` to the original text.

    Args:
        old: The text the diff was computed from.
        diff: A unified diff.

    Returns:
        str: The patched text.

    Raises:
        ValueError: If the diff is malformed or does not match `old`.
    """
    if not diff:
      return old

    source = _lines(old)
    result: List[str] = []
    cursor = 0

    diff_lines = _lines(diff)
    idx = 0
    while idx < len(diff_lines) and not diff_lines[idx].startswith("@@"):
      idx += 1

    while idx < len(diff_lines):
      header = _HUNK_HEADER.match(diff_lines[idx])
      if not header:
        raise ValueError(f"Malformed hunk header: {diff_lines[idx]!r}")
      old_start = int(header.group(1))
      old_len = int(header.group(2)) if header.group(2) is not None else 1
      # An empty old range points at the line *before* the insertion.
      hunk_start = old_start if old_len == 0 else old_start - 1
      if hunk_start < cursor:
        raise ValueError("Overlapping hunks")
      result.extend(source[cursor:hunk_start])
      cursor = hunk_start
      idx += 1

      while idx < len(diff_lines) and not diff_lines[idx].startswith("@@"):
        line = diff_lines[idx]
        idx += 1
        tag, body = line[:1], line[1:]
        if idx < len(diff_lines) and diff_lines[idx].startswith("\\"):
          body = body[:-1] if body.endswith("\n") else body
          idx += 1
        if tag == " ":
          self._expect(source, cursor, body)
          result.append(body)
          cursor += 1
        elif tag == "-":
          self._expect(source, cursor, body)
          cursor += 1
        elif tag == "+":
          result.append(body)
        else:
          raise ValueError(f"Unexpected diff line: {line!r}")

    result.extend(source[cursor:])
    return "".join(result)

  @staticmethod
  def _expect(source: List[str], cursor: int, body: str) -> None:
    if cursor >= len(source) or source[cursor] != body:
      raise ValueError(f"Diff context does not match original text at line {cursor + 1}")


def compute_diff(differ: UnifiedDiffer, old: str, new: str) -> Outcome[str]:
  """
  Runs the diff stage for one rule application.

  Args:
      differ: The differ to use.
      old: Original file content.
      new: Printed content.

  Returns:
      Outcome: `Success(diff_text)` (possibly empty) or `Failure(PrintError)`.
  """
  try:
    return Success(differ.diff(old, new))
  except Exception as e:
    return Failure(PrintError(f"Unable to diff printed output: {e}"))
