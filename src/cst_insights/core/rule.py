"""
Rule Definitions.

A `Rule` pairs a registry identifier with the metadata needed to report on it:
a description, an exclusion predicate, and the append-only list of result
entries it accumulates while files are processed.
"""

from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from cst_insights.core.results import ResultEntry
from cst_insights.core.source import SourceFile

SkipPredicate = Callable[[SourceFile], bool]


class Rule:
  """
  A named transformation plus its reporting metadata.

  Exclusion is decided by glob patterns (matched against the file path, and
  against each parent directory so that `"tests"` excludes a whole folder) and
  by an optional `skip` callable. Either one excluding the file is enough.
  """

  def __init__(
    self,
    name: str,
    target: Optional[str] = None,
    description: str = "",
    exclude: Iterable[str] = (),
    skip: Optional[SkipPredicate] = None,
  ) -> None:
    """
    Args:
        name: Display name of the rule.
        target: Registry identifier of the transformation. Defaults to `name`.
        description: Explanation prefixed to every reported diff.
        exclude: Glob patterns of paths the rule must not run on.
        skip: Extra exclusion predicate over the source file.
    """
    self.name = name
    self.target = target or name
    self.description = description or name
    self.exclude: Tuple[str, ...] = tuple(exclude)
    self._skip = skip
    self._entries: List[ResultEntry] = []

  def is_excluded(self, source: SourceFile) -> bool:
    """
    Decides whether this rule is skipped for `source`.

    Args:
        source: The file about to be processed.

    Returns:
        bool: True if any exclusion pattern or the skip predicate matches.
    """
    if any(_matches(source.path, pattern) for pattern in self.exclude):
      return True
    return bool(self._skip and self._skip(source))

  def add_entry(self, entry: ResultEntry) -> None:
    """Appends a result entry."""
    self._entries.append(entry)

  @property
  def entries(self) -> Tuple[ResultEntry, ...]:
    """Recorded entries, in file-processing order."""
    return tuple(self._entries)

  @property
  def changes(self) -> Tuple[ResultEntry, ...]:
    return tuple(e for e in self._entries if not e.is_error)

  @property
  def errors(self) -> Tuple[ResultEntry, ...]:
    return tuple(e for e in self._entries if e.is_error)

  def __repr__(self) -> str:
    return f"Rule(name={self.name!r}, target={self.target!r})"


def _matches(path: Path, pattern: str) -> bool:
  pattern = pattern.rstrip("/")
  if not pattern:
    return False
  if path.match(pattern):
    return True
  return any(parent.match(pattern) for parent in path.parents if parent.name)
