"""
File Processor.

The `FileProcessor` drives rule application for one file at a time. For every
registered rule, in registration order:

1.  **Exclusion**: Rules whose exclusion predicate accepts the file are skipped
    silently. They never receive an entry for that file.
2.  **Parse & Clone**: The file text is parsed into a fresh reference tree and
    token stream, and the reference tree is deep-cloned into a working tree.
    Nothing is shared between rule applications.
3.  **Transform**: The rule's transformation is resolved from the registry and
    applied to the working tree.
4.  **Print**: The working tree is reprinted, reusing original text for every
    untouched statement.
5.  **Diff & Report**: The printed text is diffed against the file content. A
    non-empty diff becomes a change entry on the rule.

Each stage returns an explicit `Outcome`. A `Failure` at any stage becomes a
single error entry on the rule, and processing moves on to the next rule.
Only a `ConfigurationError` (the file itself cannot be resolved) aborts a file.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from cst_insights.core.differ import UnifiedDiffer, compute_diff
from cst_insights.core.outcome import Failure, Outcome, Success, bind
from cst_insights.core.parser import prepare
from cst_insights.core.printer import FormatPreservingPrinter, render
from cst_insights.core.registry import TransformationRegistry
from cst_insights.core.results import ResultEntry
from cst_insights.core.rule import Rule
from cst_insights.core.source import SourceFile
from cst_insights.core.transform import apply_rule
from cst_insights.errors import ConfigurationError
from cst_insights.utils.console import log_file_rejected, log_rule_failure

logger = logging.getLogger(__name__)

FileInput = Union[str, Path, SourceFile]


@dataclass
class BatchReport:
  """
  Summary of a multi-file run.

  Attributes:
      processed: Files that went through the rule loop, in order.
      rejected: Files aborted with a configuration error, mapped to the reason.
      entries: Every entry produced during the run, in processing order.
  """

  processed: List[Path] = field(default_factory=list)
  rejected: Dict[Path, str] = field(default_factory=dict)
  entries: List[ResultEntry] = field(default_factory=list)


class FileProcessor:
  """
  Applies independent rules to files and records their outcomes on the rules.
  """

  def __init__(
    self,
    registry: TransformationRegistry,
    rules: Optional[Iterable[Rule]] = None,
    printer: Optional[FormatPreservingPrinter] = None,
    differ: Optional[UnifiedDiffer] = None,
  ) -> None:
    """
    Args:
        registry: Read-only lookup used to resolve rule targets.
        rules: Initial rules, applied in the given order.
        printer: Format-preserving printer. A default one is created if None.
        differ: Text differ. A default unified differ is created if None.
    """
    self.registry = registry
    self.printer = printer or FormatPreservingPrinter()
    self.differ = differ or UnifiedDiffer()
    self._rules: List[Rule] = []
    for rule in rules or ():
      self.add_rule(rule)

  def add_rule(self, rule: Rule) -> None:
    """
    Registers a rule. Must happen before files are processed.

    Args:
        rule: The rule to append.

    Raises:
        ConfigurationError: If `rule` is not a `Rule`.
    """
    if not isinstance(rule, Rule):
      raise ConfigurationError(f"Unable to add {type(rule).__name__}, not a Rule instance")
    self._rules.append(rule)

  @property
  def rules(self) -> Sequence[Rule]:
    """Registered rules in registration order."""
    return tuple(self._rules)

  def process_file(self, file: FileInput) -> List[ResultEntry]:
    """
    Runs every non-excluded rule against one file.

    Args:
        file: A path to load, or an already loaded `SourceFile`.

    Returns:
        List[ResultEntry]: Entries appended to rules for this file, in rule order.

    Raises:
        ConfigurationError: If the path cannot be resolved to a readable file.
    """
    source = file if isinstance(file, SourceFile) else SourceFile.from_path(file)
    if not source.path.is_absolute():
      raise ConfigurationError(f"Unable to find file {source.name}: path is not absolute")

    produced: List[ResultEntry] = []
    for rule in self._rules:
      if rule.is_excluded(source):
        logger.debug(f"Skipping rule '{rule.name}' for excluded file {source.path}")
        continue

      entry = self._apply(rule, source)
      if entry is not None:
        rule.add_entry(entry)
        produced.append(entry)

    return produced

  def process_files(self, files: Iterable[FileInput]) -> BatchReport:
    """
    Processes several files sequentially.

    A file that cannot be resolved is logged and recorded as rejected; the
    remaining files are still processed.

    Args:
        files: Paths or loaded source files.

    Returns:
        BatchReport: What was processed, rejected and produced.
    """
    report = BatchReport()
    for file in files:
      try:
        source = file if isinstance(file, SourceFile) else SourceFile.from_path(file)
        entries = self.process_file(source)
      except ConfigurationError as e:
        path = file.path if isinstance(file, SourceFile) else Path(file)
        log_file_rejected(path, str(e))
        report.rejected[path] = str(e)
        continue
      report.processed.append(source.path)
      report.entries.extend(entries)
    return report

  def _apply(self, rule: Rule, source: SourceFile) -> Optional[ResultEntry]:
    """
    Runs parse, clone, transform, print and diff for one rule.

    Returns:
        The entry to record, or None if the rule left the file unchanged.
    """
    outcome = self._run_stages(rule, source)

    if isinstance(outcome, Failure):
      log_rule_failure(rule.name, source.path, outcome.message)
      return ResultEntry.error(source.path, outcome.message)

    if isinstance(outcome, Success) and outcome.value:
      return ResultEntry.change(source.path, outcome.value, rule.description)

    return None

  def _run_stages(self, rule: Rule, source: SourceFile) -> Outcome[str]:
    prepared = prepare(source.text)
    if isinstance(prepared, Failure):
      return prepared

    parsed, working = prepared.value
    transformed = apply_rule(self.registry, rule, working)
    printed = bind(transformed, lambda tree: render(self.printer, tree, parsed))
    return bind(printed, lambda text: compute_diff(self.differ, source.text, text))
