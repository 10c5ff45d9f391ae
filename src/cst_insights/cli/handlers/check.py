"""
Check Command Handler.

Implements `cst-insights check`:
1. Configuration loading (pyproject.toml + CLI overrides).
2. File discovery from the given paths.
3. Rule processing through the `FileProcessor`.
4. Rendering of per-rule results.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from cst_insights.config import RuntimeConfig
from cst_insights.core.processor import FileProcessor
from cst_insights.core.rule import Rule
from cst_insights.errors import ConfigurationError
from cst_insights.rules import build_default_registry
from cst_insights.utils.console import console, log_error, log_info, log_success, log_warning


def collect_files(paths: Iterable[Path], include: Sequence[str]) -> List[Path]:
  """
  Expands directories into the files matching `include`.

  Files given explicitly are kept even if they do not match `include`;
  paths that do not exist are passed through so the processor rejects them.

  Args:
      paths: Files or directories.
      include: Glob patterns of file names collected from directories.

  Returns:
      List[Path]: Files in a stable order, without duplicates.
  """
  found: List[Path] = []
  for path in paths:
    if path.is_dir():
      matches = {item for pattern in include for item in path.rglob(pattern) if item.is_file()}
      found.extend(sorted(matches))
    else:
      found.append(path)
  return list(dict.fromkeys(found))


def handle_check(
  paths: Sequence[Path],
  rules: Optional[List[str]] = None,
  exclude: Optional[List[str]] = None,
  show_diff: bool = False,
) -> int:
  """
  Handles the 'check' command execution.

  Args:
      paths: Files or directories to analyse.
      rules: Rule identifiers overriding the configured set.
      exclude: Extra glob patterns excluded for every rule.
      show_diff: If True, prints the diff of every change entry.

  Returns:
      int: 0 if no rule reported anything, 1 otherwise.
  """
  first = paths[0] if paths else Path.cwd()
  search_path = first if first.is_dir() else first.parent

  try:
    config = RuntimeConfig.load(rules=rules, exclude=exclude, search_path=search_path)
    rule_set = config.create_rules()
  except ConfigurationError as e:
    log_error(escape(str(e)))
    return 1

  files = collect_files(paths, config.include)
  if not files:
    log_warning("No files to analyse.")
    return 0

  log_info(f"Analysing {len(files)} file(s) with {len(rule_set)} rule(s)...")

  processor = FileProcessor(build_default_registry(), rule_set)
  report = processor.process_files(files)

  _print_rule_summary(rule_set, show_diff)

  if report.rejected or report.entries:
    return 1

  log_success(f"No changes suggested for {len(report.processed)} file(s).")
  return 0


def _print_rule_summary(rule_set: Sequence[Rule], show_diff: bool) -> None:
  """Renders one row per rule and, optionally, every diff."""
  table = Table(title="Rule Results")
  table.add_column("Rule", style="bold magenta")
  table.add_column("Changes", justify="right")
  table.add_column("Errors", justify="right")

  for rule in rule_set:
    table.add_row(rule.name, str(len(rule.changes)), str(len(rule.errors)))

  console.print(table)

  for rule in rule_set:
    for entry in rule.entries:
      console.print(f"[bold]{escape(rule.name)}[/bold] {escape(str(entry.file))}")
      if entry.is_error:
        console.print(f"  [red]{escape(entry.message)}[/red]")
      elif show_diff:
        console.print(Syntax(entry.diff, "diff", theme="ansi_dark"))
