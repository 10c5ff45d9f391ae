"""
Main Entry Point for the cst-insights CLI.

Parses arguments and dispatches to the handlers in `cst_insights.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from cst_insights import __version__
from cst_insights.cli.handlers import handle_check, handle_rules


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code. 0 if nothing was reported, 1 if any change or error entry
      was recorded or the run could not be configured.
  """
  parser = argparse.ArgumentParser(description="cst-insights: format-preserving refactoring reports")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CHECK ---
  cmd_check = subparsers.add_parser("check", help="Report what each rule would change")
  cmd_check.add_argument("paths", nargs="+", type=Path, help="Files or directories to analyse")
  cmd_check.add_argument("--rule", dest="rules", action="append", default=None, help="Rule to enable (repeatable)")
  cmd_check.add_argument("--exclude", action="append", default=None, help="Glob pattern to skip (repeatable)")
  cmd_check.add_argument("--show-diff", action="store_true", help="Print the diff of every change")

  # --- Command: RULES ---
  subparsers.add_parser("rules", help="List bundled rules")

  args = parser.parse_args(argv)

  if args.command == "check":
    return handle_check(args.paths, rules=args.rules, exclude=args.exclude, show_diff=args.show_diff)
  if args.command == "rules":
    return handle_rules()

  return 1


if __name__ == "__main__":
  sys.exit(main())
