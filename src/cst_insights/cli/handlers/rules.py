"""
Rules Command Handler.

Lists the bundled rules with their descriptions.
"""

from rich.table import Table

from cst_insights.rules import discover_rules
from cst_insights.utils.console import console


def handle_rules() -> int:
  """
  Prints a table of bundled rules.

  Returns:
      int: Exit code (always 0).
  """
  table = Table(title="Bundled Rules")
  table.add_column("Identifier", style="bold magenta")
  table.add_column("Description")

  for identifier, declared in discover_rules().items():
    table.add_row(identifier, declared.description)

  console.print(table)
  return 0
