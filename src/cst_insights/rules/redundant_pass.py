"""
Rule: Redundant Pass.

Removes `pass` statements from blocks that already contain other statements.
A `pass` carrying a comment is kept so that no comment is lost.

Transformation:
    Input:
        def f():
            \"\"\"Doc.\"\"\"
            pass
    Output:
        def f():
            \"\"\"Doc.\"\"\"
"""

import libcst as cst

from cst_insights.rules.base import BundledRule


def _is_bare_pass(stmt: cst.BaseStatement) -> bool:
  if not isinstance(stmt, cst.SimpleStatementLine):
    return False
  if len(stmt.body) != 1 or not isinstance(stmt.body[0], cst.Pass):
    return False
  if stmt.trailing_whitespace.comment is not None:
    return False
  return not any(line.comment is not None for line in stmt.leading_lines)


class RedundantPassTransformer(cst.CSTTransformer):
  """Drops bare `pass` lines from non-trivial indented blocks."""

  def leave_IndentedBlock(self, original_node: cst.IndentedBlock, updated_node: cst.IndentedBlock) -> cst.IndentedBlock:
    kept = [stmt for stmt in updated_node.body if not _is_bare_pass(stmt)]
    if not kept or len(kept) == len(updated_node.body):
      return updated_node
    return updated_node.with_changes(body=kept)


RULE = BundledRule(
  identifier="redundant_pass",
  description="Remove `pass` from blocks that already contain statements.",
  transformer=RedundantPassTransformer,
)
