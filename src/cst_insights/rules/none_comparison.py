"""
Rule: None Comparison.

Rewrites equality checks against `None` to identity checks (PEP 8).

Transformation:
    Input:  `if value == None:` / `if value != None:`
    Output: `if value is None:` / `if value is not None:`
"""

import libcst as cst
import libcst.matchers as m

from cst_insights.rules.base import BundledRule


class NoneComparisonTransformer(cst.CSTTransformer):
  """Swaps `==`/`!=` for `is`/`is not` when the right operand is `None`."""

  def leave_ComparisonTarget(
    self, original_node: cst.ComparisonTarget, updated_node: cst.ComparisonTarget
  ) -> cst.ComparisonTarget:
    if not m.matches(updated_node.comparator, m.Name("None")):
      return updated_node

    op = updated_node.operator
    if isinstance(op, cst.Equal):
      new_op = cst.Is(whitespace_before=op.whitespace_before, whitespace_after=op.whitespace_after)
    elif isinstance(op, cst.NotEqual):
      new_op = cst.IsNot(whitespace_before=op.whitespace_before, whitespace_after=op.whitespace_after)
    else:
      return updated_node

    return updated_node.with_changes(operator=new_op)


RULE = BundledRule(
  identifier="none_comparison",
  description="Compare to None with `is` / `is not` instead of `==` / `!=`.",
  transformer=NoneComparisonTransformer,
)
