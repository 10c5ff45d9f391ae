"""
Rule: Return Spacing.

Collapses the whitespace between `return` and its value to a single space.

Transformation:
    Input:  `return   1`
    Output: `return 1`
"""

import libcst as cst

from cst_insights.rules.base import BundledRule


class ReturnSpacingTransformer(cst.CSTTransformer):
  """Normalises `whitespace_after_return` on value-returning statements."""

  def leave_Return(self, original_node: cst.Return, updated_node: cst.Return) -> cst.Return:
    if updated_node.value is None:
      return updated_node

    whitespace = updated_node.whitespace_after_return
    if isinstance(whitespace, cst.SimpleWhitespace) and whitespace.value == " ":
      return updated_node

    return updated_node.with_changes(whitespace_after_return=cst.SimpleWhitespace(" "))


RULE = BundledRule(
  identifier="return_spacing",
  description="Use exactly one space between `return` and the returned value.",
  transformer=ReturnSpacingTransformer,
)
