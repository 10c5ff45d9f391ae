"""
Transform Adapter.

Resolves a rule's transformation from the registry and runs it over the
working tree. Every failure mode (unknown identifier, exception during
traversal, a transformation returning something other than a module) becomes
a `Failure(TransformError)`. Partial mutations stay confined to the working
tree owned by this single rule application.
"""

import libcst as cst

from cst_insights.core.outcome import Failure, Outcome, Success
from cst_insights.core.registry import TransformationRegistry
from cst_insights.core.rule import Rule
from cst_insights.errors import TransformError


def apply_rule(registry: TransformationRegistry, rule: Rule, working: cst.Module) -> Outcome[cst.Module]:
  """
  Applies one rule's transformation to the working tree.

  Args:
      registry: Lookup of transformations by identifier.
      rule: The rule being applied.
      working: The deep-cloned tree owned by this application.

  Returns:
      Outcome: `Success(transformed_module)` or `Failure(TransformError)`.
  """
  try:
    transformation = registry.resolve(rule.target)
  except TransformError as e:
    return Failure(e)

  try:
    result = transformation.apply(working)
  except Exception as e:
    detail = str(e) or type(e).__name__
    return Failure(TransformError(f"Rule '{rule.name}' failed: {detail}"))

  if not isinstance(result, cst.Module):
    return Failure(TransformError(f"Rule '{rule.name}' returned {type(result).__name__} instead of a Module"))

  return Success(result)
