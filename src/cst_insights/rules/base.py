"""
Bundled Rule Declarations.
"""

from dataclasses import dataclass
from typing import Type

import libcst as cst


@dataclass(frozen=True)
class BundledRule:
  """
  Metadata for a transformation shipped with cst-insights.

  Attributes:
      identifier: Registry key, also used as the rule name.
      description: Explanation shown with every reported diff.
      transformer: The LibCST transformer implementing the rule.
  """

  identifier: str
  description: str
  transformer: Type[cst.CSTTransformer]
