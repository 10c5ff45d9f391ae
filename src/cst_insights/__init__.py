"""
cst-insights Package.

Reports what independent refactoring rules would change in Python source
files. Each rule is applied to a fresh, deep-cloned LibCST tree; the result is
reprinted without disturbing untouched code and diffed against the original.
Files are never modified.

Usage
-----

.. code-block:: python

    from cst_insights import FileProcessor, Rule, build_default_registry

    rule = Rule("return_spacing", description="Normalise return spacing")
    processor = FileProcessor(build_default_registry(), [rule])
    processor.process_file("app/models.py")

    for entry in rule.entries:
      print(entry.message)
"""

from cst_insights.config import RuntimeConfig
from cst_insights.core import (
  FileProcessor,
  FormatPreservingPrinter,
  RegistryBuilder,
  ResultEntry,
  Rule,
  SourceFile,
  TransformationRegistry,
  UnifiedDiffer,
)
from cst_insights.enums import EntryKind
from cst_insights.errors import ConfigurationError, InsightsError, ParseError, PrintError, TransformError
from cst_insights.rules import build_default_registry, default_rules

__version__ = "0.1.0"

__all__ = [
  "ConfigurationError",
  "EntryKind",
  "FileProcessor",
  "FormatPreservingPrinter",
  "InsightsError",
  "ParseError",
  "PrintError",
  "RegistryBuilder",
  "ResultEntry",
  "Rule",
  "RuntimeConfig",
  "SourceFile",
  "TransformError",
  "TransformationRegistry",
  "UnifiedDiffer",
  "__version__",
  "build_default_registry",
  "default_rules",
]
