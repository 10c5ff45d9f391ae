"""
Core pipeline: parsing, transformation, format-preserving printing and diffing.
"""

from cst_insights.core.differ import UnifiedDiffer
from cst_insights.core.lexer import Token, TokenStream, render_tokens, tokenize_source
from cst_insights.core.outcome import Failure, Outcome, Success
from cst_insights.core.parser import ParsedSource, clone_tree, parse_source
from cst_insights.core.printer import FormatPreservingPrinter
from cst_insights.core.processor import BatchReport, FileProcessor
from cst_insights.core.registry import RegistryBuilder, Transformation, TransformationRegistry, VisitorTransformation
from cst_insights.core.results import ResultEntry
from cst_insights.core.rule import Rule
from cst_insights.core.source import SourceFile

__all__ = [
  "BatchReport",
  "Failure",
  "FileProcessor",
  "FormatPreservingPrinter",
  "Outcome",
  "ParsedSource",
  "RegistryBuilder",
  "ResultEntry",
  "Rule",
  "SourceFile",
  "Success",
  "Token",
  "TokenStream",
  "Transformation",
  "TransformationRegistry",
  "UnifiedDiffer",
  "VisitorTransformation",
  "clone_tree",
  "parse_source",
  "render_tokens",
  "tokenize_source",
]
