"""
Error Taxonomy.

Failures are split into two scopes:

- **File-scoped**: `ConfigurationError` is raised when a file path cannot be
  resolved or the processor is wired incorrectly. It aborts the file.
- **Rule-scoped**: `ParseError`, `TransformError` and `PrintError` are caught at
  the boundary of each stage and converted into `Failure` outcomes. They never
  escape the per-rule loop of the `FileProcessor`.
"""


class InsightsError(Exception):
  """Base class for all errors raised by cst-insights."""


class ConfigurationError(InsightsError):
  """The processor or a file could not be set up for processing."""


class ParseError(InsightsError):
  """The source text could not be lexed or parsed."""


class TransformError(InsightsError):
  """A rule's transformation could not be resolved or crashed while running."""


class PrintError(InsightsError):
  """The working tree could not be printed back to text."""
