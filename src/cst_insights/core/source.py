"""
Source File Model.

A `SourceFile` is the immutable unit of input for the processor: an absolute,
canonical path plus the raw text read from it. Processing never writes the
file back; the text is read once and parsed afresh for every rule.
"""

from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from cst_insights.errors import ConfigurationError


class SourceFile(BaseModel):
  """
  Immutable snapshot of a file under analysis.
  """

  model_config = ConfigDict(frozen=True)

  path: Path = Field(description="Absolute, canonical location of the file.")
  text: str = Field(description="Raw file content, exactly as read from disk.")

  @classmethod
  def from_path(cls, path: Union[str, Path], encoding: str = "utf-8") -> "SourceFile":
    """
    Resolves `path` to its canonical form and reads the file content.

    Args:
        path: Location of the file, relative or absolute.
        encoding: Text encoding used to decode the file.

    Returns:
        SourceFile: The loaded file.

    Raises:
        ConfigurationError: If the path does not resolve to a readable file.
    """
    try:
      resolved = Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
      raise ConfigurationError(f"Unable to find file {Path(path).name}: {e}") from e

    if not resolved.is_file():
      raise ConfigurationError(f"Unable to find file {Path(path).name}: not a regular file")

    try:
      # newline="" keeps CRLF line endings intact for byte-faithful printing
      with open(resolved, encoding=encoding, newline="") as f:
        text = f.read()
    except (OSError, UnicodeDecodeError) as e:
      raise ConfigurationError(f"Unable to read file {resolved}: {e}") from e

    return cls(path=resolved, text=text)

  @classmethod
  def from_text(cls, path: Union[str, Path], text: str) -> "SourceFile":
    """
    Builds a source file from in-memory content.

    The path does not need to exist; it is only made absolute so that result
    entries carry a stable location.

    Args:
        path: Nominal location of the content.
        text: Raw source text.

    Returns:
        SourceFile: The in-memory file.
    """
    return cls(path=Path(path).absolute(), text=text)

  @property
  def name(self) -> str:
    """The file name without directories."""
    return self.path.name
