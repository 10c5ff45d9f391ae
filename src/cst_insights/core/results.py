"""
Recorded Rule Outcomes.

Change and error records share a single storage shape; only `kind` and the
content differ.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from cst_insights.enums import EntryKind


class ResultEntry(BaseModel):
  """
  Outcome of applying one rule to one file.
  """

  model_config = ConfigDict(frozen=True)

  kind: EntryKind = Field(description="Whether the rule produced a change or failed.")
  file: Path = Field(description="Absolute path of the processed file.")
  diff: str = Field(default="", description="Unified diff of the change. Empty for errors.")
  message: str = Field(description="Human-readable explanation.")

  @classmethod
  def change(cls, file: Path, diff: str, description: str) -> "ResultEntry":
    """
    Builds a change record.

    Args:
        file: Processed file.
        diff: Non-empty unified diff.
        description: The rule's description, prefixed to the diff in the message.

    Returns:
        ResultEntry: The change record.
    """
    return cls(kind=EntryKind.CHANGE, file=file, diff=diff, message=f"{description}\n{diff}")

  @classmethod
  def error(cls, file: Path, reason: str) -> "ResultEntry":
    """
    Builds an error record.

    Args:
        file: Processed file.
        reason: Message of the originating failure.

    Returns:
        ResultEntry: The error record.
    """
    return cls(kind=EntryKind.ERROR, file=file, message=f"[ERROR] Could not process this file, due to: {reason}.")

  @property
  def is_error(self) -> bool:
    return self.kind is EntryKind.ERROR
