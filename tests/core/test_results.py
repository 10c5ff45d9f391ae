"""
Tests for result entry construction.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from cst_insights.core.results import ResultEntry
from cst_insights.enums import EntryKind


def test_change_entry_message_is_description_plus_diff():
  entry = ResultEntry.change(Path("/src/a.py"), "--- Original\n+++ New\n", "Use one space.")

  assert entry.kind is EntryKind.CHANGE
  assert entry.file == Path("/src/a.py")
  assert entry.diff == "--- Original\n+++ New\n"
  assert entry.message == "Use one space.\n--- Original\n+++ New\n"
  assert not entry.is_error


def test_error_entry_message():
  entry = ResultEntry.error(Path("/src/a.py"), "Syntax error: bad input")

  assert entry.kind is EntryKind.ERROR
  assert entry.diff == ""
  assert entry.message == "[ERROR] Could not process this file, due to: Syntax error: bad input."
  assert entry.is_error


def test_entries_share_storage_shape():
  change = ResultEntry.change(Path("/a.py"), "d", "m")
  error = ResultEntry.error(Path("/a.py"), "e")
  assert set(change.model_dump()) == set(error.model_dump())


def test_entries_are_frozen():
  entry = ResultEntry.error(Path("/a.py"), "e")
  with pytest.raises(ValidationError):
    entry.message = "changed"
