"""
Tests for unified diff generation and application.
"""

import pytest

from cst_insights.core.differ import NO_NEWLINE_MARKER, UnifiedDiffer, compute_diff
from cst_insights.core.outcome import Success


@pytest.fixture
def differ():
  return UnifiedDiffer()


def test_identical_text_yields_empty_diff(differ):
  assert differ.diff("x = 1\n", "x = 1\n") == ""


def test_diff_headers_and_changed_lines(differ):
  diff = differ.diff("def f():\n    return   1\n", "def f():\n    return 1\n")

  lines = diff.splitlines()
  assert lines[0] == "--- Original"
  assert lines[1] == "+++ New"
  assert lines[2].startswith("@@")
  assert [line for line in lines[3:] if line.startswith(("-", "+"))] == ["-    return   1", "+    return 1"]


def test_missing_final_newline_is_marked(differ):
  diff = differ.diff("a\nb", "a\nc")

  assert f"-b\n{NO_NEWLINE_MARKER}\n" in diff
  assert f"+c\n{NO_NEWLINE_MARKER}\n" in diff


def test_form_feed_does_not_split_lines(differ):
  diff = differ.diff("x = 1\n\x0c\ny = 2\n", "x = 1\n\x0c\ny = 3\n")
  assert NO_NEWLINE_MARKER not in diff


@pytest.mark.parametrize(
  "old,new",
  [
    ("def f():\n    return   1\n", "def f():\n    return 1\n"),
    ("a\nb", "a\nc"),
    ("a\nb", "a\nb\n"),
    ("a\nb\n", "a\nb"),
    ("", "x = 1\n"),
    ("x = 1\n", ""),
    ("1\n2\n3\n4\n5\n6\n7\n8\n9\n10\n", "0\n1\n2\n3\n4\n5\n6\n7\n8\nnine\n10\n"),
    ("a\r\nb\r\n", "a\r\nc\r\n"),
  ],
)
def test_diff_round_trip(differ, old, new):
  """Applying the reported diff to the original reproduces the new text."""
  assert differ.apply(old, differ.diff(old, new)) == new


def test_round_trip_without_context():
  differ = UnifiedDiffer(context_lines=0)
  old = "a\nb\nc\n"
  new = "a\nx\nb\nc\ny\n"

  assert differ.apply(old, differ.diff(old, new)) == new


def test_apply_empty_diff_is_identity(differ):
  assert differ.apply("x = 1\n", "") == "x = 1\n"


def test_apply_rejects_mismatched_context(differ):
  diff = differ.diff("a\nb\n", "a\nc\n")

  with pytest.raises(ValueError, match="does not match"):
    differ.apply("z\nb\n", diff)


def test_apply_rejects_malformed_hunk(differ):
  with pytest.raises(ValueError, match="Malformed"):
    differ.apply("a\n", "--- Original\n+++ New\n@@ nonsense @@\n")


def test_custom_labels():
  differ = UnifiedDiffer(from_label="a/mod.py", to_label="b/mod.py")
  diff = differ.diff("x\n", "y\n")
  assert diff.startswith("--- a/mod.py\n+++ b/mod.py\n")


def test_compute_diff_outcome(differ):
  outcome = compute_diff(differ, "x\n", "y\n")
  assert isinstance(outcome, Success)
  assert outcome.value.startswith("--- Original")
