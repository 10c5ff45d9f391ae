"""
Tests for the parse/clone adapter.
"""

import libcst as cst
import pytest

from cst_insights.core.lexer import render_tokens
from cst_insights.core.outcome import Failure, Success
from cst_insights.core.parser import clone_tree, parse_source, prepare
from cst_insights.errors import ParseError


def test_parse_pairs_reference_and_tokens():
  text = "import os\n\n\ndef f( a ):\n    return   a  # same\n"
  parsed = parse_source(text)

  assert parsed.text == text
  assert parsed.reference.code == text
  assert render_tokens(parsed.tokens) == text


def test_clone_is_structurally_identical_but_independent():
  parsed = parse_source("x = 1\ny = [1, 2]\n")
  working = clone_tree(parsed.reference)

  assert working.deep_equals(parsed.reference)
  assert working is not parsed.reference
  assert working.body[0] is not parsed.reference.body[0]
  assert working.body[1].body[0] is not parsed.reference.body[1].body[0]


def test_mutating_working_tree_leaves_reference_untouched():
  parsed = parse_source("x = 1\n")
  working = clone_tree(parsed.reference)

  working = working.with_changes(body=[cst.parse_statement("y = 2\n")])

  assert working.code == "y = 2\n"
  assert parsed.reference.code == "x = 1\n"
  assert render_tokens(parsed.tokens) == "x = 1\n"


def test_syntax_error_raises_parse_error():
  with pytest.raises(ParseError, match="Syntax error"):
    parse_source("def broken(:\n    pass\n")


def test_prepare_success():
  outcome = prepare("x = 1\n")

  assert isinstance(outcome, Success)
  parsed, working = outcome.value
  assert parsed.reference.code == "x = 1\n"
  assert working.deep_equals(parsed.reference)
  assert working is not parsed.reference


def test_prepare_failure_is_explicit():
  outcome = prepare("x = (\n")

  assert isinstance(outcome, Failure)
  assert isinstance(outcome.error, ParseError)
  assert not outcome.ok
  assert "Syntax error" in outcome.message
